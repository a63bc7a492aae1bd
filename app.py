import logging
from datetime import date

from flask import Flask, jsonify, request
from flask_cors import CORS

import golf_config
from coach_chat import CoachChat
from dashboard import MissionStore, radar_stats
from errors import InvalidInput, SignupLimitReached, StorageError
from golf_analyzer import analyze_swing, pro_comparison
from logging_utils import setup_logging
from notion_store import NotionStore, UserNotFound
from swing_models import ArtifactDescriptor
from usage_gate import UsageGate, daily_limit, tier_for_level

logger = logging.getLogger(__name__)


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in golf_config.ALLOWED_EXTENSIONS


def _json_body():
    """Request JSON as a dict; anything else is rejected"""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InvalidInput('Request body must be a JSON object')
    return payload


def _text_field(payload, key, required=True):
    """Stripped string field from a request payload"""
    value = payload.get(key)
    if value is None:
        value = ''
    if not isinstance(value, str):
        raise InvalidInput(f"{key} must be a string")
    value = value.strip()
    if required and not value:
        raise InvalidInput(f"{key} is required")
    return value


def _descriptor_from_request():
    """Upload descriptor plus the userId field, from multipart or JSON"""
    if 'video' in request.files:
        file = request.files['video']
        if file.filename == '':
            raise InvalidInput('No file selected')
        if not allowed_file(file.filename):
            raise InvalidInput('Invalid file type')
        descriptor = ArtifactDescriptor(
            name=file.filename,
            size_bytes=len(file.read()),
            mime_type=file.mimetype or '',
        )
        return descriptor, _text_field(request.form, 'userId')

    payload = _json_body()
    descriptor = ArtifactDescriptor(
        name=payload.get('name'),
        size_bytes=payload.get('sizeBytes'),
        mime_type=payload.get('mimeType'),
    )
    return descriptor, _text_field(payload, 'userId')


def create_app(store=None, usage_store=None, mission_store=None, responder=None, today=date.today):
    setup_logging()
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = golf_config.MAX_CONTENT_LENGTH
    CORS(app)

    store = store if store is not None else NotionStore()
    gate = UsageGate(usage_store)
    missions = mission_store if mission_store is not None else MissionStore()
    responder = responder if responder is not None else CoachChat()

    @app.before_request
    def log_request():
        logger.info("HTTP %s %s from %s", request.method, request.path, request.remote_addr)

    @app.errorhandler(InvalidInput)
    def handle_invalid_input(e):
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(SignupLimitReached)
    def handle_signup_limit(e):
        return jsonify({'error': 'LIMIT_REACHED', 'message': str(e)}), 403

    @app.errorhandler(UserNotFound)
    def handle_user_not_found(e):
        return jsonify({'error': 'User not found'}), 404

    @app.errorhandler(StorageError)
    def handle_storage_error(e):
        logger.error("Storage error: %s", e)
        return jsonify({'error': str(e)}), 502

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'OK', 'message': 'Golf AI System is running'})

    @app.route('/api/users')
    def list_users():
        return jsonify(store.list_users())

    @app.route('/api/users/<user_id>')
    def get_user(user_id):
        return jsonify(store.get_user(user_id))

    @app.route('/api/users', methods=['POST'])
    def create_user():
        name = _text_field(_json_body(), 'name')
        user = store.create_user(name)
        return jsonify({'message': 'User created', 'data': user})

    @app.route('/api/users/<user_id>/level', methods=['PATCH'])
    def update_level(user_id):
        level = _text_field(_json_body(), 'level')
        user = store.update_level(user_id, level)
        return jsonify({'message': 'Level updated', 'data': user})

    @app.route('/api/analyze', methods=['POST'])
    def analyze():
        descriptor, user_id = _descriptor_from_request()
        level = store.get_user(user_id)['level']
        tier = tier_for_level(level)
        day = today()

        decision = gate.admit(user_id, tier, day)
        if not decision.allowed:
            return jsonify({
                'error': 'QUOTA_EXCEEDED',
                'message': 'Free members can analyze 3 swings per day. Upgrade to Pro for unlimited analysis!',
                'usage': {'count': decision.new_count, 'limit': daily_limit(tier)},
            }), 429

        report = analyze_swing(descriptor)
        page = store.save_analysis(user_id, level, report.metrics, report.result)
        missions.complete(user_id, golf_config.ANALYSIS_MISSION_ID, day)

        return jsonify({
            'message': 'Analysis saved successfully',
            'analysisId': page.get('id'),
            'metrics': report.metrics.to_dict(),
            'aiResult': report.result.to_dict(),
            'usage': {'count': decision.new_count, 'limit': daily_limit(tier)},
            'eliteInsight': pro_comparison(level),
        })

    @app.route('/api/chat', methods=['POST'])
    def chat():
        payload = _json_body()
        user_id = _text_field(payload, 'userId', required=False)
        reply = responder.reply(payload.get('message'))
        if user_id:
            missions.complete(user_id, golf_config.CHAT_MISSION_ID, today())
        return jsonify({'reply': reply})

    @app.route('/api/users/<user_id>/dashboard')
    def dashboard(user_id):
        user = store.get_user(user_id)
        day = today()
        return jsonify({
            'user': user,
            'stats': radar_stats(user['growthIndex']),
            'missions': missions.missions_for(user_id, day),
            'progress': missions.progress(user_id, day),
        })

    return app


if __name__ == '__main__':
    notion = NotionStore()
    try:
        notion.describe_users_schema()
    except StorageError as e:
        logger.error("Schema check failed: %s", e)
    create_app(store=notion).run(host='0.0.0.0', port=golf_config.PORT, debug=True)
