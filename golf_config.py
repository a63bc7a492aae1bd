
"""
Configuration settings for the golf swing coach backend
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Notion Settings
NOTION_API_KEY = os.environ.get('NOTION_API_KEY')
NOTION_DATABASES = {
    'users': os.environ.get('NOTION_DB_USERS_ID'),
    'swing_analysis': os.environ.get('NOTION_DB_SWING_ANALYSIS_ID'),
}
USER_SIGNUP_LIMIT = 20  # first-come signups per cohort

# Server Settings
PORT = int(os.environ.get('PORT', 3000))
MAX_CONTENT_LENGTH = 100 * 1024 * 1024  # 100MB max upload
ALLOWED_EXTENSIONS = {'mov', 'mp4', 'avi', 'mkv'}
CHAT_REPLY_DELAY = float(os.environ.get('CHAT_REPLY_DELAY', 1.0))  # seconds

# Logging Settings
LOG_LEVEL = os.environ.get('GOLF_COACH_LOG_LEVEL', 'INFO')
LOG_FILE = os.environ.get('GOLF_COACH_LOG_FILE', 'logs/golf_coach.log')

# Usage quota per tier (None = unlimited)
DAILY_ANALYSIS_LIMITS = {
    'free': 3,
}
FREE_LEVELS = {'1', 'starter', 'free'}

# Metric heuristics derived from the upload descriptor
ADDRESS_BASE = 35
ADDRESS_SPAN = 25
BALANCE_BASE = 40
BALANCE_SPAN = 60
KEYWORD_ADJUSTMENT = 20
GOOD_KEYWORDS = ('pro', 'good', 'best')
BAD_KEYWORDS = ('bad', 'slice', 'test')

# Weighted tables: 40% Out-In, 40% Neutral, 20% In-Out / 50% Good, 25% Early, 25% Late
SWING_PATH_TABLE = ('In-Out', 'Out-In', 'Out-In', 'Neutral', 'Neutral')
IMPACT_TIMING_TABLE = ('Good', 'Early', 'Late', 'Good')

# Scoring rules
BASE_CONSISTENCY_SCORE = 50
IDEAL_ADDRESS_RANGE = (40, 55)
PRO_BALANCE_THRESHOLD = 80
STABLE_BALANCE_THRESHOLD = 60

# Coach chat
CHAT_SCRIPT_BANK = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'coach_scripts.csv')
CHAT_FALLBACK_REPLY = (
    "Sorry, I'm still learning and can't give you a precise answer to that yet."
)

# Elite-only pro comparison
ELITE_LEVEL = 'Elite'
PRO_COMPARISON_NOTE = "Elite insight: your swing rhythm is a 98% match with Tiger Woods!"

# Radar chart stat offsets relative to the growth-derived base
RADAR_OFFSETS = {
    "power": 10,
    "accuracy": -5,
    "tempo": 5,
    "balance": 0,
    "mental": 2,
}

# Daily missions shown on the dashboard
DAILY_MISSIONS = (
    {"id": 1, "text": "Analyze one swing in the studio", "completed": False},
    {"id": 2, "text": "Ask the AI coach about your slice", "completed": False},
    {"id": 3, "text": "Check in today", "completed": True},
)
ANALYSIS_MISSION_ID = 1
CHAT_MISSION_ID = 2
