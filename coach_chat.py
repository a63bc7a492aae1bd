import logging
import re
import time

import pandas as pd

import golf_config
from errors import InvalidInput

logger = logging.getLogger(__name__)


def keyword_pattern(keywords):
    """Regex matching any keyword; ASCII keywords must start at a word boundary"""
    parts = [
        r'\b' + re.escape(keyword) if keyword.isascii() else re.escape(keyword)
        for keyword in keywords
    ]
    return re.compile('|'.join(parts)) if parts else None


class CoachChat:
    """Scripted golf coach: replies from a keyword script bank"""

    def __init__(self, script_path=None, reply_delay=None):
        self.script_path = script_path or golf_config.CHAT_SCRIPT_BANK
        self.reply_delay = golf_config.CHAT_REPLY_DELAY if reply_delay is None else reply_delay
        self.script_bank = self.load_script_bank()

    def load_script_bank(self):
        """Load the coaching script bank from CSV"""
        df = pd.read_csv(self.script_path, dtype=str, keep_default_na=False)
        scripts = []
        for row in df.to_dict('records'):
            keywords = [k.strip().lower() for k in row['keywords'].split('|') if k.strip()]
            scripts.append({
                'topic': row['topic'],
                'keywords': keywords,
                'pattern': keyword_pattern(keywords),
                'reply': row['reply'],
            })
        logger.info("Loaded %d coach scripts from %s", len(scripts), self.script_path)
        return scripts

    def match(self, message):
        """First script whose keyword appears in the message, or None"""
        if not isinstance(message, str) or not message.strip():
            raise InvalidInput("message must be a non-empty string")
        lowered = message.lower()
        for script in self.script_bank:
            if script['pattern'] and script['pattern'].search(lowered):
                return script
        return None

    def reply(self, message):
        script = self.match(message)
        if self.reply_delay:
            time.sleep(self.reply_delay)  # simulated thinking time
        if script is None:
            logger.debug("No script matched: %r", message)
            return golf_config.CHAT_FALLBACK_REPLY
        logger.debug("Matched coach script %s", script['topic'])
        return script['reply']
