"""
Daily analysis quota per user tier.

check_and_increment() is the pure rule. UsageGate applies it against an injected
store keyed by (user_id, day), so a new calendar day simply starts a new count.
"""

import logging
from collections import namedtuple
from datetime import date

import golf_config
from errors import InvalidInput
from swing_models import UsageRecord, is_int

logger = logging.getLogger(__name__)

GateDecision = namedtuple('GateDecision', ['allowed', 'new_count'])


def tier_for_level(level):
    """Map a user level ("1", "Starter", "Pro", "Elite") to a quota tier"""
    normalized = str(level or '1').strip().lower()
    if normalized in golf_config.FREE_LEVELS:
        return 'free'
    return normalized


def daily_limit(tier):
    """Daily analysis limit for a tier, or None when unlimited"""
    return golf_config.DAILY_ANALYSIS_LIMITS.get(tier)


def check_and_increment(tier, current_count):
    """Decide whether one more analysis is allowed today"""
    if not isinstance(tier, str):
        raise InvalidInput(f"tier must be a string, got {type(tier).__name__}")
    if not is_int(current_count) or current_count < 0:
        raise InvalidInput(f"current_count must be a non-negative integer, got {current_count!r}")

    limit = daily_limit(tier)
    if limit is not None and current_count >= limit:
        return GateDecision(allowed=False, new_count=current_count)
    return GateDecision(allowed=True, new_count=current_count + 1)


class InMemoryUsageStore:
    """Usage counters held in process memory"""

    def __init__(self):
        self._records = {}

    def get(self, user_id, day):
        record = self._records.get((user_id, day))
        return record.count if record else 0

    def set(self, user_id, day, count):
        self._records[(user_id, day)] = UsageRecord(user_id=user_id, day=day, count=count)

    def records(self):
        return list(self._records.values())


class UsageGate:
    def __init__(self, store=None):
        self.store = store if store is not None else InMemoryUsageStore()

    def admit(self, user_id, tier, day=None):
        """Check the quota for (user_id, day) and record the analysis when allowed"""
        if not user_id:
            raise InvalidInput("user_id is required")
        day = day or date.today()
        current = self.store.get(user_id, day)
        decision = check_and_increment(tier, current)
        if decision.allowed:
            self.store.set(user_id, day, decision.new_count)
        else:
            logger.info("Quota reached for user %s (%s tier) on %s", user_id, tier, day)
        return decision
