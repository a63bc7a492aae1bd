"""
Dashboard data: radar chart stats and the daily mission checklist
"""

import copy
from datetime import date

import golf_config


def radar_stats(growth_index):
    """Radar chart values derived from a user's growth index"""
    base = 40 + (growth_index or 0) * 0.6
    return {
        name: min(100, base + offset)
        for name, offset in golf_config.RADAR_OFFSETS.items()
    }


class MissionStore:
    """Daily missions per (user_id, day), kept in memory"""

    def __init__(self):
        self._missions = {}

    def missions_for(self, user_id, day=None):
        key = (user_id, day or date.today())
        if key not in self._missions:
            self._missions[key] = copy.deepcopy(list(golf_config.DAILY_MISSIONS))
        return self._missions[key]

    def complete(self, user_id, mission_id, day=None):
        """Mark a mission done; returns True only the first time"""
        for mission in self.missions_for(user_id, day):
            if mission['id'] == mission_id and not mission['completed']:
                mission['completed'] = True
                return True
        return False

    def progress(self, user_id, day=None):
        missions = self.missions_for(user_id, day)
        done = sum(1 for m in missions if m['completed'])
        return done / len(missions) * 100
