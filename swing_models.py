"""
Data types shared by the swing analysis pipeline
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from errors import InvalidInput


def is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


class SwingPath(Enum):
    IN_OUT = 'In-Out'
    OUT_IN = 'Out-In'
    NEUTRAL = 'Neutral'


class ImpactTiming(Enum):
    GOOD = 'Good'
    EARLY = 'Early'
    LATE = 'Late'


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Name, size and MIME type of an uploaded swing video"""
    name: str
    size_bytes: int
    mime_type: str

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise InvalidInput(f"name must be a string, got {type(self.name).__name__}")
        if not is_int(self.size_bytes) or self.size_bytes < 0:
            raise InvalidInput(f"size_bytes must be a non-negative integer, got {self.size_bytes!r}")
        if not isinstance(self.mime_type, str):
            raise InvalidInput(f"mime_type must be a string, got {type(self.mime_type).__name__}")


@dataclass(frozen=True)
class SwingMetrics:
    address_score: int
    balance_score: int
    swing_path: SwingPath
    impact_timing: ImpactTiming

    def __post_init__(self):
        for field_name in ('address_score', 'balance_score'):
            value = getattr(self, field_name)
            if not is_int(value) or not 0 <= value <= 100:
                raise InvalidInput(f"{field_name} must be an integer in [0, 100], got {value!r}")
        if not isinstance(self.swing_path, SwingPath):
            raise InvalidInput(f"unknown swing path: {self.swing_path!r}")
        if not isinstance(self.impact_timing, ImpactTiming):
            raise InvalidInput(f"unknown impact timing: {self.impact_timing!r}")

    def to_dict(self):
        return {
            'addressScore': self.address_score,
            'balanceScore': self.balance_score,
            'swingPath': self.swing_path.value,
            'impactTiming': self.impact_timing.value,
        }


@dataclass(frozen=True)
class AnalysisResult:
    consistency_score: int
    comment: str

    def to_dict(self):
        return {'score': self.consistency_score, 'comment': self.comment}


@dataclass
class UsageRecord:
    """Analyses run by one user on one calendar day"""
    user_id: str
    day: date
    count: int = 0

    @property
    def key(self):
        return (self.user_id, self.day)
