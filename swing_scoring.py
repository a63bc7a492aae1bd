"""
Consistency scoring and coaching comment for derived swing metrics
"""

import golf_config
from errors import InvalidInput
from swing_models import AnalysisResult, ImpactTiming, SwingMetrics, SwingPath


def _address_rule(address_score):
    low, high = golf_config.IDEAL_ADDRESS_RANGE
    if low <= address_score <= high:
        return 10, "ideal address angle"
    if address_score < low:
        return 0, "address too low/squat, straighten up"
    return 0, "too upright, maintain spine angle"


def _balance_rule(balance_score):
    if balance_score > golf_config.PRO_BALANCE_THRESHOLD:
        return 20, "pro-level balance"
    if balance_score > golf_config.STABLE_BALANCE_THRESHOLD:
        return 10, "stable weight transfer"
    return -10, "losing balance at finish, needs core work"


def _path_timing_rule(swing_path, impact_timing):
    if swing_path is SwingPath.OUT_IN and impact_timing is ImpactTiming.LATE:
        return -20, "high slice probability, check grip"
    if swing_path is SwingPath.IN_OUT and impact_timing is ImpactTiming.EARLY:
        return -10, "risk of hook, rotate lower body faster"
    if impact_timing is ImpactTiming.GOOD:
        return 10, "perfect impact timing, distance expected"
    return 0, None


def score(metrics):
    """Score swing metrics and build the coaching comment"""
    if not isinstance(metrics, SwingMetrics):
        raise InvalidInput(f"expected SwingMetrics, got {type(metrics).__name__}")

    consistency = golf_config.BASE_CONSISTENCY_SCORE
    comment = ""
    for delta, clause in (
        _address_rule(metrics.address_score),
        _balance_rule(metrics.balance_score),
        _path_timing_rule(metrics.swing_path, metrics.impact_timing),
    ):
        consistency += delta
        if clause:
            comment += clause + " "

    consistency = max(0, min(100, consistency))
    return AnalysisResult(consistency_score=consistency, comment=comment)
