"""
Swing metric derivation from upload metadata.

No frames are decoded here: the video's name, size and MIME type are folded into
a 32-bit seed, and the seed picks the metrics from fixed ranges and weighted
tables. The same upload therefore always produces the same metrics.
"""

import golf_config
from errors import InvalidInput
from swing_models import ImpactTiming, SwingMetrics, SwingPath, is_int

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _to_int32(value):
    """Wrap an integer to signed 32-bit two's complement"""
    value &= _INT32_MASK
    return value - 0x100000000 if value & _INT32_SIGN else value


def _utf16_units(text):
    """Yield UTF-16 code units, so astral characters fold as surrogate pairs"""
    encoded = text.encode('utf-16-le', 'surrogatepass')
    for i in range(0, len(encoded), 2):
        yield encoded[i] | (encoded[i + 1] << 8)


def seed(name, size_bytes, mime_type):
    """Deterministic non-negative seed for an upload (name, size, type)"""
    if not isinstance(name, str):
        raise InvalidInput(f"name must be a string, got {type(name).__name__}")
    if not is_int(size_bytes) or size_bytes < 0:
        raise InvalidInput(f"size_bytes must be a non-negative integer, got {size_bytes!r}")
    if not isinstance(mime_type, str):
        raise InvalidInput(f"mime_type must be a string, got {type(mime_type).__name__}")

    acc = 0
    for unit in _utf16_units(f"{name}{size_bytes}{mime_type}"):
        acc = _to_int32(acc * 31 + unit)
    return abs(acc)


def seed_for(descriptor):
    """Seed for an ArtifactDescriptor"""
    return seed(descriptor.name, descriptor.size_bytes, descriptor.mime_type)


def adjust_balance(balance, name):
    """Apply the filename keyword override to a base balance score"""
    lowered = name.lower()
    if any(word in lowered for word in golf_config.GOOD_KEYWORDS):
        return min(100, balance + golf_config.KEYWORD_ADJUSTMENT)
    if any(word in lowered for word in golf_config.BAD_KEYWORDS):
        return max(0, balance - golf_config.KEYWORD_ADJUSTMENT)
    return balance


def derive_metrics(seed_value, name):
    """Map a seed and the upload name to swing metrics"""
    if not is_int(seed_value) or seed_value < 0:
        raise InvalidInput(f"seed must be a non-negative integer, got {seed_value!r}")
    if not isinstance(name, str):
        raise InvalidInput(f"name must be a string, got {type(name).__name__}")

    address_score = golf_config.ADDRESS_BASE + seed_value % golf_config.ADDRESS_SPAN
    balance_base = golf_config.BALANCE_BASE + (seed_value >> 2) % golf_config.BALANCE_SPAN

    path_table = golf_config.SWING_PATH_TABLE
    timing_table = golf_config.IMPACT_TIMING_TABLE

    return SwingMetrics(
        address_score=address_score,
        balance_score=adjust_balance(balance_base, name),
        swing_path=SwingPath(path_table[(seed_value >> 3) % len(path_table)]),
        impact_timing=ImpactTiming(timing_table[(seed_value >> 4) % len(timing_table)]),
    )
