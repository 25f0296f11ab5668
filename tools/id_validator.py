#!/usr/bin/env python3
"""
id_validator.py - Range gate and timestamp plausibility for XLong IDs

check_range() runs before decoding and rejects anything outside the
signed 64-bit positive range. is_plausible() is informational only: an
implausible identifier is still fully decoded, it just gets flagged.

The reference time is always passed in by the caller so results are
deterministic.
"""

from decode_errors import OutOfRangeError
from id_layout import EPOCH_OFFSET_MS


INT64_MAX = (1 << 63) - 1

# Generator clock-skew allowance into the future
DEFAULT_FUTURE_TOLERANCE_MS = 60000


def check_range(raw: int) -> int:
    """Return raw unchanged if 0 <= raw <= 2^63 - 1, else raise OutOfRangeError."""
    if raw < 0 or raw > INT64_MAX:
        raise OutOfRangeError()
    return raw


def is_plausible(timestamp_ms: int, now_ms: int,
                 future_tolerance_ms: int = DEFAULT_FUTURE_TOLERANCE_MS) -> bool:
    """
    Check a decoded timestamp lies after the epoch and not too far ahead.

    Args:
        timestamp_ms: Decoded timestamp (epoch milliseconds)
        now_ms: Reference "current" time (epoch milliseconds)
        future_tolerance_ms: How far past now_ms a timestamp may be

    Returns:
        True if EPOCH_OFFSET_MS < timestamp_ms <= now_ms + future_tolerance_ms
    """
    if future_tolerance_ms < 0:
        raise ValueError(
            f"future_tolerance_ms must be >= 0, got {future_tolerance_ms}")
    return EPOCH_OFFSET_MS < timestamp_ms <= now_ms + future_tolerance_ms
