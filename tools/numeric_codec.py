#!/usr/bin/env python3
"""
numeric_codec.py - Lossless text <-> unsigned 64-bit integer codec

Accepts identifiers written either in base 10 or base 36 and formats
them back into canonical text.

Base-36 digits:
    0-9  -> 0-9
    A-Z  -> 10-35   (case-insensitive, a-z accepted on input)

Dispatch rule (parse_identifier_text):
    All-digit text is ALWAYS decimal, even though it is also valid
    base-36. Anything else is attempted as base-36.

Usage:
    from numeric_codec import parse_identifier_text, format_base36

    value = parse_identifier_text("A1B2C3D4E5F")
    text = format_base36(value)   # 'A1B2C3D4E5F'
"""

import re

from decode_errors import InvalidFormatError, OutOfRangeError


UINT64_MAX = (1 << 64) - 1

BASE36_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'

# Longest canonical decimal for a u64 (18446744073709551615)
_MAX_DECIMAL_DIGITS = len(str(UINT64_MAX))

_DECIMAL_RE = re.compile(r'[0-9]+')
_BASE36_RE = re.compile(r'[0-9A-Za-z]+')


def _digit36(ch: str) -> int:
    """Map one character already matched by _BASE36_RE to its digit value."""
    code = ord(ch)
    if code <= 57:    # 0-9
        return code - 48
    if code <= 90:    # A-Z
        return code - 55
    return code - 87  # a-z


def _check_u64(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected int, got {type(value).__name__}")
    if value < 0 or value > UINT64_MAX:
        raise OutOfRangeError(
            f"Value {value} is outside the unsigned 64-bit range")
    return value


def is_decimal_text(text: str) -> bool:
    """True if text is one or more ASCII digits and nothing else."""
    return _DECIMAL_RE.fullmatch(text) is not None


def parse_decimal(text: str) -> int:
    """Parse canonical or zero-padded decimal text into a u64."""
    if not is_decimal_text(text):
        raise InvalidFormatError()

    significant = text.lstrip('0')
    if len(significant) > _MAX_DECIMAL_DIGITS:
        raise OutOfRangeError(
            f"Decimal value '{text}' exceeds the unsigned 64-bit range")

    value = int(significant or '0')
    if value > UINT64_MAX:
        raise OutOfRangeError(
            f"Decimal value '{text}' exceeds the unsigned 64-bit range")
    return value


def parse_base36(text: str) -> int:
    """
    Parse base-36 text into a u64.

    Accumulates left to right as result = result * 36 + digit and stops
    as soon as the running value leaves the 64-bit range.
    """
    if not text or _BASE36_RE.fullmatch(text) is None:
        raise InvalidFormatError()

    result = 0
    for ch in text:
        result = result * 36 + _digit36(ch)
        if result > UINT64_MAX:
            raise OutOfRangeError(
                f"Base-36 value '{text}' overflows 64 bits")
    return result


def format_decimal(value: int) -> str:
    """Canonical decimal text, no grouping separators."""
    return str(_check_u64(value))


def format_base36(value: int) -> str:
    """Canonical upper-case base-36 text."""
    value = _check_u64(value)
    if value == 0:
        return '0'

    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36_ALPHABET[rem])
    return ''.join(reversed(digits))


def parse_identifier_text(text: str) -> int:
    """
    Parse identifier text with the decimal-first dispatch rule.

    Surrounding whitespace is stripped. Empty text after stripping is an
    InvalidFormatError here; the decoder entry point reports EmptyInput
    before it ever calls this function.
    """
    trimmed = text.strip()
    if is_decimal_text(trimmed):
        return parse_decimal(trimmed)
    return parse_base36(trimmed)
