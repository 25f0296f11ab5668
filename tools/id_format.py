#!/usr/bin/env python3
"""
id_format.py - Presentation helpers for decoded XLong identifiers

Pure copy-and-format functions layered on top of a decoded record.
Nothing here feeds back into decoding.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Tuple

from id_layout import EPOCH_OFFSET_MS, FIELD_LAYOUT
from numeric_codec import format_base36


JST = timezone(timedelta(hours=9), 'JST')

ZONE_LABELS = {
    'japan': 'JST',
    'utc': 'UTC',
    'local': 'Local',
}

BIT_LABELS = {
    'timestamp_delta': 'Timestamp',
    'sequence': 'Sequence',
    'cluster_id': 'Cluster',
    'app_id': 'App',
}

MS_PER_DAY = 24 * 60 * 60 * 1000

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def group_thousands(value: int) -> str:
    return f"{value:,}"


def zone_label(zone: str) -> str:
    if zone not in ZONE_LABELS:
        raise ValueError(f"Unknown timezone: {zone}")
    return ZONE_LABELS[zone]


def to_datetime(timestamp_ms: int, zone: str = 'japan') -> datetime:
    """Convert epoch milliseconds to an aware datetime in the given zone."""
    dt = _UNIX_EPOCH + timedelta(milliseconds=timestamp_ms)
    if zone == 'japan':
        return dt.astimezone(JST)
    if zone == 'utc':
        return dt
    if zone == 'local':
        return dt.astimezone()
    raise ValueError(f"Unknown timezone: {zone}")


def format_timestamp(timestamp_ms: int, zone: str = 'japan') -> str:
    """Format as YYYY/MM/DD HH:MM:SS.mmm in the given zone."""
    dt = to_datetime(timestamp_ms, zone)
    return f"{dt.strftime('%Y/%m/%d %H:%M:%S')}.{dt.microsecond // 1000:03d}"


def days_since_epoch(timestamp_ms: int) -> int:
    return (timestamp_ms - EPOCH_OFFSET_MS) // MS_PER_DAY


def bit_breakdown(decoded) -> List[Tuple[str, int, str]]:
    """
    Per-field bit strings, most significant field first.

    Returns: [(label, width, zero-padded bits), ...]
    """
    rows = []
    for spec in reversed(FIELD_LAYOUT):
        value = spec.extract(decoded.raw_value)
        rows.append((BIT_LABELS[spec.name], spec.bits,
                     format(value, f'0{spec.bits}b')))
    return rows


def status_label(decoded) -> str:
    return 'Valid XLong ID' if decoded.is_plausible else 'Possibly invalid'


def render_report(decoded, zone: str = 'japan') -> str:
    """Multi-line human-readable report for one decoded identifier."""
    lines = [
        "ID Information",
        f"  Original Input:   {decoded.original_text}",
        f"  Decimal Value:    {group_thousands(decoded.raw_value)}",
        f"  Base-36 Value:    {format_base36(decoded.raw_value)}",
        f"  ID Status:        {status_label(decoded)}",
        "",
        "Application Info",
        f"  App ID:           {decoded.app_id}",
        f"  Cluster ID:       {decoded.cluster_id}",
        f"  Sequence:         {group_thousands(decoded.sequence)}",
        "",
        "Timestamp Info",
        f"  Unix Timestamp:   {decoded.timestamp_ms}",
        f"  Formatted Date:   {format_timestamp(decoded.timestamp_ms, zone)} "
        f"({zone_label(zone)})",
        f"  Days Since Epoch: {days_since_epoch(decoded.timestamp_ms)}",
        "",
        "64-Bit Structure",
    ]
    for label, width, bits in bit_breakdown(decoded):
        lines.append(f"  {label + f' ({width} bits)':<20} {bits}")
    return '\n'.join(lines)
