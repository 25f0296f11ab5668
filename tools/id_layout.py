#!/usr/bin/env python3
"""
id_layout.py - Bit layout of XLong composite identifiers

A 63-bit identifier packs four fields, least significant first:

    bit  62                    23 22          9 8   7 6       0
        +------------------------+-------------+-----+---------+
        |  timestamp delta (40)  | sequence(14)|cl(2)| app (7) |
        +------------------------+-------------+-----+---------+

    raw = (timestamp_delta << 23) | (sequence << 9) | (cluster_id << 7) | app_id

The timestamp delta counts milliseconds from EPOCH_OFFSET_MS
(2016-01-01 00:00:00.000 JST).

Usage:
    from id_layout import decode_fields, pack_fields

    fields = decode_fields(1035630607911173)
    fields.app_id, fields.cluster_id, fields.sequence   # 5, 2, 100
    fields.timestamp_ms                                 # 1451697456789
"""

from dataclasses import dataclass


APP_ID_BITS = 7
CLUSTER_ID_BITS = 2
SEQUENCE_BITS = 14
TIMESTAMP_BITS = 40

APP_ID_OFFSET = 0
CLUSTER_ID_OFFSET = APP_ID_OFFSET + APP_ID_BITS
SEQUENCE_OFFSET = CLUSTER_ID_OFFSET + CLUSTER_ID_BITS
TIMESTAMP_OFFSET = SEQUENCE_OFFSET + SEQUENCE_BITS

TOTAL_BITS = TIMESTAMP_OFFSET + TIMESTAMP_BITS

EPOCH_OFFSET_MS = 1451574000000


@dataclass(frozen=True)
class FieldSpec:
    """One fixed-width field of the identifier."""
    name: str
    bits: int
    offset: int

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def max_value(self) -> int:
        return self.mask

    def extract(self, raw: int) -> int:
        return (raw >> self.offset) & self.mask

    def place(self, value: int) -> int:
        """Shift a field value into position, rejecting values that don't fit."""
        if value < 0 or value > self.mask:
            raise ValueError(
                f"{self.name} value {value} does not fit in {self.bits} bits "
                f"(0-{self.mask})")
        return value << self.offset


APP_ID = FieldSpec('app_id', APP_ID_BITS, APP_ID_OFFSET)
CLUSTER_ID = FieldSpec('cluster_id', CLUSTER_ID_BITS, CLUSTER_ID_OFFSET)
SEQUENCE = FieldSpec('sequence', SEQUENCE_BITS, SEQUENCE_OFFSET)
TIMESTAMP_DELTA = FieldSpec('timestamp_delta', TIMESTAMP_BITS, TIMESTAMP_OFFSET)

# Least significant first
FIELD_LAYOUT = (APP_ID, CLUSTER_ID, SEQUENCE, TIMESTAMP_DELTA)


@dataclass(frozen=True)
class DecodedFields:
    """The four sub-fields extracted from a raw identifier."""
    app_id: int
    cluster_id: int
    sequence: int
    timestamp_delta: int

    @property
    def timestamp_ms(self) -> int:
        return self.timestamp_delta + EPOCH_OFFSET_MS


def decode_fields(raw: int) -> DecodedFields:
    """
    Split a raw identifier into its fields.

    Callers must range-check raw (0 <= raw <= 2^63 - 1) first; any value
    in that range decodes unconditionally.
    """
    return DecodedFields(
        app_id=raw & APP_ID.mask,
        cluster_id=(raw >> CLUSTER_ID_OFFSET) & CLUSTER_ID.mask,
        sequence=(raw >> SEQUENCE_OFFSET) & SEQUENCE.mask,
        timestamp_delta=raw >> TIMESTAMP_OFFSET,
    )


def pack_fields(app_id: int, cluster_id: int, sequence: int,
                timestamp_delta: int) -> int:
    """Inverse of decode_fields. Raises ValueError if a field overflows its width."""
    return (TIMESTAMP_DELTA.place(timestamp_delta)
            | SEQUENCE.place(sequence)
            | CLUSTER_ID.place(cluster_id)
            | APP_ID.place(app_id))
