#!/usr/bin/env python3
"""
id_decoder.py - Decode XLong composite identifiers

Pipeline: text -> u64 (numeric_codec) -> range gate (id_validator)
          -> fields (id_layout) -> plausibility (id_validator)

Usage:
    from id_decoder import decode_identifier

    result = decode_identifier("1035630607911173", reference_now_ms=now_ms)
    if result.success:
        print(result.decoded.app_id, result.decoded.timestamp_ms)
    else:
        print(result.error.kind, result.error.message)

CLI:
    python tools/id_decoder.py decode 1035630607911173
    python tools/id_decoder.py decode A1B2C3D4E5F --tz utc --json
    python tools/id_decoder.py decode 1035630607911173 --now 1451700000000
    python tools/id_decoder.py convert 1035630607911173
"""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from decode_errors import DecodeError, EmptyInputError
from id_config import IdDecoderConfig, TIMEZONES, load_config
from id_format import (
    days_since_epoch, format_timestamp, render_report, status_label,
    zone_label,
)
from id_layout import decode_fields
from id_validator import DEFAULT_FUTURE_TOLERANCE_MS, check_range, is_plausible
from numeric_codec import format_base36, format_decimal, parse_identifier_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedId:
    """A fully decoded identifier. Immutable once built."""
    original_text: str
    raw_value: int
    app_id: int
    cluster_id: int
    sequence: int
    timestamp_ms: int
    is_plausible: bool

    @property
    def timestamp_delta(self) -> int:
        return decode_fields(self.raw_value).timestamp_delta

    @property
    def decimal_text(self) -> str:
        return format_decimal(self.raw_value)

    @property
    def base36_text(self) -> str:
        return format_base36(self.raw_value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'original_text': self.original_text,
            'raw_value': self.raw_value,
            'base36': self.base36_text,
            'app_id': self.app_id,
            'cluster_id': self.cluster_id,
            'sequence': self.sequence,
            'timestamp_ms': self.timestamp_ms,
            'is_plausible': self.is_plausible,
        }


@dataclass(frozen=True)
class IdDecodeResult:
    """Either a decoded record or the error that prevented one."""
    decoded: Optional[DecodedId] = None
    error: Optional[DecodeError] = None

    def __post_init__(self):
        if (self.decoded is None) == (self.error is None):
            raise ValueError("IdDecodeResult needs exactly one of decoded or error")

    @property
    def success(self) -> bool:
        return self.error is None


def current_time_ms() -> int:
    return time.time_ns() // 1000000


def _decode(input_text: str, reference_now_ms: int,
            future_tolerance_ms: int) -> DecodedId:
    trimmed = input_text.strip()
    if not trimmed:
        raise EmptyInputError()

    raw = check_range(parse_identifier_text(trimmed))
    fields = decode_fields(raw)
    plausible = is_plausible(fields.timestamp_ms, reference_now_ms,
                             future_tolerance_ms)
    if not plausible:
        logger.info(f"ID {trimmed} has implausible timestamp {fields.timestamp_ms} "
                    f"(reference {reference_now_ms})")

    return DecodedId(
        original_text=input_text,
        raw_value=raw,
        app_id=fields.app_id,
        cluster_id=fields.cluster_id,
        sequence=fields.sequence,
        timestamp_ms=fields.timestamp_ms,
        is_plausible=plausible,
    )


def decode_identifier(input_text: str, reference_now_ms: int,
                      future_tolerance_ms: int = DEFAULT_FUTURE_TOLERANCE_MS
                      ) -> IdDecodeResult:
    """
    Decode identifier text into a DecodedId.

    Args:
        input_text: Decimal or base-36 identifier, surrounding whitespace allowed
        reference_now_ms: "Current" time for the plausibility check (epoch ms)
        future_tolerance_ms: Allowed clock skew into the future

    Returns:
        IdDecodeResult holding either the record or an EmptyInput,
        InvalidFormat or OutOfRange error. Never a partial record.
    """
    if not isinstance(input_text, str):
        raise TypeError(f"input_text must be str, got {type(input_text).__name__}")
    if future_tolerance_ms < 0:
        raise ValueError(
            f"future_tolerance_ms must be >= 0, got {future_tolerance_ms}")

    try:
        decoded = _decode(input_text, reference_now_ms, future_tolerance_ms)
    except DecodeError as e:
        logger.debug(f"Rejected ID {input_text!r}: {e.kind}: {e.message}")
        return IdDecodeResult(error=e)
    return IdDecodeResult(decoded=decoded)


def decode_id(input_text: str, reference_now_ms: int,
              future_tolerance_ms: int = DEFAULT_FUTURE_TOLERANCE_MS) -> DecodedId:
    """Convenience function: decode or raise the DecodeError."""
    result = decode_identifier(input_text, reference_now_ms, future_tolerance_ms)
    if not result.success:
        raise result.error
    return result.decoded


class IdDecoder:
    """Decoder bound to a config. Reads the clock only if no time is given."""

    def __init__(self, config: IdDecoderConfig = None):
        self.config = config or IdDecoderConfig()
        errors = self.config.validate()
        if errors:
            raise ValueError(f"Invalid config: {'; '.join(errors)}")

    def decode(self, input_text: str,
               reference_now_ms: Optional[int] = None) -> IdDecodeResult:
        if reference_now_ms is None:
            reference_now_ms = current_time_ms()
        return decode_identifier(input_text, reference_now_ms,
                                 self.config.future_tolerance_ms)

    def describe(self, decoded: DecodedId) -> Dict[str, Any]:
        """Record plus presentation fields, for JSON/YAML output."""
        zone = self.config.timezone
        out = decoded.to_dict()
        out['formatted_timestamp'] = format_timestamp(decoded.timestamp_ms, zone)
        out['timezone'] = zone_label(zone)
        out['days_since_epoch'] = days_since_epoch(decoded.timestamp_ms)
        out['status'] = status_label(decoded)
        return out


def _build_config(args) -> IdDecoderConfig:
    config = load_config(args.config) if args.config else IdDecoderConfig()
    overrides = {}
    if args.tolerance_ms is not None:
        overrides['future_tolerance_ms'] = args.tolerance_ms
    if args.tz is not None:
        overrides['timezone'] = args.tz
    if args.json:
        overrides['output'] = 'json'
    elif args.yaml:
        overrides['output'] = 'yaml'
    if overrides:
        merged = config.to_dict()
        merged.update(overrides)
        config = IdDecoderConfig.from_dict(merged)
    return config


def _cmd_decode(args) -> int:
    decoder = IdDecoder(_build_config(args))
    fmt = decoder.config.output

    failed = 0
    described: List[Dict[str, Any]] = []
    for i, text in enumerate(args.ids):
        result = decoder.decode(text, args.now)
        if not result.success:
            print(f"Error: {text}: {result.error.message}", file=sys.stderr)
            failed += 1
            continue
        if fmt == 'text':
            if i:
                print()
            print(render_report(result.decoded, decoder.config.timezone))
        else:
            described.append(decoder.describe(result.decoded))

    if fmt == 'json' and described:
        print(json.dumps(described if len(args.ids) > 1 else described[0],
                         indent=2))
    elif fmt == 'yaml' and described:
        print(yaml.dump(described if len(args.ids) > 1 else described[0],
                        default_flow_style=False, sort_keys=False), end='')

    return 1 if failed else 0


def _cmd_convert(args) -> int:
    trimmed = args.id.strip()
    try:
        if not trimmed:
            raise EmptyInputError()
        raw = check_range(parse_identifier_text(trimmed))
    except DecodeError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    print(f"Decimal: {format_decimal(raw)}")
    print(f"Base-36: {format_base36(raw)}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Decode XLong composite identifiers'
    )
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='-v for INFO, -vv for DEBUG logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    dec = subparsers.add_parser('decode', help='Decode one or more IDs')
    dec.add_argument('ids', nargs='+', metavar='ID',
                     help='Decimal or base-36 identifier')
    dec.add_argument('--now', type=int, default=None,
                     help='Reference time in epoch ms (default: current clock)')
    dec.add_argument('--tolerance-ms', type=int, default=None,
                     help='Allowed future clock skew in ms')
    dec.add_argument('--tz', choices=TIMEZONES, default=None,
                     help='Timezone for formatted dates')
    dec.add_argument('-c', '--config', help='Decoder config YAML')
    out = dec.add_mutually_exclusive_group()
    out.add_argument('-j', '--json', action='store_true', help='Output JSON')
    out.add_argument('-y', '--yaml', action='store_true', help='Output YAML')

    conv = subparsers.add_parser('convert', help='Show decimal and base-36 forms')
    conv.add_argument('id', metavar='ID', help='Decimal or base-36 identifier')

    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(levelname)-5.5s [%(name)s] %(message)s",
    )

    if args.command == 'decode':
        try:
            return _cmd_decode(args)
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return _cmd_convert(args)


if __name__ == '__main__':
    sys.exit(main())
