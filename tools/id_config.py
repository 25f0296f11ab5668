#!/usr/bin/env python3
"""
id_config.py - Decoder settings loaded from YAML

Example (config/decoder.yaml):

    future_tolerance_ms: 60000   # allowed generator clock skew
    timezone: japan              # japan | local | utc
    output: text                 # text | json | yaml

Usage:
    from id_config import load_config

    config = load_config('config/decoder.yaml')
    config.future_tolerance_ms
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from id_validator import DEFAULT_FUTURE_TOLERANCE_MS


TIMEZONES = ('japan', 'local', 'utc')
OUTPUT_FORMATS = ('text', 'json', 'yaml')


@dataclass
class IdDecoderConfig:
    """Tunable decoder and presentation settings."""
    future_tolerance_ms: int = DEFAULT_FUTURE_TOLERANCE_MS
    timezone: str = 'japan'
    output: str = 'text'

    def validate(self) -> List[str]:
        """Return a list of problems, empty if the config is usable."""
        errors = []
        tol = self.future_tolerance_ms
        if isinstance(tol, bool) or not isinstance(tol, int):
            errors.append(f"future_tolerance_ms: expected integer, got {tol!r}")
        elif tol < 0:
            errors.append(f"future_tolerance_ms: must be >= 0, got {tol}")
        if self.timezone not in TIMEZONES:
            errors.append(
                f"timezone: '{self.timezone}' not one of {', '.join(TIMEZONES)}")
        if self.output not in OUTPUT_FORMATS:
            errors.append(
                f"output: '{self.output}' not one of {', '.join(OUTPUT_FORMATS)}")
        return errors

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IdDecoderConfig':
        known = set(cls.__dataclass_fields__)
        unknown = sorted(map(str, set(data) - known))
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        config = cls(**data)
        errors = config.validate()
        if errors:
            raise ValueError(f"Invalid config: {'; '.join(errors)}")
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Union[str, Path]) -> IdDecoderConfig:
    """Load settings from a YAML file. An empty file gives the defaults."""
    content = Path(path).read_text()
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Config {path}: YAML parse error: {e}") from e
    if data is None:
        return IdDecoderConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(data).__name__}")
    return IdDecoderConfig.from_dict(data)
