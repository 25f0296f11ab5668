"""
pytest configuration and fixtures for the XLong ID decoder tests.

Provides:
- tools/ on sys.path
- Hypothesis property-based testing profiles
- Reference identifiers built from known field values
"""

import os
import sys
from pathlib import Path

import pytest
from hypothesis import settings, Verbosity, Phase

# Add project paths
sys.path.insert(0, str(Path(__file__).parent.parent / "tools"))

from id_layout import EPOCH_OFFSET_MS, pack_fields


# Default profile: balanced speed and coverage
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
)

# CI profile: more thorough testing
settings.register_profile(
    "ci",
    max_examples=500,
    deadline=None,
    suppress_health_check=[],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)

# Dev profile: fast iteration
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
)

# Debug profile: verbose output
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


# (123456789 << 23) | (100 << 9) | (2 << 7) | 5
SCENARIO_RAW = 1035630607911173
SCENARIO_DELTA = 123456789
SCENARIO_TIMESTAMP_MS = EPOCH_OFFSET_MS + SCENARIO_DELTA


@pytest.fixture
def scenario_raw():
    """Raw value with app=5, cluster=2, sequence=100, delta=123456789."""
    assert pack_fields(5, 2, 100, SCENARIO_DELTA) == SCENARIO_RAW
    return SCENARIO_RAW


@pytest.fixture
def scenario_timestamp_ms():
    return SCENARIO_TIMESTAMP_MS


@pytest.fixture
def config_dir(tmp_path):
    """Temporary directory for config YAML files."""
    d = tmp_path / "config"
    d.mkdir()
    return d


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
