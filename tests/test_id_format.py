"""
Tests for presentation helpers (grouping, timestamps, bit breakdown).
"""

import pytest
import sys
from pathlib import Path

# Add tools to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'tools'))

from id_decoder import decode_identifier
from id_format import (
    group_thousands, format_timestamp, zone_label, days_since_epoch,
    bit_breakdown, status_label, render_report, to_datetime,
)
from id_layout import EPOCH_OFFSET_MS


@pytest.fixture
def decoded(scenario_raw, scenario_timestamp_ms):
    return decode_identifier(str(scenario_raw), scenario_timestamp_ms).decoded


class TestGrouping:

    def test_group_thousands(self):
        assert group_thousands(0) == "0"
        assert group_thousands(999) == "999"
        assert group_thousands(1000) == "1,000"
        assert group_thousands(1035630607911173) == "1,035,630,607,911,173"


class TestTimestamps:
    """Tests for timezone formatting of epoch milliseconds."""

    def test_epoch_is_midnight_jst(self):
        assert format_timestamp(EPOCH_OFFSET_MS, 'japan') == '2016/01/01 00:00:00.000'
        assert format_timestamp(EPOCH_OFFSET_MS, 'utc') == '2015/12/31 15:00:00.000'

    def test_scenario_timestamp(self, scenario_timestamp_ms):
        assert format_timestamp(scenario_timestamp_ms) == '2016/01/02 10:17:36.789'
        assert format_timestamp(scenario_timestamp_ms, 'utc') == '2016/01/02 01:17:36.789'

    def test_local_matches_astimezone(self, scenario_timestamp_ms):
        dt = to_datetime(scenario_timestamp_ms, 'local')
        assert dt.utcoffset() is not None
        assert dt == to_datetime(scenario_timestamp_ms, 'utc')
        assert format_timestamp(scenario_timestamp_ms, 'local').endswith('.789')

    def test_unknown_zone(self):
        with pytest.raises(ValueError):
            format_timestamp(EPOCH_OFFSET_MS, 'mars')
        with pytest.raises(ValueError):
            zone_label('mars')

    def test_zone_labels(self):
        assert zone_label('japan') == 'JST'
        assert zone_label('utc') == 'UTC'
        assert zone_label('local') == 'Local'

    def test_days_since_epoch(self, scenario_timestamp_ms):
        assert days_since_epoch(EPOCH_OFFSET_MS) == 0
        assert days_since_epoch(scenario_timestamp_ms) == 1
        assert days_since_epoch(EPOCH_OFFSET_MS + 86400000 * 365) == 365


class TestBitBreakdown:

    def test_scenario_bits(self, decoded):
        rows = bit_breakdown(decoded)
        assert [(label, width) for label, width, _ in rows] == [
            ('Timestamp', 40), ('Sequence', 14), ('Cluster', 2), ('App', 7),
        ]
        assert rows[0][2] == format(123456789, '040b')
        assert rows[1][2] == '00000001100100'
        assert rows[2][2] == '10'
        assert rows[3][2] == '0000101'

    def test_bits_reassemble_raw(self, decoded):
        bits = ''.join(b for _, _, b in bit_breakdown(decoded))
        assert len(bits) == 63
        assert int(bits, 2) == decoded.raw_value


class TestReport:

    def test_status_label(self, scenario_raw, scenario_timestamp_ms):
        ok = decode_identifier(str(scenario_raw), scenario_timestamp_ms).decoded
        bad = decode_identifier("0", scenario_timestamp_ms).decoded
        assert status_label(ok) == 'Valid XLong ID'
        assert status_label(bad) == 'Possibly invalid'

    def test_render_report(self, decoded):
        report = render_report(decoded, 'japan')
        assert 'Original Input:   1035630607911173' in report
        assert 'Decimal Value:    1,035,630,607,911,173' in report
        assert 'App ID:           5' in report
        assert 'Cluster ID:       2' in report
        assert 'Sequence:         100' in report
        assert '2016/01/02 10:17:36.789 (JST)' in report
        assert 'Days Since Epoch: 1' in report
        assert 'Timestamp (40 bits)' in report
