"""
Tests for display-zone conversion.

Covers strict parsing of the editable yyyy-MM-ddTHH:mm pattern, projection
of UTC instants into the supported zones, and the editor previews.
"""

import os
import sys
from datetime import datetime

import pytest
import pytz

# Add backend to path for imports
backend_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if backend_path not in sys.path:
    sys.path.insert(0, backend_path)

from client import timezone
from utils.exceptions import UnsupportedTimezoneError, ValidationError

CHICAGO = 'America/Chicago'
KOLKATA = 'Asia/Kolkata'


class TestSupportedZones:
    """The closed set of display zones"""

    def test_default_is_chicago(self):
        assert timezone.DEFAULT_TIMEZONE == CHICAGO
        assert timezone.SUPPORTED_ZONES == (CHICAGO, KOLKATA)

    def test_labels(self):
        assert timezone.zone_label(CHICAGO) == 'America/Chicago (CST/CDT)'
        assert timezone.zone_label(KOLKATA) == 'Asia/Kolkata (IST)'

    @pytest.mark.parametrize('zone', ['Europe/London', 'UTC', '', 'America/New_York'])
    def test_unsupported_zone_rejected(self, zone):
        with pytest.raises(UnsupportedTimezoneError):
            timezone.get_zone(zone)

    def test_unsupported_zone_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            timezone.to_input_value('2024-06-01T17:30:00Z', 'Europe/Paris')


class TestToInputValue:
    """UTC instant → zone-local editable string"""

    def test_same_instant_in_both_zones(self):
        instant = '2024-06-01T17:30:00Z'
        assert timezone.to_input_value(instant, CHICAGO) == '2024-06-01T12:30'
        assert timezone.to_input_value(instant, KOLKATA) == '2024-06-01T23:00'

    def test_winter_offset_in_chicago(self):
        assert timezone.to_input_value('2024-01-15T18:00:00.000Z', CHICAGO) == '2024-01-15T12:00'

    def test_accepts_aware_datetime(self):
        instant = datetime(2024, 6, 1, 17, 30, tzinfo=pytz.utc)
        assert timezone.to_input_value(instant, CHICAGO) == '2024-06-01T12:30'

    def test_crosses_date_boundary(self):
        assert timezone.to_input_value('2024-06-01T20:00:00Z', KOLKATA) == '2024-06-02T01:30'


class TestFromInputValue:
    """Strict parsing of zone-local editable strings"""

    def test_parses_to_zone_aware_datetime(self):
        local = timezone.from_input_value('2024-06-01T12:30', CHICAGO)
        assert local.utcoffset().total_seconds() == -5 * 3600
        assert (local.hour, local.minute) == (12, 30)

    @pytest.mark.parametrize('value', [
        None,
        '',
        '2024-06-01',
        '2024-06-01 12:30',
        '2024-06-01T12:30:00',
        '2024-06-01T12:30Z',
        '2024-6-1T12:30',
        '2024-02-30T10:00',
        '2024-06-01T25:00',
        'not a date',
    ])
    def test_rejects_anything_but_the_exact_pattern(self, value):
        assert timezone.from_input_value(value, CHICAGO) is None
        assert timezone.to_utc_iso(value, CHICAGO) is None


class TestToUtcIso:
    """Zone-local editable string → UTC ISO string"""

    def test_chicago_summer(self):
        assert timezone.to_utc_iso('2024-06-01T12:30', CHICAGO) == '2024-06-01T17:30:00.000Z'

    def test_kolkata(self):
        assert timezone.to_utc_iso('2024-06-01T23:00', KOLKATA) == '2024-06-01T17:30:00.000Z'

    def test_spring_forward_gap_shifts_forward(self):
        # 02:30 does not exist in Chicago on 2024-03-10
        assert timezone.to_utc_iso('2024-03-10T02:30', CHICAGO) == '2024-03-10T08:30:00.000Z'
        assert timezone.to_input_value('2024-03-10T08:30:00.000Z', CHICAGO) == '2024-03-10T03:30'

    def test_fall_back_repeat_resolves_to_standard_time(self):
        assert timezone.to_utc_iso('2024-11-03T01:30', CHICAGO) == '2024-11-03T07:30:00.000Z'

    @pytest.mark.parametrize('zone', [CHICAGO, KOLKATA])
    @pytest.mark.parametrize('instant', [
        '2024-06-01T17:30:00.000Z',
        '2024-01-01T00:00:00.000Z',
        '2024-12-31T23:59:00.000Z',
        '2024-03-10T09:15:00.000Z',
    ])
    def test_round_trip_at_minute_precision(self, zone, instant):
        local = timezone.to_input_value(instant, zone)
        assert timezone.to_utc_iso(local, zone) == instant


class TestPreviews:
    """Duration and UTC previews shown in the editor"""

    def test_duration(self):
        assert timezone.duration_hours('2024-06-01T12:30', '2024-06-01T14:00', CHICAGO) == '1.5h'

    def test_duration_across_midnight(self):
        assert timezone.duration_hours('2024-06-01T23:00', '2024-06-02T01:00', KOLKATA) == '2.0h'

    def test_negative_duration_is_shown(self):
        assert timezone.duration_hours('2024-06-01T14:00', '2024-06-01T13:00', CHICAGO) == '-1.0h'

    def test_duration_placeholder_on_bad_input(self):
        assert timezone.duration_hours('2024-06-01T12:30', '', CHICAGO) == '--'
        assert timezone.duration_hours('garbage', '2024-06-01T12:30', CHICAGO) == '--'

    def test_utc_preview(self):
        assert timezone.utc_preview('2024-06-01T12:30', CHICAGO) == 'Jun 01, 5:30 PM'
        assert timezone.utc_preview('2024-06-01T05:30', KOLKATA) == 'Jun 01, 12:00 AM'

    def test_utc_preview_placeholder(self):
        assert timezone.utc_preview('', CHICAGO) == '--'
        assert timezone.utc_preview('2024-06-01T12:30:00', CHICAGO) == '--'
