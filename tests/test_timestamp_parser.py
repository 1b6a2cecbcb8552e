"""
Unit tests for TimestampParser.
"""

import pytest
from datetime import date, datetime, time, timezone
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.errors import ConfigurationError
from domain.timestamp_parser import Missing, Parsed, TimestampParser, Unparseable


@pytest.fixture
def parser():
    return TimestampParser("America/Bogota")


class TestParseDate:
    """Tests for date cell parsing."""

    def test_day_first(self, parser):
        assert parser.parse_date("02/01/2026") == Parsed(date(2026, 1, 2))

    def test_day_first_single_digits(self, parser):
        assert parser.parse_date("2/1/2026") == Parsed(date(2026, 1, 2))

    def test_day_first_never_month_first(self, parser):
        assert parser.parse_date("13/01/2026") == Parsed(date(2026, 1, 13))
        assert parser.parse_date("01/13/2026") == Unparseable("01/13/2026")

    def test_impossible_date(self, parser):
        assert isinstance(parser.parse_date("31/02/2026"), Unparseable)

    def test_iso_date(self, parser):
        assert parser.parse_date("2026-01-02") == Parsed(date(2026, 1, 2))

    def test_iso_timestamp_converted_to_zone(self, parser):
        # 03:00 UTC is still Jan 1 in Bogotá (UTC-5)
        assert parser.parse_date("2026-01-02T03:00:00.000Z") == Parsed(date(2026, 1, 1))

    def test_host_rendering(self, parser):
        value = "Fri Jan 02 2026 07:00:00 GMT-0500 (Colombia Standard Time)"
        assert parser.parse_date(value) == Parsed(date(2026, 1, 2))

    def test_native_date(self, parser):
        assert parser.parse_date(date(2026, 1, 2)) == Parsed(date(2026, 1, 2))

    def test_native_datetime(self, parser):
        assert parser.parse_date(datetime(2026, 1, 2, 0, 0)) == Parsed(date(2026, 1, 2))

    def test_aware_datetime_converted(self, parser):
        value = datetime(2026, 1, 2, 2, 0, tzinfo=timezone.utc)
        assert parser.parse_date(value) == Parsed(date(2026, 1, 1))

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, parser, value):
        assert parser.parse_date(value) == Missing()

    def test_garbage(self, parser):
        assert parser.parse_date("mañana") == Unparseable("mañana")


class TestParseTime:
    """Tests for time cell parsing."""

    def test_clock(self, parser):
        assert parser.parse_time("7:00") == Parsed(time(7, 0))
        assert parser.parse_time("07:00:30") == Parsed(time(7, 0, 30))

    def test_asterisk_marker_ignored(self, parser):
        assert parser.parse_time("*18:45") == Parsed(time(18, 45))

    def test_meridiem(self, parser):
        assert parser.parse_time("7:05 PM") == Parsed(time(19, 5))
        assert parser.parse_time("7:05 p. m.") == Parsed(time(19, 5))
        assert parser.parse_time("12:10 am") == Parsed(time(0, 10))

    def test_host_rendering_of_time_cell(self, parser):
        value = "Sat Dec 30 1899 22:15:00 GMT-0456 (hora estándar de Colombia)"
        assert parser.parse_time(value) == Parsed(time(22, 15))

    def test_iso_timestamp(self, parser):
        assert parser.parse_time("2026-01-02T12:00:00Z") == Parsed(time(7, 0))

    def test_native_time(self, parser):
        assert parser.parse_time(time(6, 30)) == Parsed(time(6, 30))

    def test_native_datetime(self, parser):
        assert parser.parse_time(datetime(1899, 12, 30, 6, 30)) == Parsed(time(6, 30))

    def test_out_of_range(self, parser):
        assert isinstance(parser.parse_time("25:00"), Unparseable)

    def test_missing(self, parser):
        assert parser.parse_time(None) == Missing()


class TestParseTimestamp:
    """Tests for combining a date cell and a time cell."""

    def test_combined(self, parser):
        assert parser.parse_timestamp("02/01/2026", "22:00") == Parsed(datetime(2026, 1, 2, 22, 0))

    def test_missing_time(self, parser):
        assert parser.parse_timestamp("02/01/2026", None) == Missing()

    def test_missing_date(self, parser):
        assert parser.parse_timestamp("", "22:00") == Missing()

    def test_unparseable_time(self, parser):
        assert parser.parse_timestamp("02/01/2026", "late") == Unparseable("late")

    def test_unparseable_date(self, parser):
        assert parser.parse_timestamp("yesterday", "22:00") == Unparseable("yesterday")


class TestTimezone:
    """Tests for timezone configuration."""

    def test_unknown_timezone(self):
        with pytest.raises(ConfigurationError):
            TimestampParser("Mars/Olympus_Mons")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
