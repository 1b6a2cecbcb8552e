"""
Timestamp Parser Module

Turns loosely typed date/time cell values into civil timestamps.

Every accepted textual format has its own parser; a value is tried against
each parser in turn and the outcome is one of:
- Parsed(value): a date, time or naive datetime in the configured zone
- Missing(): nothing was recorded
- Unparseable(original): something was recorded but no parser accepted it
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigurationError

DEFAULT_TIMEZONE = "America/Bogota"


@dataclass(frozen=True)
class Parsed:
    value: Any


@dataclass(frozen=True)
class Missing:
    pass


@dataclass(frozen=True)
class Unparseable:
    original: Any


ParseResult = Union[Parsed, Missing, Unparseable]


# DD/MM/YYYY, day first
DAY_FIRST_PATTERN = re.compile(r'^(\d{1,2})/(\d{1,2})/(\d{4})$')

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# 2026-01-02T12:00:00.000Z / 2026-01-02T07:00:00-05:00
ISO_TIMESTAMP_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}')

CLOCK_PATTERN = re.compile(r'^\d{1,2}:\d{2}(:\d{2})?$')

MERIDIEM_PATTERN = re.compile(r'^\d{1,2}:\d{2}(:\d{2})?\s*[AaPp]\.?\s*[Mm]\.?$')

# Host renderings such as
# "Fri Jan 02 2026 07:00:00 GMT-0500 (Colombia Standard Time)"
HOST_RENDERING_PATTERN = re.compile(
    r'^(?P<stamp>[A-Za-z]{3} [A-Za-z]{3} \d{1,2} \d{4} \d{2}:\d{2}:\d{2})'
    r'(?:\s+GMT[+-]\d{4})?(?:\s*\(.*\))?$'
)

# Marker characters some exports add to edited cells
CLEAN_PATTERN = re.compile(r'\*')


class TimestampParser:
    """
    Parses date and time values into civil time of a fixed zone.

    Aware datetimes and ISO timestamps carrying an offset are converted
    into the zone. Host renderings keep their wall-clock fields as-is:
    the host renders them in its own zone already.
    """

    def __init__(self, timezone: str = DEFAULT_TIMEZONE):
        try:
            self.zone = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown timezone {timezone!r}: {e}") from e

        self._date_parsers: List[Callable[[str], Optional[date]]] = [
            self._parse_day_first,
            self._parse_iso_date,
            lambda text: self._timestamp_part(self._parse_iso_timestamp(text), datetime.date),
            lambda text: self._timestamp_part(self._parse_host_rendering(text), datetime.date),
        ]
        self._time_parsers: List[Callable[[str], Optional[time]]] = [
            self._parse_clock,
            self._parse_meridiem,
            lambda text: self._timestamp_part(self._parse_iso_timestamp(text), datetime.time),
            lambda text: self._timestamp_part(self._parse_host_rendering(text), datetime.time),
        ]

    def parse_date(self, value: Any) -> ParseResult:
        """Parse a date cell value."""
        if isinstance(value, datetime):
            return Parsed(self._to_zone(value).date())
        if isinstance(value, date):
            return Parsed(value)
        return self._parse_text(value, self._date_parsers)

    def parse_time(self, value: Any) -> ParseResult:
        """Parse a time cell value."""
        if isinstance(value, datetime):
            return Parsed(self._to_zone(value).time())
        if isinstance(value, time):
            return Parsed(value.replace(tzinfo=None))
        return self._parse_text(value, self._time_parsers)

    def parse_timestamp(self, date_value: Any, time_value: Any) -> ParseResult:
        """
        Combine a date cell and a time cell into one timestamp.

        Missing wins over Unparseable: a half-recorded timestamp is
        treated as not recorded.
        """
        day = self.parse_date(date_value)
        clock = self.parse_time(time_value)
        if isinstance(day, Missing) or isinstance(clock, Missing):
            return Missing()
        if isinstance(day, Unparseable):
            return day
        if isinstance(clock, Unparseable):
            return clock
        return Parsed(datetime.combine(day.value, clock.value))

    def _parse_text(self, value: Any, parsers) -> ParseResult:
        if value is None:
            return Missing()
        text = CLEAN_PATTERN.sub('', str(value)).strip()
        if not text:
            return Missing()
        for parser in parsers:
            result = parser(text)
            if result is not None:
                return Parsed(result)
        return Unparseable(value)

    def _to_zone(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.astimezone(self.zone).replace(tzinfo=None)

    @staticmethod
    def _timestamp_part(value: Optional[datetime], part):
        return part(value) if value is not None else None

    @staticmethod
    def _parse_day_first(text: str) -> Optional[date]:
        match = DAY_FIRST_PATTERN.match(text)
        if not match:
            return None
        day, month, year = (int(g) for g in match.groups())
        try:
            return date.fromisoformat(f"{year:04d}-{month:02d}-{day:02d}")
        except ValueError:
            return None

    @staticmethod
    def _parse_iso_date(text: str) -> Optional[date]:
        if not ISO_DATE_PATTERN.match(text):
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None

    def _parse_iso_timestamp(self, text: str) -> Optional[datetime]:
        if not ISO_TIMESTAMP_PATTERN.match(text):
            return None
        try:
            value = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            return None
        return self._to_zone(value)

    @staticmethod
    def _parse_host_rendering(text: str) -> Optional[datetime]:
        match = HOST_RENDERING_PATTERN.match(text)
        if not match:
            return None
        try:
            return datetime.strptime(match.group('stamp'), '%a %b %d %Y %H:%M:%S')
        except ValueError:
            return None

    @staticmethod
    def _parse_clock(text: str) -> Optional[time]:
        if not CLOCK_PATTERN.match(text):
            return None
        for fmt in ['%H:%M:%S', '%H:%M']:
            try:
                return datetime.strptime(text, fmt).time()
            except ValueError:
                continue
        return None

    @staticmethod
    def _parse_meridiem(text: str) -> Optional[time]:
        if not MERIDIEM_PATTERN.match(text):
            return None
        # "7:05 p. m." -> "7:05 PM"
        normalized = re.sub(r'\s*([AaPp])\.?\s*[Mm]\.?$', lambda m: f" {m.group(1).upper()}M", text)
        for fmt in ['%I:%M:%S %p', '%I:%M %p']:
            try:
                return datetime.strptime(normalized, fmt).time()
            except ValueError:
                continue
        return None
