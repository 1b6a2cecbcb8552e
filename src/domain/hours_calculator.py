"""
Hours Calculator Module

Splits a shift into sub-intervals at midnight and night-window boundaries
and attributes every minute to one of four labor categories:

    (Normal, day)            -> day_normal
    (Normal, night)          -> night_normal
    (Sunday|Holiday, day)    -> day_holiday_or_sunday
    (Sunday|Holiday, night)  -> night_holiday_or_sunday
"""

from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict

from .day_classifier import DayClassifier
from .entities import HoursBreakdown, NightWindow, Shift

ONE_MINUTE = timedelta(minutes=1)
ONE_DAY = timedelta(days=1)
_CENT = Decimal("0.01")

DAY_NORMAL = "day_normal"
NIGHT_NORMAL = "night_normal"
DAY_HOLIDAY = "day_holiday_or_sunday"
NIGHT_HOLIDAY = "night_holiday_or_sunday"
BUCKETS = (DAY_NORMAL, NIGHT_NORMAL, DAY_HOLIDAY, NIGHT_HOLIDAY)


def truncate_to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def minutes_to_hours(minutes: int) -> Decimal:
    """Convert whole minutes to hours rounded half-up to 2 decimals."""
    return (Decimal(minutes) / Decimal(60)).quantize(_CENT, rounding=ROUND_HALF_UP)


def _next_at_hour(cursor: datetime, hour: int) -> datetime:
    """Next occurrence of HH:00 strictly after the cursor."""
    candidate = cursor.replace(hour=hour, minute=0, second=0, microsecond=0)
    if candidate <= cursor:
        candidate += ONE_DAY
    return candidate


def _next_midnight(cursor: datetime) -> datetime:
    return datetime.combine(cursor.date() + ONE_DAY, datetime.min.time())


class ShiftHoursCalculator:
    """
    Classifies shift durations into day/night x normal/holiday buckets.

    The calculator holds no state between calls apart from the holiday
    cache inside its DayClassifier, so classifying the same shift twice
    yields identical breakdowns.
    """

    def __init__(self, night_window: NightWindow, day_classifier: DayClassifier = None):
        self.night_window = night_window
        self.day_classifier = day_classifier or DayClassifier()

    def classify(self, shift: Shift) -> HoursBreakdown:
        """Classify a shift's hours."""
        return self.classify_interval(shift.start, shift.end)

    def classify_interval(self, start: datetime, end: datetime) -> HoursBreakdown:
        """
        Classify the half-open interval [start, end).

        Both ends are truncated to the minute first. An interval that is
        empty or inverted after truncation yields an all-zero breakdown
        flagged with is_valid=False.
        """
        start = truncate_to_minute(start)
        end = truncate_to_minute(end)
        if end <= start:
            return HoursBreakdown.invalid()

        minutes = self._sweep(start, end)
        rounded = {bucket: minutes_to_hours(minutes[bucket]) for bucket in BUCKETS}
        total = sum(rounded.values(), Decimal(0)).quantize(_CENT, rounding=ROUND_HALF_UP)

        return HoursBreakdown(
            total=float(total),
            day_normal=float(rounded[DAY_NORMAL]),
            night_normal=float(rounded[NIGHT_NORMAL]),
            day_holiday_or_sunday=float(rounded[DAY_HOLIDAY]),
            night_holiday_or_sunday=float(rounded[NIGHT_HOLIDAY]),
        )

    def _sweep(self, start: datetime, end: datetime) -> Dict[str, int]:
        """Walk the interval boundary by boundary, accumulating minutes per bucket."""
        minutes = {bucket: 0 for bucket in BUCKETS}
        cursor = start

        while cursor < end:
            candidates = [
                _next_midnight(cursor),
                _next_at_hour(cursor, self.night_window.start_hour),
                _next_at_hour(cursor, self.night_window.end_hour),
            ]
            ahead = [c for c in candidates if c > cursor]
            if not ahead:
                cursor += ONE_MINUTE
                continue

            stop = min([end] + ahead)
            delta = int((stop - cursor).total_seconds() // 60)

            is_night = self.night_window.is_night_hour(cursor.hour)
            premium = self.day_classifier.classify(cursor.date()).is_premium

            if premium:
                minutes[NIGHT_HOLIDAY if is_night else DAY_HOLIDAY] += delta
            else:
                minutes[NIGHT_NORMAL if is_night else DAY_NORMAL] += delta

            cursor = stop

        return minutes
