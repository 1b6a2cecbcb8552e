"""
Day Classifier Module

Classifies calendar dates as Normal, Sunday or Holiday for pay-rate purposes.
"""

from datetime import date
from typing import AbstractSet

from .entities import DayType
from .holiday_calendar import HolidayCalendar

SUNDAY = 6  # date.weekday()


def classify_day(day: date, holiday_set: AbstractSet[date]) -> DayType:
    """
    Classify a date against a holiday set.

    Holiday takes precedence over Sunday: a holiday falling on a
    Sunday reports as HOLIDAY.
    """
    if day in holiday_set:
        return DayType.HOLIDAY
    if day.weekday() == SUNDAY:
        return DayType.SUNDAY
    return DayType.NORMAL


class DayClassifier:
    """Classifies dates using a (memoising) HolidayCalendar."""

    def __init__(self, calendar: HolidayCalendar = None):
        self.calendar = calendar or HolidayCalendar()

    def classify(self, day: date) -> DayType:
        return classify_day(day, self.calendar.holidays_for_year(day.year))
