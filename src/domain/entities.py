"""
Domain Entities Module

Core domain entities using dataclasses for the shift-hours engine.
These entities represent the core business concepts independent of infrastructure.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from .errors import ConfigurationError, InvalidShiftError


class DayType(Enum):
    """Pay-rate classification of a calendar date."""
    NORMAL = "Normal"
    SUNDAY = "Domingo"
    HOLIDAY = "Festivo"

    @property
    def label(self) -> str:
        """Report label (Spanish)."""
        return self.value

    @property
    def is_premium(self) -> bool:
        """Sundays and holidays share the holiday-rate bucket."""
        return self is not DayType.NORMAL


@dataclass(frozen=True)
class NightWindow:
    """
    Clock-hour range treated as night for labor-law purposes.

    Attributes:
        start_hour: First night hour (0-23)
        end_hour: First day hour after the night (0-23)

    The window wraps midnight when start_hour > end_hour (e.g. 21 -> 6).
    A window with start_hour == end_hour never classifies time as night.
    """
    start_hour: int
    end_hour: int

    def __post_init__(self):
        for name in ("start_hour", "end_hour"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"Night window {name} must be an integer hour, got {value!r}"
                )
            if not 0 <= value <= 23:
                raise ConfigurationError(
                    f"Night window {name} must be between 0 and 23, got {value}"
                )

    @property
    def wraps_midnight(self) -> bool:
        return self.start_hour > self.end_hour

    def is_night_hour(self, hour: int) -> bool:
        """Check whether a clock hour falls inside the window."""
        if self.wraps_midnight:
            return hour >= self.start_hour or hour < self.end_hour
        return self.start_hour <= hour < self.end_hour


@dataclass(frozen=True)
class Shift:
    """
    One continuous work interval from a check-in to a check-out.

    Attributes:
        employee_id: Employee identity as received from the record source
        work_center: Work-center label
        start: Check-in timestamp (civil time, naive)
        end: Check-out timestamp, strictly after start
        source_row: Optional row number in the source sheet
    """
    employee_id: str
    work_center: str
    start: datetime
    end: datetime
    source_row: Optional[int] = None

    def __post_init__(self):
        if self.end <= self.start:
            raise InvalidShiftError(self.start, self.end)

    @property
    def shift_date(self) -> date:
        """Calendar date the shift belongs to (its start date)."""
        return self.start.date()


@dataclass(frozen=True)
class OpenEntry:
    """A check-in with no usable check-out yet (pending closure)."""
    employee_id: str
    work_center: str
    start: datetime
    source_row: Optional[int] = None
    employee_name: str = ""


@dataclass
class RawAttendanceRecord:
    """
    Raw attendance record as received from the external store.

    All timestamp fields are loosely typed: strings, date/time objects or None.
    """
    employee_id: str
    work_center: str = ""
    entry_date: Any = None
    entry_time: Any = None
    exit_date: Any = None
    exit_time: Any = None
    source_row: Optional[int] = None


@dataclass(frozen=True)
class InvalidRecord:
    """A record whose exit is not strictly after its entry."""
    record: RawAttendanceRecord
    reason: str


@dataclass(frozen=True)
class HoursBreakdown:
    """
    Four-bucket allocation of a shift's duration, in decimal hours.

    Attributes:
        total: Rounded sum of the four rounded buckets
        day_normal: Day hours on a normal day
        night_normal: Night hours on a normal day
        day_holiday_or_sunday: Day hours on a Sunday or holiday
        night_holiday_or_sunday: Night hours on a Sunday or holiday
        is_valid: False when the interval was rejected (zero or negative length)
    """
    total: float = 0.0
    day_normal: float = 0.0
    night_normal: float = 0.0
    day_holiday_or_sunday: float = 0.0
    night_holiday_or_sunday: float = 0.0
    is_valid: bool = True

    @classmethod
    def invalid(cls) -> "HoursBreakdown":
        return cls(is_valid=False)


@dataclass
class ShiftReportRow:
    """
    One output row per classified shift.

    Attributes:
        employee_id: Employee identity
        employee_name: Name resolved by the host (opaque pass-through)
        work_center: Work-center label
        date_range: Display string "DD/MM/YYYY HH:MM - DD/MM/YYYY HH:MM"
        shift_date: Calendar date of the shift start
        start_time: Start time "HH:MM"
        end_time: End time "HH:MM"
        start_day_type: Day type at the start date
        end_day_type: Day type at the end date
        hours: Classified hours
    """
    employee_id: str
    employee_name: str
    work_center: str
    date_range: str
    shift_date: date
    start_time: str
    end_time: str
    start_day_type: DayType
    end_day_type: DayType
    hours: HoursBreakdown = field(default_factory=HoursBreakdown)


@dataclass
class EmployeeHoursSummary:
    """
    Per-employee totals across every classified shift of a run.

    Attributes:
        employee_id: Employee identity
        employee_name: Resolved name
        shift_count: Number of shifts counted
        total: Sum of shift totals
        day_normal: Sum of day-normal hours
        night_normal: Sum of night-normal hours
        day_holiday_or_sunday: Sum of day holiday/Sunday hours
        night_holiday_or_sunday: Sum of night holiday/Sunday hours
        work_centers: Distinct work centers, in first-seen order
    """
    employee_id: str
    employee_name: str = ""
    shift_count: int = 0
    total: float = 0.0
    day_normal: float = 0.0
    night_normal: float = 0.0
    day_holiday_or_sunday: float = 0.0
    night_holiday_or_sunday: float = 0.0
    work_centers: List[str] = field(default_factory=list)
