"""
Shift Builder Module

Validates raw attendance records and promotes them to Shift entities.

Each record carries its own entry and exit; no pairing across records
is attempted.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Union

from .entities import InvalidRecord, OpenEntry, RawAttendanceRecord, Shift
from .timestamp_parser import Parsed, TimestampParser

BuildOutcome = Union[Shift, OpenEntry, InvalidRecord, None]


@dataclass
class BuildResult:
    """
    Outcome of building shifts from a batch of records.

    Attributes:
        shifts: Records promoted to valid shifts
        open_entries: Entries still waiting for an exit
        invalid: Records without an employee id or whose exit is not after their entry
        skipped: Records without a usable entry
        processed: Total number of records seen
    """
    shifts: List[Shift] = field(default_factory=list)
    open_entries: List[OpenEntry] = field(default_factory=list)
    invalid: List[InvalidRecord] = field(default_factory=list)
    skipped: int = 0
    processed: int = 0


class ShiftBuilder:
    """Builds shifts from raw attendance records."""

    def __init__(self, parser: TimestampParser = None):
        self.parser = parser or TimestampParser()

    def parse_one(self, record: RawAttendanceRecord) -> BuildOutcome:
        """
        Classify a single record.

        Returns:
            Shift when entry and exit are valid and ordered,
            OpenEntry when the exit is missing or unparseable,
            InvalidRecord when the employee id is blank or the exit is not
            after the entry,
            None when the entry is missing or unparseable
        """
        entry = self.parser.parse_timestamp(record.entry_date, record.entry_time)
        if not isinstance(entry, Parsed):
            return None

        employee_id = str(record.employee_id or "").strip()
        work_center = str(record.work_center or "").strip()
        if not employee_id:
            return InvalidRecord(record=record, reason="no employee id")

        exit_ = self.parser.parse_timestamp(record.exit_date, record.exit_time)
        if not isinstance(exit_, Parsed):
            return OpenEntry(
                employee_id=employee_id,
                work_center=work_center,
                start=entry.value,
                source_row=record.source_row,
            )

        if exit_.value <= entry.value:
            return InvalidRecord(
                record=record,
                reason=f"exit {exit_.value:%d/%m/%Y %H:%M} is not after entry {entry.value:%d/%m/%Y %H:%M}",
            )

        return Shift(
            employee_id=employee_id,
            work_center=work_center,
            start=entry.value,
            end=exit_.value,
            source_row=record.source_row,
        )

    def build(self, records: Iterable[RawAttendanceRecord]) -> BuildResult:
        """Build shifts for a batch, counting what could not be promoted."""
        result = BuildResult()
        for record in records:
            result.processed += 1
            outcome = self.parse_one(record)
            if isinstance(outcome, Shift):
                result.shifts.append(outcome)
            elif isinstance(outcome, OpenEntry):
                result.open_entries.append(outcome)
            elif isinstance(outcome, InvalidRecord):
                result.invalid.append(outcome)
            else:
                result.skipped += 1
        return result
