"""
Unit tests for ShiftBuilder.
"""

import pytest
from datetime import date, datetime, time
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import InvalidRecord, OpenEntry, RawAttendanceRecord, Shift
from domain.shift_builder import ShiftBuilder


def record(entry_date="02/01/2026", entry_time="07:00",
           exit_date="02/01/2026", exit_time="17:00", **kwargs) -> RawAttendanceRecord:
    return RawAttendanceRecord(
        employee_id=kwargs.pop("employee_id", "1001"),
        work_center=kwargs.pop("work_center", "Planta Norte"),
        entry_date=entry_date,
        entry_time=entry_time,
        exit_date=exit_date,
        exit_time=exit_time,
        **kwargs
    )


@pytest.fixture
def builder():
    return ShiftBuilder()


class TestParseOne:
    """Tests for single-record classification."""

    def test_valid_shift(self, builder):
        outcome = builder.parse_one(record(source_row=4))
        assert outcome == Shift(
            employee_id="1001",
            work_center="Planta Norte",
            start=datetime(2026, 1, 2, 7, 0),
            end=datetime(2026, 1, 2, 17, 0),
            source_row=4,
        )

    def test_overnight_shift(self, builder):
        outcome = builder.parse_one(record(entry_time="22:00", exit_date="03/01/2026", exit_time="06:00"))
        assert isinstance(outcome, Shift)
        assert outcome.end == datetime(2026, 1, 3, 6, 0)

    def test_native_cell_values(self, builder):
        outcome = builder.parse_one(record(
            entry_date=datetime(2026, 1, 2), entry_time=time(7, 0),
            exit_date=date(2026, 1, 2), exit_time=datetime(1899, 12, 30, 15, 30),
        ))
        assert isinstance(outcome, Shift)
        assert outcome.end == datetime(2026, 1, 2, 15, 30)

    def test_missing_exit_is_open(self, builder):
        outcome = builder.parse_one(record(exit_date=None, exit_time=None))
        assert outcome == OpenEntry(
            employee_id="1001",
            work_center="Planta Norte",
            start=datetime(2026, 1, 2, 7, 0),
        )

    def test_unparseable_exit_is_open(self, builder):
        assert isinstance(builder.parse_one(record(exit_time="pendiente")), OpenEntry)

    def test_missing_entry_dropped(self, builder):
        assert builder.parse_one(record(entry_date="", entry_time="")) is None

    def test_unparseable_entry_dropped(self, builder):
        assert builder.parse_one(record(entry_date="??")) is None

    def test_inverted_shift_is_invalid(self, builder):
        raw = record(entry_time="17:00", exit_time="07:00")
        outcome = builder.parse_one(raw)
        assert isinstance(outcome, InvalidRecord)
        assert outcome.record is raw
        assert "not after" in outcome.reason

    def test_equal_entry_and_exit_is_invalid(self, builder):
        assert isinstance(builder.parse_one(record(exit_time="07:00")), InvalidRecord)

    @pytest.mark.parametrize("employee_id", [None, "", "   "])
    def test_blank_employee_id_is_invalid(self, builder, employee_id):
        raw = RawAttendanceRecord(employee_id, None, "02/01/2026", "22:00", "03/01/2026", "06:00")
        outcome = builder.parse_one(raw)
        assert isinstance(outcome, InvalidRecord)
        assert outcome.reason == "no employee id"

    def test_blank_employee_id_without_exit_is_invalid(self, builder):
        assert isinstance(builder.parse_one(record(employee_id="", exit_time=None)), InvalidRecord)

    def test_identity_fields_trimmed(self, builder):
        outcome = builder.parse_one(record(employee_id=" 1001 ", work_center=" Sede Sur "))
        assert outcome.employee_id == "1001"
        assert outcome.work_center == "Sede Sur"


class TestBuild:
    """Tests for batch building and counts."""

    def test_counts(self, builder):
        result = builder.build([
            record(),
            record(entry_time="22:00", exit_date="03/01/2026", exit_time="06:00"),
            record(exit_time=None),
            record(entry_date=None),
            record(entry_time="18:00", exit_time="08:00"),
            record(employee_id=None),
        ])
        assert len(result.shifts) == 2
        assert len(result.open_entries) == 1
        assert len(result.invalid) == 2
        assert result.skipped == 1
        assert result.processed == 6

    def test_empty(self, builder):
        result = builder.build([])
        assert result.shifts == []
        assert result.processed == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
