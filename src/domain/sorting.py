"""
Sorting Utilities Module

Provides sorting functions for report output.
"""

from typing import Iterable, List

from domain.entities import OpenEntry, ShiftReportRow

SORT_BY_DATE = "date"
SORT_BY_EMPLOYEE = "employee"


def get_employee_sort_key(row: ShiftReportRow) -> tuple:
    """
    Sort key grouping rows per employee.

    Rows without a resolved name sort after named ones, by id.
    """
    name = row.employee_name or ""
    return (name == "", name.casefold(), row.employee_id, row.shift_date, row.start_time)


def sort_report_rows(
    rows: Iterable[ShiftReportRow],
    sort_by: str = SORT_BY_DATE
) -> List[ShiftReportRow]:
    """
    Sort report rows by specified criteria.

    Args:
        rows: Report rows
        sort_by: "date" (chronological) or "employee" (grouped by name)

    Returns:
        Sorted list (new list, does not modify original)
    """
    if sort_by == SORT_BY_EMPLOYEE:
        return sorted(rows, key=get_employee_sort_key)
    # Default: chronological, then by employee id
    return sorted(rows, key=lambda r: (r.shift_date, r.start_time, r.employee_id))


def sort_open_entries(entries: Iterable[OpenEntry]) -> List[OpenEntry]:
    """Open entries oldest first, so the longest-pending ones lead."""
    return sorted(entries, key=lambda e: (e.start, e.employee_id))
