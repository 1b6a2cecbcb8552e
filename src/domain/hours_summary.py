"""
Hours Summary Module

Aggregates classified shift hours per employee.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List

from .entities import EmployeeHoursSummary, ShiftReportRow

_CENT = Decimal("0.01")
_FIELDS = (
    "total",
    "day_normal",
    "night_normal",
    "day_holiday_or_sunday",
    "night_holiday_or_sunday",
)


def _add(a: float, b: float) -> float:
    # Decimal keeps 2-decimal sums exact across many shifts
    return float((Decimal(str(a)) + Decimal(str(b))).quantize(_CENT, rounding=ROUND_HALF_UP))


class HoursSummaryCalculator:
    """
    Builds per-employee totals from report rows.

    Provides:
    - Shift counting per employee
    - Summed total and bucket hours
    - Distinct work centers per employee
    """

    def summarize(self, rows: Iterable[ShiftReportRow]) -> List[EmployeeHoursSummary]:
        """
        Summarize report rows per employee.

        Args:
            rows: Report rows of one run

        Returns:
            One summary per employee, in first-seen order
        """
        summaries: Dict[str, EmployeeHoursSummary] = {}

        for row in rows:
            summary = summaries.get(row.employee_id)
            if summary is None:
                summary = EmployeeHoursSummary(
                    employee_id=row.employee_id,
                    employee_name=row.employee_name,
                )
                summaries[row.employee_id] = summary

            summary.shift_count += 1
            for name in _FIELDS:
                setattr(summary, name, _add(getattr(summary, name), getattr(row.hours, name)))

            if row.work_center and row.work_center not in summary.work_centers:
                summary.work_centers.append(row.work_center)

        return list(summaries.values())
