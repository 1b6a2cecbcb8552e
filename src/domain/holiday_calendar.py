"""
Holiday Calendar Module

Computes Colombian public holidays for a given year:
fixed-date holidays, holidays moved to the following Monday under
Ley Emiliani, and holidays relative to Easter Sunday.
"""

from datetime import date, timedelta
from typing import Dict, FrozenSet, List, Tuple


# (month, day, name) - never moved
FIXED_HOLIDAYS = [
    (1, 1, "Año Nuevo"),
    (5, 1, "Día del Trabajo"),
    (7, 20, "Día de la Independencia"),
    (8, 7, "Batalla de Boyacá"),
    (12, 8, "Inmaculada Concepción"),
    (12, 25, "Navidad"),
]

# (month, day, name) - moved to the following Monday
EMILIANI_HOLIDAYS = [
    (1, 6, "Reyes Magos"),
    (3, 19, "San José"),
    (6, 29, "San Pedro y San Pablo"),
    (8, 15, "Asunción de la Virgen"),
    (10, 12, "Día de la Raza"),
    (11, 1, "Todos los Santos"),
    (11, 11, "Independencia de Cartagena"),
]

# (offset from Easter Sunday in days, moved to Monday?, name)
EASTER_HOLIDAYS = [
    (-3, False, "Jueves Santo"),
    (-2, False, "Viernes Santo"),
    (39, True, "Ascensión del Señor"),
    (60, True, "Corpus Christi"),
    (68, True, "Sagrado Corazón"),
]


def easter_sunday(year: int) -> date:
    """
    Date of Easter Sunday (Gregorian), Meeus/Jones/Butcher algorithm.

    Args:
        year: Calendar year

    Returns:
        Easter Sunday of that year
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def move_to_monday(day: date) -> date:
    """Move a date to the following Monday unless it already is one."""
    # weekday(): Monday == 0
    return day + timedelta(days=(7 - day.weekday()) % 7)


class HolidayCalendar:
    """
    Colombian holiday calendar with a per-year cache.

    Create one instance per batch run; every shift of the run then
    shares the memoised year sets.
    """

    def __init__(self):
        self._cache: Dict[int, FrozenSet[date]] = {}

    def named_holidays_for_year(self, year: int) -> List[Tuple[date, str]]:
        """
        List every holiday rule of the year with its resolved date.

        Two rules can land on the same Monday (Sagrado Corazón and
        San Pedro y San Pablo in 2025), so dates may repeat here.

        Returns:
            List of (date, name) sorted by date
        """
        holidays = [(date(year, month, day), name) for month, day, name in FIXED_HOLIDAYS]

        for month, day, name in EMILIANI_HOLIDAYS:
            holidays.append((move_to_monday(date(year, month, day)), name))

        easter = easter_sunday(year)
        for offset, moved, name in EASTER_HOLIDAYS:
            day = easter + timedelta(days=offset)
            holidays.append((move_to_monday(day) if moved else day, name))

        return sorted(holidays, key=lambda item: item[0])

    def holidays_for_year(self, year: int) -> FrozenSet[date]:
        """Set of holiday dates for a year, computed once per instance."""
        if year not in self._cache:
            self._cache[year] = frozenset(
                day for day, _ in self.named_holidays_for_year(year)
            )
        return self._cache[year]
