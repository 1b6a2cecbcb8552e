"""
Employee Directory Module

Resolves employee ids to display names from a CSV file.
"""

import csv
from pathlib import Path
from typing import Dict, Optional

from infrastructure.logger import get_logger

logger = get_logger("EmployeeDirectory")


class EmployeeDirectory:
    """
    Employee id -> name lookup loaded from CSV.

    The CSV should have an id column (ID, Cédula, id) and a name column
    (Nombre, Name, name). Implements the NameResolver interface.
    """

    ID_COLUMNS = ('ID', 'Id', 'id', 'Cédula', 'Cedula', 'cedula', 'Documento')
    NAME_COLUMNS = ('Nombre', 'nombre', 'Name', 'name', 'Empleado')

    def __init__(self, names: Optional[Dict[str, str]] = None):
        self._names: Dict[str, str] = dict(names or {})

    @classmethod
    def from_csv(cls, csv_path: Path) -> "EmployeeDirectory":
        """Create a directory loaded from a CSV file."""
        directory = cls()
        directory.load_from_csv(csv_path)
        return directory

    def load_from_csv(self, csv_path: Path) -> int:
        """
        Load employee names from CSV file.

        Args:
            csv_path: Path to the CSV file

        Returns:
            Number of employees loaded
        """
        self._names = {}

        if not csv_path.exists():
            logger.warning(f"Employee CSV not found: {csv_path}")
            return 0

        with open(csv_path, 'r', encoding='utf-8-sig') as f:
            reader = csv.DictReader(f)
            for row in reader:
                employee_id = self._first_value(row, self.ID_COLUMNS)
                name = self._first_value(row, self.NAME_COLUMNS)
                if not employee_id:
                    continue
                self._names[employee_id] = name

        logger.info(f"Loaded {len(self._names)} employees from {csv_path.name}")
        return len(self._names)

    @staticmethod
    def _first_value(row: Dict[str, str], columns) -> str:
        for column in columns:
            value = row.get(column)
            if value:
                return value.strip()
        return ""

    def resolve(self, employee_id: str) -> str:
        """Name for an employee id, or an empty string if unknown."""
        return self._names.get(str(employee_id).strip(), "")

    def __len__(self) -> int:
        return len(self._names)
