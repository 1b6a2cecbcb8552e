"""
Excel Parser Module

Reads check-in/check-out records from an attendance workbook.
Cell values are passed through loosely typed; turning them into
timestamps is the shift builder's job.
"""

import unicodedata
from pathlib import Path
from typing import Dict, List, Optional

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from domain.entities import RawAttendanceRecord
from domain.errors import AttendanceError
from infrastructure.logger import get_logger

logger = get_logger("ExcelParser")


# ==============================================================================
# Custom Exceptions
# ==============================================================================
class ExcelFormatError(AttendanceError):
    """Raised when the Excel file format is unrecognized or invalid."""
    pass


def normalize_header(value) -> str:
    """Lowercase, accent-free, single-spaced header text."""
    text = unicodedata.normalize('NFKD', str(value or ''))
    text = ''.join(ch for ch in text if not unicodedata.combining(ch))
    return ' '.join(text.lower().replace('_', ' ').split())


# ==============================================================================
# AttendanceSheetParser Class
# ==============================================================================
class AttendanceSheetParser:
    """
    Parses attendance workbooks.

    Expected columns (any order, detected by header text):
    - ID / Cédula: employee id
    - Centro de trabajo / Sede: work-center label
    - Fecha Entrada, Hora Entrada: check-in date and time
    - Fecha Salida, Hora Salida: check-out date and time (optional)
    """

    ID_HEADERS = {'id', 'cedula', 'documento', 'identificacion', 'id empleado', 'empleado id'}

    # Maximum rows to search for header
    MAX_HEADER_SEARCH_ROWS = 15
    MAX_HEADER_SEARCH_COLS = 30

    def parse_file(self, file_path: Path, sheet_name: Optional[str] = None) -> List[RawAttendanceRecord]:
        """
        Parse an attendance workbook.

        Args:
            file_path: Path to the .xlsx file
            sheet_name: Worksheet to read; the active sheet when omitted

        Returns:
            List of RawAttendanceRecord objects, one per data row

        Raises:
            ExcelFormatError: If the sheet or its entry columns cannot be found
        """
        if not file_path.exists():
            raise FileNotFoundError(f"Source workbook not found: {file_path}")

        logger.info(f"Reading attendance workbook: {file_path.name}")
        wb = load_workbook(file_path, data_only=True)
        try:
            if sheet_name:
                if sheet_name not in wb.sheetnames:
                    raise ExcelFormatError(f"Worksheet '{sheet_name}' not found in {file_path.name}")
                ws = wb[sheet_name]
            else:
                ws = wb.active
            records = self._parse_worksheet(ws)
        finally:
            wb.close()

        logger.info(f"Read {len(records)} records from sheet '{ws.title}'")
        return records

    def _detect_columns(self, ws: Worksheet) -> Dict[str, int]:
        """Find the header row and the column index of each known field."""
        max_rows = min(self.MAX_HEADER_SEARCH_ROWS, ws.max_row)
        max_cols = min(self.MAX_HEADER_SEARCH_COLS, ws.max_column)

        for row_idx in range(1, max_rows + 1):
            columns: Dict[str, int] = {}
            for col_idx in range(1, max_cols + 1):
                header = normalize_header(ws.cell(row_idx, col_idx).value)
                if not header:
                    continue
                field = self._field_for_header(header)
                if field and field not in columns:
                    columns[field] = col_idx

            if 'entry_date' in columns and 'entry_time' in columns:
                columns['header_row'] = row_idx
                return columns

        raise ExcelFormatError(
            f"Could not find the check-in columns in sheet '{ws.title}'. "
            f"Expected 'Fecha Entrada' and 'Hora Entrada' headers within the "
            f"first {self.MAX_HEADER_SEARCH_ROWS} rows."
        )

    def _field_for_header(self, header: str) -> Optional[str]:
        words = set(header.split())
        if 'fecha' in words and 'entrada' in words:
            return 'entry_date'
        if 'hora' in words and 'entrada' in words:
            return 'entry_time'
        if 'fecha' in words and 'salida' in words:
            return 'exit_date'
        if 'hora' in words and 'salida' in words:
            return 'exit_time'
        if 'centro' in words or 'sede' in words:
            return 'work_center'
        if header in self.ID_HEADERS or header.startswith('cedula'):
            return 'employee_id'
        return None

    def _parse_worksheet(self, ws: Worksheet) -> List[RawAttendanceRecord]:
        columns = self._detect_columns(ws)
        if 'employee_id' not in columns:
            raise ExcelFormatError(f"Could not find the employee id column in sheet '{ws.title}'")

        logger.debug(f"Sheet '{ws.title}': detected columns {columns}")

        def cell(row_idx: int, field: str):
            col = columns.get(field)
            return ws.cell(row_idx, col).value if col else None

        records = []
        empty_rows = 0
        for row_idx in range(columns['header_row'] + 1, ws.max_row + 1):
            employee_id = cell(row_idx, 'employee_id')
            entry_date = cell(row_idx, 'entry_date')
            if employee_id in (None, '') and entry_date in (None, ''):
                empty_rows += 1
                continue

            records.append(RawAttendanceRecord(
                employee_id=self._clean_id(employee_id),
                work_center=str(cell(row_idx, 'work_center') or '').strip(),
                entry_date=entry_date,
                entry_time=cell(row_idx, 'entry_time'),
                exit_date=cell(row_idx, 'exit_date'),
                exit_time=cell(row_idx, 'exit_time'),
                source_row=row_idx,
            ))

        if empty_rows:
            logger.debug(f"Sheet '{ws.title}': ignored {empty_rows} empty rows")
        return records

    @staticmethod
    def _clean_id(value) -> str:
        """Ids typed as numbers come back as floats/ints; keep their digits only."""
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()
