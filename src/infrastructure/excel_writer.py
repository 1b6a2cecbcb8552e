"""
Excel Writer Module

Generates the classified-hours workbook with styling.
"""

from pathlib import Path
from typing import List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from domain.entities import EmployeeHoursSummary, OpenEntry, ShiftReportRow

HOURS_SHEET = "Horas"
OPEN_SHIFTS_SHEET = "Turnos abiertos"
SUMMARY_SHEET = "Resumen"

HOURS_HEADERS = [
    "ID Empleado",
    "Nombre",
    "Centro de Trabajo",
    "Rango",
    "Fecha",
    "Hora Entrada",
    "Hora Salida",
    "Tipo Día Entrada",
    "Tipo Día Salida",
    "Horas Totales",
    "Diurnas Normales",
    "Nocturnas Normales",
    "Diurnas Festivo/Domingo",
    "Nocturnas Festivo/Domingo",
]

OPEN_SHIFTS_HEADERS = ["ID Empleado", "Nombre", "Centro de Trabajo", "Fecha Entrada", "Hora Entrada", "Fila"]

SUMMARY_HEADERS = [
    "ID Empleado",
    "Nombre",
    "Turnos",
    "Horas Totales",
    "Diurnas Normales",
    "Nocturnas Normales",
    "Diurnas Festivo/Domingo",
    "Nocturnas Festivo/Domingo",
    "Centros de Trabajo",
]

HOURS_NUMBER_FORMAT = '0.00'


def format_filename(pattern: str, year: int, month: int) -> str:
    """
    Format filename pattern with year and month.

    Args:
        pattern: Filename pattern with {year} and {month} placeholders
        year: Year value
        month: Month value (zero-padded to 2 digits)
    """
    return pattern.format(year=year, month=f"{month:02d}")


class ExcelWriter:
    """
    Writes classified hours to an .xlsx workbook.

    Output sheets:
    - Horas: one row per shift with the four hour buckets
    - Turnos abiertos: entries still waiting for an exit (optional)
    - Resumen: per-employee totals (optional)
    """

    HEADER_FILL = PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid')
    PREMIUM_FILL = PatternFill(start_color='FFD700', end_color='FFD700', fill_type='solid')

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    def __init__(self):
        self.wb: Optional[Workbook] = None

    def create_report(
        self,
        rows: List[ShiftReportRow],
        output_path: Path,
        open_entries: Optional[List[OpenEntry]] = None,
        summaries: Optional[List[EmployeeHoursSummary]] = None
    ) -> Path:
        """
        Create the report workbook.

        Args:
            rows: Classified shift rows
            output_path: Path to save the Excel file
            open_entries: Pending-closure entries; sheet omitted when None
            summaries: Per-employee totals; sheet omitted when None

        Returns:
            Path to the created file
        """
        self.wb = Workbook()
        hours_ws = self.wb.active
        hours_ws.title = HOURS_SHEET
        self._write_hours_sheet(hours_ws, rows)

        if open_entries is not None:
            self._write_open_shifts_sheet(
                self.wb.create_sheet(OPEN_SHIFTS_SHEET), open_entries
            )

        if summaries is not None:
            self._write_summary_sheet(self.wb.create_sheet(SUMMARY_SHEET), summaries)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(output_path)
        return output_path

    def _write_header(self, ws, headers: Sequence[str]):
        for col, title in enumerate(headers, start=1):
            cell = ws.cell(1, col, title)
            cell.font = Font(bold=True, color='FFFFFF')
            cell.fill = self.HEADER_FILL
            cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
            cell.border = self.BORDER
        ws.freeze_panes = 'A2'
        ws.row_dimensions[1].height = 32

    def _write_row(self, ws, row_idx: int, values: Sequence, hours_from: int = None):
        for col, value in enumerate(values, start=1):
            cell = ws.cell(row_idx, col, value)
            cell.border = self.BORDER
            if hours_from is not None and col >= hours_from:
                cell.number_format = HOURS_NUMBER_FORMAT
                cell.alignment = Alignment(horizontal='right')

    def _write_hours_sheet(self, ws, rows: List[ShiftReportRow]):
        self._write_header(ws, HOURS_HEADERS)
        hours_col = HOURS_HEADERS.index("Horas Totales") + 1

        for row_idx, row in enumerate(rows, start=2):
            h = row.hours
            self._write_row(ws, row_idx, [
                row.employee_id,
                row.employee_name,
                row.work_center,
                row.date_range,
                row.shift_date.strftime('%d/%m/%Y'),
                row.start_time,
                row.end_time,
                row.start_day_type.label,
                row.end_day_type.label,
                h.total,
                h.day_normal,
                h.night_normal,
                h.day_holiday_or_sunday,
                h.night_holiday_or_sunday,
            ], hours_from=hours_col)

            # Highlight day-type cells for Sundays and holidays
            for col, day_type in ((8, row.start_day_type), (9, row.end_day_type)):
                if day_type.is_premium:
                    ws.cell(row_idx, col).fill = self.PREMIUM_FILL

        widths = [14, 28, 20, 36, 12, 12, 12, 16, 16, 12, 12, 12, 14, 14]
        for col, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

    def _write_open_shifts_sheet(self, ws, entries: List[OpenEntry]):
        self._write_header(ws, OPEN_SHIFTS_HEADERS)
        for row_idx, entry in enumerate(entries, start=2):
            self._write_row(ws, row_idx, [
                entry.employee_id,
                entry.employee_name,
                entry.work_center,
                entry.start.strftime('%d/%m/%Y'),
                entry.start.strftime('%H:%M'),
                entry.source_row,
            ])

        for col, width in enumerate([14, 28, 20, 14, 12, 8], start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

    def _write_summary_sheet(self, ws, summaries: List[EmployeeHoursSummary]):
        self._write_header(ws, SUMMARY_HEADERS)
        for row_idx, summary in enumerate(summaries, start=2):
            self._write_row(ws, row_idx, [
                summary.employee_id,
                summary.employee_name,
                summary.shift_count,
                summary.total,
                summary.day_normal,
                summary.night_normal,
                summary.day_holiday_or_sunday,
                summary.night_holiday_or_sunday,
                ", ".join(summary.work_centers),
            ], hours_from=4)
            # Work-center list is text, not hours
            ws.cell(row_idx, 9).number_format = 'General'
            ws.cell(row_idx, 9).alignment = Alignment(horizontal='left')

        for col, width in enumerate([14, 28, 8, 12, 12, 12, 14, 14, 30], start=1):
            ws.column_dimensions[get_column_letter(col)].width = width
