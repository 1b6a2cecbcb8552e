"""
Report Service Module

Application layer service that orchestrates one classified-hours run:
raw records -> shifts -> hour breakdowns -> report rows.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from config.config_manager import AppConfig
from domain.day_classifier import DayClassifier
from domain.entities import (
    EmployeeHoursSummary,
    NightWindow,
    OpenEntry,
    RawAttendanceRecord,
    Shift,
    ShiftReportRow,
)
from domain.errors import ConfigurationError
from domain.holiday_calendar import HolidayCalendar
from domain.hours_calculator import ShiftHoursCalculator
from domain.hours_summary import HoursSummaryCalculator
from domain.shift_builder import ShiftBuilder
from domain.sorting import SORT_BY_DATE, SORT_BY_EMPLOYEE, sort_open_entries, sort_report_rows
from domain.timestamp_parser import DEFAULT_TIMEZONE, TimestampParser
from infrastructure.logger import get_logger

logger = get_logger("ReportService")


class NameResolver(Protocol):
    """Resolves an employee id to a display name."""

    def resolve(self, employee_id: str) -> str:
        ...


class _NoNames:
    def resolve(self, employee_id: str) -> str:
        return ""


@dataclass
class ReportGenerationParams:
    """
    Parameters for report generation.

    This dataclass encapsulates all parameters needed for report generation,
    decoupling the service from the persisted AppConfig.
    """
    source_path: Path
    output_path: Path
    night_window: NightWindow
    source_sheet: Optional[str] = None
    employee_csv_path: Optional[Path] = None
    timezone: str = DEFAULT_TIMEZONE
    sort_by: str = SORT_BY_DATE
    include_open_shifts: bool = True
    include_summary: bool = True


@dataclass
class ReportResult:
    """
    Result of one classified-hours run.

    Attributes:
        rows: One row per classified shift
        open_entries: Entries without a usable exit, oldest first
        summaries: Per-employee totals
        processed_count: Records seen
        skipped_count: Records without a usable entry
        invalid_count: Records whose exit is not after their entry
        zero_length_count: Shifts that collapsed to zero minutes
        output_path: Written workbook, when the run wrote one
    """
    rows: List[ShiftReportRow] = field(default_factory=list)
    open_entries: List[OpenEntry] = field(default_factory=list)
    summaries: List[EmployeeHoursSummary] = field(default_factory=list)
    processed_count: int = 0
    skipped_count: int = 0
    invalid_count: int = 0
    zero_length_count: int = 0
    output_path: Optional[Path] = None

    @property
    def rejected_count(self) -> int:
        return self.skipped_count + self.invalid_count + self.zero_length_count


def format_date_range(shift: Shift) -> str:
    return f"{shift.start:%d/%m/%Y %H:%M} - {shift.end:%d/%m/%Y %H:%M}"


class ShiftHoursReportService:
    """
    Application service for classified-hours reports.

    This service:
    - Validates the night window before touching any record
    - Creates a fresh holiday cache per run
    - Resolves employee names through an injected NameResolver
    - Logs skip counts for the run
    """

    def __init__(self, timezone: str = DEFAULT_TIMEZONE):
        self.timezone = timezone
        self.builder = ShiftBuilder(TimestampParser(timezone))

    def build_report(
        self,
        records: Iterable[RawAttendanceRecord],
        night_window: NightWindow,
        name_resolver: Optional[NameResolver] = None,
        sort_by: str = SORT_BY_DATE
    ) -> ReportResult:
        """
        Classify every shift in a batch of raw records.

        Args:
            records: Raw attendance records
            night_window: Validated night window for this run
            name_resolver: Employee name lookup; names are empty when omitted
            sort_by: Row ordering, "date" or "employee"

        Returns:
            ReportResult with rows, open entries, summaries and counts

        Raises:
            ConfigurationError: If the night window or ordering is unusable
        """
        if not isinstance(night_window, NightWindow):
            raise ConfigurationError(f"Expected a NightWindow, got {night_window!r}")
        if sort_by not in (SORT_BY_DATE, SORT_BY_EMPLOYEE):
            raise ConfigurationError(f"Unknown sort order: {sort_by!r}")

        resolver = name_resolver or _NoNames()
        day_classifier = DayClassifier(HolidayCalendar())
        calculator = ShiftHoursCalculator(night_window, day_classifier)

        built = self.builder.build(records)
        for invalid in built.invalid:
            logger.debug(f"Row {invalid.record.source_row} ({invalid.record.employee_id}) rejected: {invalid.reason}")

        rows: List[ShiftReportRow] = []
        zero_length = 0
        for shift in built.shifts:
            hours = calculator.classify(shift)
            if not hours.is_valid:
                zero_length += 1
                logger.debug(f"Row {shift.source_row} ({shift.employee_id}) is shorter than a minute, skipped")
                continue

            rows.append(ShiftReportRow(
                employee_id=shift.employee_id,
                employee_name=resolver.resolve(shift.employee_id),
                work_center=shift.work_center,
                date_range=format_date_range(shift),
                shift_date=shift.shift_date,
                start_time=f"{shift.start:%H:%M}",
                end_time=f"{shift.end:%H:%M}",
                start_day_type=day_classifier.classify(shift.start.date()),
                end_day_type=day_classifier.classify(shift.end.date()),
                hours=hours,
            ))

        rows = sort_report_rows(rows, sort_by)
        result = ReportResult(
            rows=rows,
            open_entries=sort_open_entries(
                replace(entry, employee_name=resolver.resolve(entry.employee_id))
                for entry in built.open_entries
            ),
            summaries=HoursSummaryCalculator().summarize(rows),
            processed_count=built.processed,
            skipped_count=built.skipped,
            invalid_count=len(built.invalid),
            zero_length_count=zero_length,
        )

        logger.info(
            f"Classified {len(rows)} shifts from {built.processed} records: "
            f"{len(result.open_entries)} open, {result.skipped_count} without entry, "
            f"{result.invalid_count} invalid, {zero_length} zero-length"
        )
        return result

    def generate_report(self, params: ReportGenerationParams) -> ReportResult:
        """
        Read the source workbook, classify it and write the output workbook.

        Args:
            params: ReportGenerationParams containing all necessary configuration

        Returns:
            ReportResult with the outcome of report generation

        Raises:
            ConfigurationError: If the night window is unusable
            ExcelFormatError: If the source sheet layout is not recognised
            FileNotFoundError: If the source workbook does not exist
        """
        from infrastructure.employee_directory import EmployeeDirectory
        from infrastructure.excel_parser import AttendanceSheetParser
        from infrastructure.excel_writer import ExcelWriter

        logger.info(f"Starting report for {params.source_path}")

        records = AttendanceSheetParser().parse_file(params.source_path, params.source_sheet or None)

        directory = None
        if params.employee_csv_path:
            directory = EmployeeDirectory.from_csv(params.employee_csv_path)
            if not len(directory):
                logger.warning(f"No employees loaded from {params.employee_csv_path}; names will be empty")

        service = self if params.timezone == self.timezone else ShiftHoursReportService(params.timezone)
        result = service.build_report(records, params.night_window, directory, params.sort_by)

        logger.info(f"Writing report: {params.output_path}")
        ExcelWriter().create_report(
            result.rows,
            params.output_path,
            open_entries=result.open_entries if params.include_open_shifts else None,
            summaries=result.summaries if params.include_summary else None,
        )
        result.output_path = params.output_path
        logger.info("Report written")
        return result

    @staticmethod
    def build_params_from_config(
        config: AppConfig,
        source_path: Optional[Path] = None,
        output_path: Optional[Path] = None,
        report_date: Optional[date] = None
    ) -> ReportGenerationParams:
        """
        Build ReportGenerationParams from AppConfig.

        Args:
            config: Application configuration (AppConfig from config_manager)
            source_path: Source workbook; defaults to paths.source_workbook
            output_path: Output workbook; defaults to output_dir + filename_pattern
            report_date: Date used for the {year}/{month} filename placeholders

        Returns:
            ReportGenerationParams ready for generate_report()

        Raises:
            ConfigurationError: If the night window is unset or no source is given
        """
        from infrastructure.excel_writer import format_filename

        night_window = config.night_window.to_night_window()

        source = source_path or (Path(config.paths.source_workbook) if config.paths.source_workbook else None)
        if source is None:
            raise ConfigurationError("No source workbook given")

        if output_path is None:
            when = report_date or date.today()
            out_dir = Path(config.paths.output_dir) if config.paths.output_dir else source.parent
            output_path = out_dir / format_filename(
                config.output_settings.filename_pattern, when.year, when.month
            )

        return ReportGenerationParams(
            source_path=source,
            output_path=output_path,
            night_window=night_window,
            source_sheet=config.paths.source_sheet or None,
            employee_csv_path=Path(config.paths.employee_csv) if config.paths.employee_csv else None,
            timezone=config.timezone,
            sort_by=config.output_settings.sort_by,
            include_open_shifts=config.output_settings.include_open_shifts,
            include_summary=config.output_settings.include_summary,
        )
