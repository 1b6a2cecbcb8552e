"""
Shift Hours Classifier

Reads check-in/check-out records from an attendance workbook and writes
a workbook with each shift's hours split into day/night and
normal/holiday-or-Sunday buckets.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from application.report_service import ShiftHoursReportService
from config.config_manager import ConfigManager, NightWindowSettings
from domain.errors import AttendanceError
from infrastructure.logger import get_logger, set_console_level

logger = get_logger("Main")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("source", nargs="?", type=Path,
                        help="Attendance workbook (.xlsx); defaults to paths.source_workbook")
    parser.add_argument("-o", "--output", type=Path, help="Output workbook path")
    parser.add_argument("-c", "--config", type=Path, help="JSON configuration file")
    parser.add_argument("--employees", type=Path, help="Employee CSV (ID, Nombre)")
    parser.add_argument("--sheet", help="Worksheet to read (default: active sheet)")
    parser.add_argument("--night-start", type=int, help="First night hour (0-23)")
    parser.add_argument("--night-end", type=int, help="First day hour after the night (0-23)")
    parser.add_argument("--sort-by", choices=["date", "employee"], help="Row ordering")
    parser.add_argument("--save-night-window", action="store_true",
                        help="Persist --night-start/--night-end to the configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug messages on the console")
    return parser


def main(argv=None) -> int:
    """Application entry point."""
    args = build_arg_parser().parse_args(argv)
    if args.verbose:
        set_console_level(logging.DEBUG)

    night_given = args.night_start is not None or args.night_end is not None
    if args.save_night_window and not night_given:
        logger.error("--save-night-window needs --night-start and/or --night-end")
        return 1

    manager = ConfigManager(args.config) if args.config else ConfigManager()
    config = manager.load()

    # Command-line values override the persisted ones; only the night window can be saved
    if night_given:
        config.night_window = NightWindowSettings(
            start_hour=args.night_start if args.night_start is not None else config.night_window.start_hour,
            end_hour=args.night_end if args.night_end is not None else config.night_window.end_hour,
        )
        if args.save_night_window:
            try:
                manager.set_night_window(config.night_window.start_hour, config.night_window.end_hour)
            except AttendanceError as e:
                logger.error(str(e))
                return 1
    if args.employees:
        config.paths.employee_csv = str(args.employees)
    if args.sheet:
        config.paths.source_sheet = args.sheet
    if args.sort_by:
        config.output_settings.sort_by = args.sort_by

    try:
        params = ShiftHoursReportService.build_params_from_config(
            config, source_path=args.source, output_path=args.output
        )
        result = ShiftHoursReportService(params.timezone).generate_report(params)
    except (AttendanceError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1

    print(
        f"{len(result.rows)} shifts written to {result.output_path} "
        f"({len(result.open_entries)} open, {result.rejected_count} rejected)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
