"""
Logger Module

Console and file logging shared by every component. Handlers live on one
"shift_hours" parent logger; component loggers are its children and
propagate to it, so a run writes a single log file however many
components log.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

APP_LOGGER_NAME = "shift_hours"

# Overrides for the log file path and the console level
LOG_FILE_ENV = "SHIFT_HOURS_LOG"
LOG_LEVEL_ENV = "SHIFT_HOURS_LOG_LEVEL"

_LOG_FILE_NAME = "shift_hours.log"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def default_log_path() -> Path:
    """$SHIFT_HOURS_LOG, else shift_hours.log in the project root."""
    env_path = os.environ.get(LOG_FILE_ENV)
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent.parent / _LOG_FILE_NAME


def console_level() -> int:
    """Console level from $SHIFT_HOURS_LOG_LEVEL; INFO when unset or unknown."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def _app_logger(log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    app = logging.getLogger(APP_LOGGER_NAME)
    if app.handlers:
        return app

    app.setLevel(logging.DEBUG)
    app.propagate = False
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level())
    console.setFormatter(formatter)
    app.addHandler(console)

    log_path = Path(log_file) if log_file else default_log_path()
    try:
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        app.warning(f"Could not open log file {log_path}: {e}; logging to console only")
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        app.addHandler(file_handler)

    return app


def get_logger(name: str, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Get the logger of one component.

    Args:
        name: Component name such as "ReportService"; shown on every line
        log_file: Log file path, honoured only by the call that sets up
            the shared handlers

    Returns:
        Logger named "shift_hours.<name>"
    """
    _app_logger(log_file)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


def set_console_level(level: int) -> None:
    """Change what reaches the console. The log file always keeps DEBUG."""
    for handler in _app_logger().handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
