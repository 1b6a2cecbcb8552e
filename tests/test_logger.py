"""
Unit tests for the shared logging setup.
"""

import pytest
import logging
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.logger import (
    APP_LOGGER_NAME, LOG_FILE_ENV, LOG_LEVEL_ENV,
    console_level, default_log_path, get_logger, set_console_level
)


def _console_handlers():
    return [
        h for h in logging.getLogger(APP_LOGGER_NAME).handlers
        if not isinstance(h, logging.FileHandler)
    ]


class TestGetLogger:
    """Tests for component loggers."""

    def test_component_logger_is_child_of_app_logger(self):
        logger = get_logger("ReportService")
        assert logger.name == "shift_hours.ReportService"
        assert logger.parent is logging.getLogger(APP_LOGGER_NAME)

    def test_handlers_attached_once(self):
        get_logger("ExcelParser")
        count = len(logging.getLogger(APP_LOGGER_NAME).handlers)
        get_logger("ExcelWriter")
        get_logger("ExcelParser")

        assert len(logging.getLogger(APP_LOGGER_NAME).handlers) == count
        assert get_logger("ExcelWriter").handlers == []

    def test_set_console_level(self):
        get_logger("Main")
        try:
            set_console_level(logging.DEBUG)
            assert all(h.level == logging.DEBUG for h in _console_handlers())
        finally:
            set_console_level(logging.INFO)
        assert all(h.level == logging.INFO for h in _console_handlers())

    def test_file_handler_keeps_debug(self):
        get_logger("Main")
        set_console_level(logging.ERROR)
        try:
            file_handlers = [
                h for h in logging.getLogger(APP_LOGGER_NAME).handlers
                if isinstance(h, logging.FileHandler)
            ]
            assert all(h.level == logging.DEBUG for h in file_handlers)
        finally:
            set_console_level(logging.INFO)


class TestEnvironmentOverrides:
    """Tests for $SHIFT_HOURS_LOG and $SHIFT_HOURS_LOG_LEVEL."""

    def test_log_path_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(LOG_FILE_ENV, str(tmp_path / "run.log"))
        assert default_log_path() == tmp_path / "run.log"

    def test_default_log_path(self, monkeypatch):
        monkeypatch.delenv(LOG_FILE_ENV, raising=False)
        assert default_log_path().name == "shift_hours.log"

    @pytest.mark.parametrize("value, expected", [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("bogus", logging.INFO),
        ("", logging.INFO),
    ])
    def test_console_level(self, monkeypatch, value, expected):
        monkeypatch.setenv(LOG_LEVEL_ENV, value)
        assert console_level() == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
