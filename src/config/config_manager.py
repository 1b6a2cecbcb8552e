"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Provides bi-directional mapping between the settings dataclasses and JSON persistence.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from domain.entities import NightWindow
from domain.errors import ConfigurationError
from domain.timestamp_parser import DEFAULT_TIMEZONE
from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")


@dataclass
class NightWindowSettings:
    """
    Night window hours as persisted by the host.

    Both hours are unset by default: deployments disagree on the start
    hour (19 vs 21), so the host must state it explicitly.
    """
    start_hour: Optional[int] = None
    end_hour: Optional[int] = None

    @property
    def is_configured(self) -> bool:
        return self.start_hour is not None and self.end_hour is not None

    def to_night_window(self) -> NightWindow:
        """
        Build the validated NightWindow.

        Raises:
            ConfigurationError: If an hour is unset or out of range
        """
        if not self.is_configured:
            raise ConfigurationError(
                "Night window is not configured: set night_window.start_hour and "
                "night_window.end_hour (0-23)"
            )
        return NightWindow(start_hour=self.start_hour, end_hour=self.end_hour)


@dataclass
class Paths:
    """File paths configuration."""
    source_workbook: str = ""
    source_sheet: str = ""     # Empty = active sheet
    employee_csv: str = ""
    output_dir: str = ""       # Empty = next to the source workbook


@dataclass
class OutputSettings:
    """Output settings for generated report."""
    filename_pattern: str = "horas_{year}_{month}.xlsx"
    sort_by: str = "date"      # "date" or "employee"
    include_open_shifts: bool = True
    include_summary: bool = True


@dataclass
class AppConfig:
    """Main application configuration container."""
    night_window: NightWindowSettings = field(default_factory=NightWindowSettings)
    timezone: str = DEFAULT_TIMEZONE
    paths: Paths = field(default_factory=Paths)
    output_settings: OutputSettings = field(default_factory=OutputSettings)


class ConfigManager:
    """
    JSON-backed store for AppConfig.

    Missing sections fall back to defaults; an unreadable file is logged
    and replaced by the defaults in memory (the file itself is left alone).
    """

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.json"

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Failed to load config {self.config_path}, using defaults: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = self._config_to_dict(self._config)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def set_night_window(self, start_hour: int, end_hour: int) -> NightWindow:
        """
        Validate and persist a new night window (administrative action).

        Raises:
            ConfigurationError: If either hour is out of range; nothing is saved
        """
        window = NightWindow(start_hour=start_hour, end_hour=end_hour)
        self._config.night_window = NightWindowSettings(start_hour=start_hour, end_hour=end_hour)
        self.save()
        logger.info(f"Night window set to {start_hour:02d}:00-{end_hour:02d}:00")
        return window

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "night_window": {
                "start_hour": config.night_window.start_hour,
                "end_hour": config.night_window.end_hour
            },
            "timezone": config.timezone,
            "paths": {
                "source_workbook": config.paths.source_workbook,
                "source_sheet": config.paths.source_sheet,
                "employee_csv": config.paths.employee_csv,
                "output_dir": config.paths.output_dir
            },
            "output_settings": {
                "filename_pattern": config.output_settings.filename_pattern,
                "sort_by": config.output_settings.sort_by,
                "include_open_shifts": config.output_settings.include_open_shifts,
                "include_summary": config.output_settings.include_summary
            }
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        night_data = data.get("night_window", {})
        paths_data = data.get("paths", {})
        output_data = data.get("output_settings", {})

        night_window = NightWindowSettings(
            start_hour=night_data.get("start_hour"),
            end_hour=night_data.get("end_hour")
        )

        paths = Paths(
            source_workbook=paths_data.get("source_workbook", ""),
            source_sheet=paths_data.get("source_sheet", ""),
            employee_csv=paths_data.get("employee_csv", ""),
            output_dir=paths_data.get("output_dir", "")
        )

        output_settings = OutputSettings(
            filename_pattern=output_data.get("filename_pattern", "horas_{year}_{month}.xlsx"),
            sort_by=output_data.get("sort_by", "date"),
            include_open_shifts=output_data.get("include_open_shifts", True),
            include_summary=output_data.get("include_summary", True)
        )

        return AppConfig(
            night_window=night_window,
            timezone=data.get("timezone", DEFAULT_TIMEZONE),
            paths=paths,
            output_settings=output_settings
        )
