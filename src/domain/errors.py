"""
Domain Errors Module

Exception hierarchy shared by the domain, application and infrastructure layers.
"""


class AttendanceError(Exception):
    """Base exception for attendance-related errors."""
    pass


class ConfigurationError(AttendanceError):
    """
    Raised when a run is configured with values the engine cannot use.

    Aborts the run before any shift is classified, so no partially-wrong
    breakdowns are ever produced.
    """
    pass


class InvalidShiftError(AttendanceError, ValueError):
    """Raised when a shift's end is not strictly after its start."""

    def __init__(self, start, end, message: str = None):
        self.start = start
        self.end = end
        self.message = message or f"Shift end {end} must be after start {start}"
        super().__init__(self.message)
