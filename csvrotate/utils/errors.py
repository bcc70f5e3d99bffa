"""Exception hierarchy shared by the rotation components."""
from __future__ import annotations


class CsvRotateError(Exception):
    """Base class for every error raised by :mod:`csvrotate`."""


class ConfigurationError(CsvRotateError):
    """Raised when a log target or logger setting is missing or invalid."""


class LogIOError(CsvRotateError):
    """Raised when provisioning, writing, or rotating a log file fails."""

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message)
        self.path = path


class UnsupportedPayload(CsvRotateError):
    """Raised when a record cannot be normalized to a single text line."""


__all__ = [
    "ConfigurationError",
    "CsvRotateError",
    "LogIOError",
    "UnsupportedPayload",
]
