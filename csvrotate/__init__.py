"""Append records to CSV logs that rotate daily or by size."""

from .config import LoggerConfig
from .registry import LoggerRegistry
from .rotation import (
    FileWriterSink,
    LogTarget,
    MirrorSink,
    RotatingLogger,
    RotationPolicy,
    normalize_record,
    resolve_target,
)
from .utils.errors import ConfigurationError, CsvRotateError, LogIOError, UnsupportedPayload
from .utils.types import ErrorKind, LogEvent, RotatedFile, RotationDecision, WriteResult

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "CsvRotateError",
    "ErrorKind",
    "FileWriterSink",
    "LogEvent",
    "LogIOError",
    "LogTarget",
    "LoggerConfig",
    "LoggerRegistry",
    "MirrorSink",
    "RotatedFile",
    "RotatingLogger",
    "RotationDecision",
    "RotationPolicy",
    "UnsupportedPayload",
    "WriteResult",
    "normalize_record",
    "resolve_target",
]
