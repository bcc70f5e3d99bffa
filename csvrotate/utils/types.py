"""Shared value types consumed across the rotation components."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Mapping, Optional, Sequence, Union

Record = Union[str, int, float, bool, bytes, Mapping[str, Any], Sequence[Any], None]


class RotationDecision(Enum):
    """Outcome of a rotation check performed right before a write."""

    NONE = "none"
    DATE = "rotate-by-date"
    SIZE = "rotate-by-size"


class ErrorKind(Enum):
    CONFIGURATION = "configuration"
    IO = "io"
    UNSUPPORTED_PAYLOAD = "unsupported_payload"


@dataclass
class ActiveFile:
    """The live file currently open for appends."""

    path: Path
    bytes_written: int
    created: datetime
    handle: Optional[BinaryIO] = None

    @property
    def closed(self) -> bool:
        return self.handle is None or self.handle.closed


@dataclass(frozen=True)
class RotatedFile:
    """A closed, renamed former live file. Never reopened for writing."""

    path: Path
    day: date
    sequence: int
    size: int


@dataclass
class WriteResult:
    """Outcome of a single :meth:`RotatingLogger.write` call."""

    ok: bool
    line: Optional[str] = None
    bytes_written: Optional[int] = None
    error_kind: Optional[ErrorKind] = None
    detail: Optional[str] = None
    rotated: Optional[RotatedFile] = None


@dataclass
class LogEvent:
    """Lifecycle notification delivered to logger listeners."""

    kind: str
    line: Optional[str] = None
    record: Record = None
    error_kind: Optional[ErrorKind] = None
    detail: Optional[str] = None
    rotated: Optional[RotatedFile] = None


__all__ = [
    "ActiveFile",
    "ErrorKind",
    "LogEvent",
    "Record",
    "RotatedFile",
    "RotationDecision",
    "WriteResult",
]
