"""Live and rotated file naming for a log target."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Tuple, Union

from ..utils.errors import ConfigurationError

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_EXTENSION = "csv"


@dataclass(frozen=True)
class LogTarget:
    """A logical log identified by directory, base filename and extension.

    The live file is ``<directory>/_<filename>.<extension>``; rotated files
    append a date stamp and, from the second rotation of a day onwards, a
    sequence number: ``_<filename>.<extension>.<YYYY-MM-DD>[.<n>]``.
    """

    directory: Path
    filename: str
    extension: str = DEFAULT_EXTENSION

    @property
    def live_name(self) -> str:
        return f"_{self.filename}.{self.extension}"

    @property
    def live_path(self) -> Path:
        return self.directory / self.live_name

    def rotated_path(self, day: date, sequence: int = 0) -> Path:
        name = f"{self.live_name}.{day.strftime(DATE_FORMAT)}"
        if sequence:
            name = f"{name}.{sequence}"
        return self.directory / name

    def parse_rotated(self, name: str) -> Optional[Tuple[date, int]]:
        """Return ``(day, sequence)`` for a rotated file name of this target."""

        pattern = re.escape(self.live_name) + r"\.(\d{4}-\d{2}-\d{2})(?:\.(\d+))?"
        match = re.fullmatch(pattern, name)
        if match is None:
            return None
        try:
            day = datetime.strptime(match.group(1), DATE_FORMAT).date()
        except ValueError:
            return None
        return day, int(match.group(2) or 0)


def resolve_target(
    filename: str,
    directory: Union[str, Path],
    extension: str = DEFAULT_EXTENSION,
) -> LogTarget:
    """Build a :class:`LogTarget`, rejecting empty names."""

    if not filename or not str(filename).strip():
        raise ConfigurationError("No filename specified")
    if directory is None or not str(directory).strip():
        raise ConfigurationError("No directory specified")
    if not extension or not extension.strip(". "):
        raise ConfigurationError("No file extension specified")
    return LogTarget(Path(directory), str(filename), extension.strip(". "))


__all__ = ["DATE_FORMAT", "DEFAULT_EXTENSION", "LogTarget", "resolve_target"]
