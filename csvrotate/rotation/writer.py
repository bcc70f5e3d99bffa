"""Append-only writer that owns the live file and performs rotations."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..utils.errors import LogIOError
from ..utils.fs import ensure_directory
from ..utils.types import ActiveFile, RotatedFile
from .paths import LogTarget

LOGGER = logging.getLogger(__name__)


class FileWriterSink:
    """Open, append to, rotate and close the live file of one log target.

    A line is only acknowledged once every byte has been written and, unless
    ``fsync`` is disabled, synced to disk. Rotation renames the live file to
    the next free date-stamped name and never overwrites an earlier rotation.
    """

    def __init__(self, target: LogTarget, *, fsync: bool = True) -> None:
        self.target = target
        self.fsync = fsync

    # ------------------------------------------------------------------
    def open(self, now: Optional[datetime] = None) -> ActiveFile:
        """Open the live file in append mode, creating it if needed."""

        path = self.target.live_path
        ensure_directory(self.target.directory)
        now = now or datetime.now()
        try:
            handle = open(path, "ab", buffering=0)
        except OSError as exc:
            raise LogIOError(f"Unable to open {path}: {exc}", path) from exc
        try:
            stat = os.fstat(handle.fileno())
        except OSError as exc:
            handle.close()
            raise LogIOError(f"Unable to stat {path}: {exc}", path) from exc

        if stat.st_size:
            # Resuming a file from an earlier run: its last write dates it.
            created = datetime.fromtimestamp(stat.st_mtime, tz=now.tzinfo)
        else:
            created = now
        LOGGER.debug("Opened %s (%d bytes)", path, stat.st_size)
        return ActiveFile(path=path, bytes_written=stat.st_size, created=created, handle=handle)

    def append(self, active: ActiveFile, line: str) -> int:
        """Write ``line`` plus a newline and return the cumulative file size."""

        if active.closed:
            raise LogIOError(f"{active.path} is not open", active.path)

        data = f"{line}\n".encode("utf-8")
        start = active.bytes_written
        view = memoryview(data)
        try:
            while view:
                written = active.handle.write(view)
                if not written:
                    raise OSError(f"short write with {len(view)} bytes remaining")
                view = view[written:]
            if self.fsync:
                os.fsync(active.handle.fileno())
        except OSError as exc:
            self._truncate(active, start)
            raise LogIOError(f"Unable to write to {active.path}: {exc}", active.path) from exc

        active.bytes_written = start + len(data)
        return active.bytes_written

    def rotate(self, active: ActiveFile) -> RotatedFile:
        """Close ``active`` and rename it to the next free rotated name."""

        self.close(active)
        day = active.created.date()
        destination, sequence = self._next_rotated_path(day)
        try:
            size = active.path.stat().st_size
            os.rename(active.path, destination)
        except OSError as exc:
            raise LogIOError(
                f"Unable to rotate {active.path} to {destination}: {exc}", active.path
            ) from exc
        LOGGER.info("Rotated %s -> %s", active.path.name, destination.name)
        return RotatedFile(path=destination, day=day, sequence=sequence, size=size)

    def close(self, active: Optional[ActiveFile]) -> None:
        if active is None or active.handle is None:
            return
        handle, active.handle = active.handle, None
        try:
            handle.close()
        except OSError as exc:  # pragma: no cover - close on an unbuffered handle
            LOGGER.warning("Unable to close %s: %s", active.path, exc)

    # ------------------------------------------------------------------
    def rotated_files(self, day: Optional[date] = None) -> List[RotatedFile]:
        """Return existing rotated files, oldest first."""

        found = []
        for day_, sequence, path in self._scan_rotated():
            if day is None or day_ == day:
                found.append(RotatedFile(path=path, day=day_, sequence=sequence, size=path.stat().st_size))
        return sorted(found, key=lambda item: (item.day, item.sequence))

    def _scan_rotated(self) -> Iterator[Tuple[date, int, Path]]:
        try:
            entries = list(self.target.directory.iterdir())
        except OSError as exc:
            raise LogIOError(f"Unable to list {self.target.directory}: {exc}", self.target.directory) from exc
        for path in entries:
            parsed = self.target.parse_rotated(path.name)
            if parsed is not None:
                yield parsed[0], parsed[1], path

    def _next_rotated_path(self, day: date) -> Tuple[Path, int]:
        sequences = [sequence for day_, sequence, _ in self._scan_rotated() if day_ == day]
        sequence = max(sequences) + 1 if sequences else 0
        return self.target.rotated_path(day, sequence), sequence

    def _truncate(self, active: ActiveFile, size: int) -> None:
        if active.closed:
            return
        try:
            os.ftruncate(active.handle.fileno(), size)
        except OSError:
            LOGGER.exception("Unable to roll back partial write in %s", active.path)


__all__ = ["FileWriterSink"]
