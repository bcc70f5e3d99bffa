"""Orchestrates rotation checks, file appends and the console mirror."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, Callable, List, Optional

from ..utils.errors import LogIOError, UnsupportedPayload
from ..utils.fault_log import FaultLog
from ..utils.types import ActiveFile, ErrorKind, LogEvent, Record, RotatedFile, RotationDecision, WriteResult
from .mirror import MirrorSink
from .paths import LogTarget
from .policy import RotationPolicy
from .records import normalize_record
from .writer import FileWriterSink

if TYPE_CHECKING:  # pragma: no cover
    from ..config import LoggerConfig

LOGGER = logging.getLogger(__name__)

Listener = Callable[[LogEvent], None]


class RotatingLogger:
    """Append records to a log target, rotating the live file as needed.

    All file work for one target happens under a single lock: the rotation
    check, the rename and the append are never interleaved with another
    write. The mirror is fed outside the lock and never affects the result.
    """

    def __init__(
        self,
        target: LogTarget,
        *,
        policy: Optional[RotationPolicy] = None,
        sink: Optional[FileWriterSink] = None,
        mirror: Optional[MirrorSink] = None,
        fault_log: Optional[FaultLog] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.target = target
        self.policy = policy or RotationPolicy()
        self.sink = sink or FileWriterSink(target)
        self.mirror = mirror
        self.fault_log = fault_log or FaultLog(target.directory)
        self._clock = clock or self._default_clock
        self._active: Optional[ActiveFile] = None
        self._lock = Lock()
        self._listeners: List[Listener] = []

    @classmethod
    def from_config(
        cls,
        config: LoggerConfig,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "RotatingLogger":
        config.validate()
        target = config.target()
        mirror = None
        if config.mirror:
            mirror = MirrorSink(level=config.mirror_level, colorize=config.colorize)
        return cls(
            target,
            policy=RotationPolicy(config.size_threshold_bytes, config.rotate_daily),
            sink=FileWriterSink(target, fsync=config.fsync),
            mirror=mirror,
            clock=clock,
        )

    # ------------------------------------------------------------------
    @property
    def active_path(self) -> Path:
        return self.target.live_path

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def write(self, record: Record) -> Optional[WriteResult]:
        """Durably append one record. ``None`` records are ignored."""

        if record is None:
            return None

        try:
            line = normalize_record(record)
        except UnsupportedPayload as exc:
            return self._fail(ErrorKind.UNSUPPORTED_PAYLOAD, exc, record)

        record_size = len(line.encode("utf-8")) + 1
        rotated: Optional[RotatedFile] = None
        failure: Optional[LogIOError] = None
        with self._lock:
            try:
                now = self._clock()
                if self._active is None:
                    self._active = self.sink.open(now)
                decision = self.policy.decide(self._active, record_size, now)
                if decision is not RotationDecision.NONE:
                    LOGGER.info("Rotating %s (%s)", self._active.path.name, decision.value)
                    active, self._active = self._active, None
                    rotated = self.sink.rotate(active)
                    self._active = self.sink.open(now)
                bytes_written = self.sink.append(self._active, line)
            except LogIOError as exc:
                self.sink.close(self._active)
                self._active = None
                failure = exc

        if self.mirror is not None:
            self.mirror.append(line)

        if rotated is not None:
            self._emit(LogEvent(kind="rotated", record=record, rotated=rotated))
        if failure is not None:
            return self._fail(ErrorKind.IO, failure, record, line=line, rotated=rotated)

        self._emit(LogEvent(kind="written", line=line, record=record, rotated=rotated))
        return WriteResult(ok=True, line=line, bytes_written=bytes_written, rotated=rotated)

    def close(self) -> None:
        with self._lock:
            self.sink.close(self._active)
            self._active = None
        if self.mirror is not None:
            self.mirror.close()
        self.fault_log.close()

    def __enter__(self) -> "RotatingLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    def _fail(
        self,
        kind: ErrorKind,
        exc: Exception,
        record: Record,
        *,
        line: Optional[str] = None,
        rotated: Optional[RotatedFile] = None,
    ) -> WriteResult:
        detail = str(exc)
        LOGGER.warning("Failed to log record to %s: %s", self.target.live_name, detail)
        self.fault_log.record(kind, detail, record, exc)
        self._emit(LogEvent(kind="error", line=line, record=record, error_kind=kind, detail=detail))
        return WriteResult(ok=False, line=line, error_kind=kind, detail=detail, rotated=rotated)

    def _emit(self, event: LogEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                LOGGER.exception("Listener %r failed on %s event", listener, event.kind)

    @staticmethod
    def _default_clock() -> datetime:
        return datetime.now()


__all__ = ["Listener", "RotatingLogger"]
