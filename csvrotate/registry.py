"""Keeps one rotating logger per log target."""
from __future__ import annotations

import logging
from datetime import datetime
from threading import Lock
from typing import Callable, Dict, Iterable, List, Optional

from .config import LoggerConfig
from .rotation.logger import Listener, RotatingLogger
from .rotation.paths import LogTarget
from .utils.errors import ConfigurationError
from .utils.types import ErrorKind, Record, WriteResult

LOGGER = logging.getLogger(__name__)


class LoggerRegistry:
    """Hand out a single :class:`RotatingLogger` per directory and filename.

    Producers that target the same log share one logger and therefore one
    lock and one open file. The configured filename and directory take
    precedence; the per-call values are only used to fill in what the
    configuration leaves empty.
    """

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        *,
        listeners: Iterable[Listener] = (),
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.config = config or LoggerConfig()
        self._listeners: List[Listener] = list(listeners)
        self._clock = clock
        self._loggers: Dict[LogTarget, RotatingLogger] = {}
        self._lock = Lock()

    def get(self, filename: Optional[str] = None, directory: Optional[str] = None) -> RotatingLogger:
        config = self.config.with_target(
            self.config.filename or filename or "",
            self.config.directory or directory or "",
        )
        config.validate()
        target = config.target()
        with self._lock:
            logger = self._loggers.get(target)
            if logger is None:
                logger = RotatingLogger.from_config(config, clock=self._clock)
                for listener in self._listeners:
                    logger.add_listener(listener)
                self._loggers[target] = logger
                LOGGER.debug("Created logger for %s", target.live_path)
        return logger

    def write(
        self,
        record: Record,
        filename: Optional[str] = None,
        directory: Optional[str] = None,
    ) -> Optional[WriteResult]:
        try:
            logger = self.get(filename, directory)
        except ConfigurationError as exc:
            LOGGER.warning("Skipping record: %s", exc)
            return WriteResult(ok=False, error_kind=ErrorKind.CONFIGURATION, detail=str(exc))
        return logger.write(record)

    @property
    def targets(self) -> List[LogTarget]:
        with self._lock:
            return list(self._loggers)

    def close_all(self) -> None:
        with self._lock:
            loggers = list(self._loggers.values())
            self._loggers.clear()
        for logger in loggers:
            logger.close()

    def __enter__(self) -> "LoggerRegistry":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close_all()


__all__ = ["LoggerRegistry"]
