"""Best-effort console mirror of every logged record."""

from __future__ import annotations

import logging
import queue
import sys
import threading
from datetime import datetime
from typing import Callable, Optional, TextIO

import colorama
from colorama import Fore, Style

from ..utils.errors import ConfigurationError

LOGGER = logging.getLogger(__name__)

# Records are always mirrored at this severity.
RECORD_LEVEL = logging.DEBUG

_STOP = object()


def parse_level(level: object) -> int:
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ConfigurationError(f"Unknown mirror level: {level!r}")
    return value


class MirrorSink:
    """Echo records to a console stream from a background worker.

    ``append`` never blocks on the stream and never raises: lines are queued
    and written by a daemon thread, and any failure there is logged and the
    line dropped. When ``level`` is above DEBUG nothing is mirrored.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        level: object = "debug",
        colorize: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.stream = stream
        self.level = parse_level(level)
        self.colorize = colorize
        self._clock = clock or datetime.now
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._worker_lock = threading.Lock()
        self._closed = False
        if colorize:
            colorama.just_fix_windows_console()

    @property
    def enabled(self) -> bool:
        return self.level <= RECORD_LEVEL

    def append(self, line: str) -> None:
        if not self.enabled:
            return
        with self._worker_lock:
            if self._closed:
                return
            if self._worker is None:
                self._worker = threading.Thread(target=self._run, name="csvrotate-mirror", daemon=True)
                self._worker.start()
            self._queue.put(line)

    def flush(self) -> None:
        """Block until every queued line has been handled."""

        self._queue.join()

    def close(self, timeout: Optional[float] = 5.0) -> None:
        with self._worker_lock:
            if self._closed:
                return
            self._closed = True
            worker = self._worker
            if worker is not None:
                self._queue.put(_STOP)
        if worker is not None:
            worker.join(timeout)

    # ------------------------------------------------------------------
    def format(self, line: str) -> str:
        stamp = self._clock().strftime("%H:%M:%S")
        level = logging.getLevelName(RECORD_LEVEL).lower()
        if self.colorize:
            level = f"{Fore.BLUE}{level}{Style.RESET_ALL}"
        return f"{stamp} - {level}: {line}"

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                stream = self.stream if self.stream is not None else sys.stdout
                stream.write(self.format(str(item)) + "\n")
                stream.flush()
            except Exception:
                LOGGER.exception("Mirror write failed; dropping line")
            finally:
                self._queue.task_done()


__all__ = ["MirrorSink", "RECORD_LEVEL", "parse_level"]
