"""Auxiliary ``exceptions.log`` written next to the live log file."""
from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from .fs import ensure_directory
from .types import ErrorKind, Record

LOGGER = logging.getLogger(__name__)

FAULT_FILENAME = "exceptions.log"

_handlers: Dict[Path, logging.Handler] = {}
_handlers_lock = Lock()


def _handler_for(path: Path) -> logging.Handler:
    # One handler per fault file, shared by every logger writing there.
    with _handlers_lock:
        handler = _handlers.get(path)
        if handler is None:
            handler = logging.FileHandler(path, encoding="utf-8", delay=True)
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
            _handlers[path] = handler
        return handler


class FaultLog:
    """Records failed writes in ``<directory>/exceptions.log``."""

    def __init__(self, directory: Path) -> None:
        self.path = Path(directory) / FAULT_FILENAME
        self._logger = logging.getLogger(f"csvrotate.faults.{self.path}")
        self._logger.propagate = False
        self._logger.setLevel(logging.ERROR)

    def record(
        self,
        kind: ErrorKind,
        detail: str,
        record: Record = None,
        exc: Optional[BaseException] = None,
    ) -> None:
        try:
            ensure_directory(self.path.parent)
            handler = _handler_for(self.path)
            if handler not in self._logger.handlers:
                self._logger.addHandler(handler)
            self._logger.error(
                "%s: %s (record=%r)",
                kind.value,
                detail,
                record,
                exc_info=(type(exc), exc, exc.__traceback__) if exc is not None else None,
            )
        except Exception:  # pragma: no cover - the fault file is best effort
            LOGGER.exception("Unable to write fault entry to %s", self.path)

    def close(self) -> None:
        with _handlers_lock:
            handler = _handlers.pop(self.path, None)
        if handler is not None:
            self._logger.removeHandler(handler)
            handler.close()


__all__ = ["FAULT_FILENAME", "FaultLog"]
