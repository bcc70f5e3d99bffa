"""Filesystem helpers used before any log write."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .errors import LogIOError

LOGGER = logging.getLogger(__name__)


def ensure_directory(directory: Union[str, Path]) -> Path:
    """Create ``directory`` and any missing ancestors.

    Calling this for a directory that already exists is a no-op, including
    when another thread or logger created it a moment earlier. Anything else
    that prevents the directory from existing is reported as
    :class:`LogIOError`.
    """

    directory = Path(directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LogIOError(f"Unable to create directory {directory}: {exc}", directory) from exc
    LOGGER.debug("Directory ready: %s", directory)
    return directory


__all__ = ["ensure_directory"]
