"""Rollover rules evaluated right before each write."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..utils.errors import ConfigurationError
from ..utils.types import ActiveFile, RotationDecision

DEFAULT_SIZE_THRESHOLD = 10 * 1024 * 1024


class RotationPolicy:
    """Decide whether the live file must be rotated before the next record.

    The calendar date is checked before the size so a file never spans two
    days, even when it is still under the size cap.
    """

    def __init__(self, size_threshold: int = DEFAULT_SIZE_THRESHOLD, rotate_daily: bool = True) -> None:
        if isinstance(size_threshold, bool) or not isinstance(size_threshold, int) or size_threshold <= 0:
            raise ConfigurationError(f"Size threshold must be a positive integer, got {size_threshold!r}")
        self.size_threshold = size_threshold
        self.rotate_daily = rotate_daily

    def decide(self, active: Optional[ActiveFile], record_size: int, now: datetime) -> RotationDecision:
        if active is None:
            return RotationDecision.NONE
        # Nothing to roll over yet.
        if active.bytes_written == 0:
            return RotationDecision.NONE
        if self.rotate_daily and now.date() != active.created.date():
            return RotationDecision.DATE
        if active.bytes_written + record_size > self.size_threshold:
            return RotationDecision.SIZE
        return RotationDecision.NONE


__all__ = ["DEFAULT_SIZE_THRESHOLD", "RotationPolicy"]
