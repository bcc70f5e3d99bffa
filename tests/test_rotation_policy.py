"""Unit tests for the rollover rules."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from csvrotate.rotation.policy import DEFAULT_SIZE_THRESHOLD, RotationPolicy
from csvrotate.utils.errors import ConfigurationError
from csvrotate.utils.types import ActiveFile, RotationDecision

DAY = datetime(2024, 5, 1, 23, 59, 0)
NEXT_DAY = datetime(2024, 5, 2, 0, 0, 1)


def _active(size: int, created: datetime = DAY) -> ActiveFile:
    return ActiveFile(path=Path("_temp.csv"), bytes_written=size, created=created)


def test_no_active_file_means_no_rotation() -> None:
    assert RotationPolicy().decide(None, 10, DAY) is RotationDecision.NONE


def test_date_change_rotates() -> None:
    assert RotationPolicy().decide(_active(10), 10, NEXT_DAY) is RotationDecision.DATE


def test_date_takes_precedence_over_size() -> None:
    policy = RotationPolicy(size_threshold=100)
    assert policy.decide(_active(95), 10, NEXT_DAY) is RotationDecision.DATE


def test_size_rotates_only_when_threshold_would_be_exceeded() -> None:
    policy = RotationPolicy(size_threshold=100)
    assert policy.decide(_active(90), 10, DAY) is RotationDecision.NONE
    assert policy.decide(_active(91), 10, DAY) is RotationDecision.SIZE


def test_empty_file_is_never_rotated() -> None:
    policy = RotationPolicy(size_threshold=10)
    assert policy.decide(_active(0), 500, NEXT_DAY) is RotationDecision.NONE


def test_daily_rotation_can_be_disabled() -> None:
    policy = RotationPolicy(rotate_daily=False)
    assert policy.decide(_active(10), 10, NEXT_DAY) is RotationDecision.NONE
    assert policy.size_threshold == DEFAULT_SIZE_THRESHOLD == 10_485_760


@pytest.mark.parametrize("threshold", [0, -1, 1.5, True])
def test_invalid_threshold_is_rejected(threshold) -> None:
    with pytest.raises(ConfigurationError):
        RotationPolicy(size_threshold=threshold)
