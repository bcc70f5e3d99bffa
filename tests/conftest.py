"""Shared fixtures for the rotation tests."""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from csvrotate.rotation.logger import RotatingLogger
from csvrotate.rotation.paths import resolve_target
from csvrotate.rotation.policy import RotationPolicy
from csvrotate.rotation.writer import FileWriterSink


class FakeClock:
    """Callable clock whose time only moves when a test says so."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 9, 30, 0))


@pytest.fixture
def make_logger(tmp_path: Path, clock: FakeClock):
    created = []

    def _make(size_threshold: int = 1024, *, directory: Path | None = None, **kwargs) -> RotatingLogger:
        target = resolve_target("temp", directory or tmp_path)
        logger = RotatingLogger(
            target,
            policy=RotationPolicy(size_threshold),
            sink=FileWriterSink(target, fsync=False),
            clock=clock,
            **kwargs,
        )
        created.append(logger)
        return logger

    yield _make
    for logger in created:
        logger.close()
