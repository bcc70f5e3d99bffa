"""Unit tests for logger configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from csvrotate.config import LoggerConfig
from csvrotate.rotation.logger import RotatingLogger
from csvrotate.utils.errors import ConfigurationError


def test_from_mapping_accepts_camel_case_keys() -> None:
    config = LoggerConfig.from_mapping(
        {
            "filename": "temp",
            "directory": "/var/log/csv",
            "sizeThresholdBytes": 2048,
            "rotateDaily": False,
            "mirrorLevel": "info",
            "unrelated": "ignored",
        }
    )
    assert config.size_threshold_bytes == 2048
    assert config.rotate_daily is False
    assert config.mirror_level == "info"
    assert config.target().live_path == Path("/var/log/csv/_temp.csv")


def test_defaults() -> None:
    config = LoggerConfig.from_mapping({"filename": "temp", "directory": "logs"})
    assert config.size_threshold_bytes == 10_485_760
    assert config.rotate_daily is True
    assert config.extension == "csv"


@pytest.mark.parametrize(
    "data",
    [
        {"filename": "", "directory": "logs"},
        {"filename": "temp", "directory": ""},
        {"filename": "temp", "directory": "logs", "sizeThresholdBytes": 0},
        {"filename": "temp", "directory": "logs", "mirrorLevel": "shouty"},
    ],
)
def test_invalid_settings_raise(data) -> None:
    with pytest.raises(ConfigurationError):
        LoggerConfig.from_mapping(data)


def test_logger_from_config(tmp_path: Path) -> None:
    config = LoggerConfig(
        filename="temp",
        directory=str(tmp_path),
        size_threshold_bytes=4096,
        rotate_daily=False,
        mirror=False,
        fsync=False,
    )
    with RotatingLogger.from_config(config) as logger:
        assert logger.mirror is None
        assert logger.policy.size_threshold == 4096
        assert logger.policy.rotate_daily is False
        assert logger.write("10,20").ok
    assert (tmp_path / "_temp.csv").read_text("utf-8") == "10,20\n"
