"""Unit tests for the per-target logger registry."""

from __future__ import annotations

from pathlib import Path

from csvrotate.config import LoggerConfig
from csvrotate.registry import LoggerRegistry
from csvrotate.utils.types import ErrorKind


def _config(**overrides) -> LoggerConfig:
    values = {"mirror": False, "fsync": False}
    values.update(overrides)
    return LoggerConfig(**values)


def test_same_target_shares_one_logger(tmp_path: Path, clock) -> None:
    with LoggerRegistry(_config(filename="temp", directory=str(tmp_path)), clock=clock) as registry:
        assert registry.get() is registry.get()
        assert registry.write("10,20").ok
        assert registry.write("11,21").ok
        assert len(registry.targets) == 1
    assert (tmp_path / "_temp.csv").read_text("utf-8") == "10,20\n11,21\n"


def test_record_supplied_target_fills_in_missing_config(tmp_path: Path, clock) -> None:
    events = []
    with LoggerRegistry(_config(), listeners=[events.append], clock=clock) as registry:
        registry.write("a", filename="first", directory=str(tmp_path))
        registry.write("b", filename="second", directory=str(tmp_path / "nested"))
        assert len(registry.targets) == 2

    assert (tmp_path / "_first.csv").read_text("utf-8") == "a\n"
    assert (tmp_path / "nested" / "_second.csv").read_text("utf-8") == "b\n"
    assert [event.kind for event in events] == ["written", "written"]


def test_configured_target_takes_precedence(tmp_path: Path, clock) -> None:
    config = _config(filename="temp", directory=str(tmp_path))
    with LoggerRegistry(config, clock=clock) as registry:
        registry.write("10,20", filename="other", directory=str(tmp_path / "other"))
    assert (tmp_path / "_temp.csv").exists()
    assert not (tmp_path / "other").exists()


def test_missing_target_is_a_configuration_error(tmp_path: Path) -> None:
    with LoggerRegistry(_config(directory=str(tmp_path))) as registry:
        result = registry.write("10,20")
    assert result.ok is False
    assert result.error_kind is ErrorKind.CONFIGURATION
    assert "filename" in result.detail
    assert list(tmp_path.iterdir()) == []
