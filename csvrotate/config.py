"""Settings for a rotating logger, as handed over by the caller."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping

from .rotation.mirror import parse_level
from .rotation.paths import DEFAULT_EXTENSION, LogTarget, resolve_target
from .rotation.policy import DEFAULT_SIZE_THRESHOLD
from .utils.errors import ConfigurationError

_CAMEL_CASE_KEYS = {
    "sizeThresholdBytes": "size_threshold_bytes",
    "rotateDaily": "rotate_daily",
    "mirrorLevel": "mirror_level",
    "filepath": "directory",
    "path": "directory",
}


@dataclass
class LoggerConfig:
    """Read-only configuration consumed when a logger is constructed."""

    filename: str = ""
    directory: str = ""
    size_threshold_bytes: int = DEFAULT_SIZE_THRESHOLD
    rotate_daily: bool = True
    extension: str = DEFAULT_EXTENSION
    mirror: bool = True
    mirror_level: str = "debug"
    colorize: bool = True
    fsync: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LoggerConfig":
        """Build a config from snake_case or camelCase keys; unknown keys are ignored."""

        known = {field.name for field in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known and value is not None:
                values[name] = value
        config = cls(**values)
        config.validate()
        return config

    def with_target(self, filename: str, directory: str) -> "LoggerConfig":
        return replace(self, filename=filename, directory=directory)

    def target(self) -> LogTarget:
        return resolve_target(self.filename, self.directory, self.extension)

    def validate(self) -> None:
        self.target()
        threshold = self.size_threshold_bytes
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold <= 0:
            raise ConfigurationError(f"size_threshold_bytes must be a positive integer, got {threshold!r}")
        parse_level(self.mirror_level)


__all__ = ["LoggerConfig"]
