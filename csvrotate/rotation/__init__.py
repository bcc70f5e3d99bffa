"""Rotation primitives exposed as a convenience import."""

from .logger import RotatingLogger
from .mirror import MirrorSink
from .paths import LogTarget, resolve_target
from .policy import DEFAULT_SIZE_THRESHOLD, RotationPolicy
from .records import normalize_record
from .writer import FileWriterSink

__all__ = [
    "DEFAULT_SIZE_THRESHOLD",
    "FileWriterSink",
    "LogTarget",
    "MirrorSink",
    "RotatingLogger",
    "RotationPolicy",
    "normalize_record",
    "resolve_target",
]
