"""Normalization of inbound records to single text lines."""

from __future__ import annotations

import json
from typing import Mapping

from ..utils.errors import UnsupportedPayload
from ..utils.types import Record


def _escape_newlines(text: str) -> str:
    return text.replace("\r", "\\r").replace("\n", "\\n")


def normalize_record(record: Record) -> str:
    """Convert ``record`` to exactly one line of UTF-8 encodable text.

    Booleans become ``true``/``false``, numbers are stringified, mappings and
    sequences are serialized as compact JSON in insertion order. Raw line
    breaks inside text are escaped so every record occupies one line.
    """

    line = _to_text(record)
    try:
        line.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise UnsupportedPayload(f"Record is not encodable as UTF-8: {exc}") from exc
    return line


def _to_text(record: Record) -> str:
    if record is None:
        raise UnsupportedPayload("Record is empty")
    if isinstance(record, bool):
        return "true" if record else "false"
    if isinstance(record, (int, float)):
        return str(record)
    if isinstance(record, str):
        return _escape_newlines(record)
    if isinstance(record, (bytes, bytearray)):
        try:
            return _escape_newlines(bytes(record).decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise UnsupportedPayload(f"Binary record is not valid UTF-8: {exc}") from exc
    if isinstance(record, (Mapping, list, tuple)):
        if isinstance(record, Mapping) and not isinstance(record, dict):
            record = dict(record)
        try:
            return json.dumps(record, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise UnsupportedPayload(f"Record cannot be serialized: {exc}") from exc
    raise UnsupportedPayload(f"Unsupported record type: {type(record).__name__}")


__all__ = ["normalize_record"]
