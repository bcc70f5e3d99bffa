"""Command line interface for appending records to a rotating CSV log."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, List

from .config import LoggerConfig
from .rotation.logger import RotatingLogger
from .rotation.policy import DEFAULT_SIZE_THRESHOLD
from .utils.errors import ConfigurationError
from .utils.types import LogEvent, Record

LOGGER = logging.getLogger(__name__)


def _read_records(sources: Iterable[Iterable[str]], parse_json: bool) -> Iterator[Record]:
    for source in sources:
        for raw in source:
            line = raw.rstrip("\r\n")
            if not line:
                continue
            if not parse_json:
                yield line
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as exc:
                LOGGER.warning("Skipping invalid JSON line %r: %s", line, exc)


def build_logger(config: LoggerConfig) -> RotatingLogger:
    return RotatingLogger.from_config(config)


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Append records to a daily/size rotated CSV log")
    parser.add_argument("inputs", nargs="*", help="Files with one record per line (default: stdin)")
    parser.add_argument("--filename", required=True, help="Base name of the log, written as _<name>.csv")
    parser.add_argument("--directory", required=True, help="Directory that holds the log files")
    parser.add_argument("--max-bytes", type=int, default=DEFAULT_SIZE_THRESHOLD)
    parser.add_argument("--no-daily", action="store_true", help="Disable rotation on date change")
    parser.add_argument("--json", action="store_true", help="Parse each input line as a JSON payload")
    parser.add_argument("--no-mirror", action="store_true", help="Do not echo records to the console")
    parser.add_argument("--mirror-level", default="debug")
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument("--log-level", default="WARNING")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = LoggerConfig.from_mapping(
            {
                "filename": args.filename,
                "directory": args.directory,
                "size_threshold_bytes": args.max_bytes,
                "rotate_daily": not args.no_daily,
                "mirror": not args.no_mirror,
                "mirror_level": args.mirror_level,
                "colorize": not args.no_color,
            }
        )
    except ConfigurationError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2

    counts = {"written": 0, "errors": 0, "rotations": 0}

    def _count(event: LogEvent) -> None:
        key = {"written": "written", "error": "errors", "rotated": "rotations"}[event.kind]
        counts[key] += 1

    logger = build_logger(config)
    logger.add_listener(_count)
    handles = [Path(name).open("r", encoding="utf-8") for name in args.inputs]
    try:
        for record in _read_records(handles or [sys.stdin], args.json):
            logger.write(record)
        if logger.mirror is not None:
            logger.mirror.flush()
    finally:
        for handle in handles:
            handle.close()
        logger.close()

    summary = dict(counts, active_file=str(logger.active_path))
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0 if counts["errors"] == 0 else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
