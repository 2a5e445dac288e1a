"""Write one record through the configured sink from the command line."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

import sinklog
from sinklog.core import settings as sink_settings
from sinklog.core.errors import ConfigurationError
from sinklog.core.levels import Level
from sinklog.core.logging import LOG, setup_logger

LEVEL_CHOICES = ["trace", "debug", "info", "warn", "error", "critical"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("message", nargs="+", help="Message text")
    parser.add_argument("--level", choices=LEVEL_CHOICES, default="info", help="Record severity")
    parser.add_argument("--env", type=Path, default=sink_settings.ENV_PATH, help="Path to a .env file")
    parser.add_argument("--dir", dest="directory", default=None, help="Log directory (overrides SINKLOG_DIR)")
    parser.add_argument("--prefix", default=None, help="Log file prefix (overrides SINKLOG_PREFIX)")
    parser.add_argument("--rotate", choices=["none", "hourly", "daily"], default=None, help="Rotation scheme")
    parser.add_argument("--max-bytes", type=int, default=None, help="Byte budget for the log directory")
    parser.add_argument("--max-files", type=int, default=None, help="File budget for the log directory")
    return parser.parse_args(argv)


def overrides(args: argparse.Namespace) -> dict[str, str]:
    pairs = {
        "SINKLOG_DIR": args.directory,
        "SINKLOG_PREFIX": args.prefix,
        "SINKLOG_ROTATE": args.rotate,
        "SINKLOG_MAX_BYTES": args.max_bytes,
        "SINKLOG_MAX_FILES": args.max_files,
    }
    return {key: str(value) for key, value in pairs.items() if value is not None}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logger()
    env = {**sink_settings.load_settings(args.env), **os.environ, **overrides(args)}
    try:
        config = sink_settings.from_env(env)
    except ConfigurationError as exc:
        LOG.error("Invalid configuration: %s", exc)
        return 1

    sink = sinklog.init()
    try:
        sink_settings.apply_settings(sink, config)
        ok = sinklog.log(Level[args.level.upper()], " ".join(args.message))
    finally:
        sinklog.close()
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
