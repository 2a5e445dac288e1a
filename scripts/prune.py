"""Trim a log directory to a file-count and byte budget, oldest files first."""

from __future__ import annotations

import argparse
from pathlib import Path

from sinklog.core import retention
from sinklog.core.errors import RetentionError
from sinklog.core.logging import LOG, setup_logger
from sinklog.core.sink import DEFAULT_MAX_BYTES, DEFAULT_MAX_FILES


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dir", dest="directory", type=Path, required=True, help="Log directory")
    parser.add_argument("--max-files", type=int, default=DEFAULT_MAX_FILES, help="Files to keep at most")
    parser.add_argument("--max-bytes", type=int, default=DEFAULT_MAX_BYTES, help="Bytes to keep at most")
    parser.add_argument("--dry-run", action="store_true", help="List what would be removed")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logger()
    if not args.directory.is_dir():
        LOG.error("Not a directory: %s", args.directory)
        return 1

    try:
        if args.dry_run:
            victims = retention.plan(retention.scan(args.directory), args.max_files, args.max_bytes)
            for victim in victims:
                print(f"[prune] would remove {victim.path} ({victim.size} bytes)")
            return 0
        removed = retention.enforce(args.directory, args.max_files, args.max_bytes)
        for path in removed:
            LOG.info("Removed old log file %s", path)
    except RetentionError as exc:
        LOG.error("Pruning stopped: %s (removed %d files first)", exc, len(exc.removed))
        return 1
    print(f"[prune] removed {len(removed)} files from {args.directory}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
