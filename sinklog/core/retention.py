"""Keep a log directory within a file-count and a byte budget.

Files are considered oldest first by modification time. Every file is
stat'ed once up front, so sorting never touches the disk again.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import RetentionError


@dataclass(frozen=True)
class LogFile:
    """A regular file found in the log directory."""

    name: str
    path: Path
    size: int
    mtime: float


def scan(directory: str | os.PathLike[str]) -> list[LogFile]:
    """Return the regular files of ``directory``, oldest first."""
    root = Path(directory)
    files: list[LogFile] = []
    try:
        with os.scandir(root) as entries:
            for entry in entries:
                try:
                    if not entry.is_file(follow_symlinks=False):
                        continue
                    st = entry.stat(follow_symlinks=False)
                except OSError as exc:
                    raise RetentionError(f"Cannot stat {entry.path}: {exc}") from exc
                files.append(LogFile(entry.name, root / entry.name, st.st_size, st.st_mtime))
    except RetentionError:
        raise
    except OSError as exc:
        raise RetentionError(f"Cannot list {root}: {exc}") from exc
    files.sort(key=lambda f: (f.mtime, f.name))
    return files


def plan(
    files: list[LogFile],
    max_files: int,
    max_bytes: int,
    keep: str | None = None,
) -> list[LogFile]:
    """Pick the files to delete, oldest first, so both limits hold.

    ``keep`` names a file that must survive. It still counts toward both
    limits, as an empty file when it is not in ``files`` yet.
    """
    count = len(files)
    total = sum(f.size for f in files)
    if keep is not None and not any(f.name == keep for f in files):
        count += 1

    victims: list[LogFile] = []
    candidates = iter(f for f in files if f.name != keep)
    while count > max_files or total > max_bytes:
        victim = next(candidates, None)
        if victim is None:
            break
        victims.append(victim)
        count -= 1
        total -= victim.size
    return victims


def enforce(
    directory: str | os.PathLike[str],
    max_files: int,
    max_bytes: int,
    keep: str | None = None,
) -> list[Path]:
    """Delete the oldest files of ``directory`` until both limits hold.

    Returns the removed paths and logs nothing, so it is safe to call while
    the sink lock is held. The first failing removal aborts the pass with
    :class:`RetentionError`.
    """
    removed: list[Path] = []
    for victim in plan(scan(directory), max_files, max_bytes, keep=keep):
        try:
            victim.path.unlink()
        except OSError as exc:
            raise RetentionError(
                f"Cannot remove {victim.path}: {exc}", removed=[str(p) for p in removed]
            ) from exc
        removed.append(victim.path)
    return removed
