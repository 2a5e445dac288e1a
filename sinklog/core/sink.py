"""The log sink: one lock-guarded destination shared by every writer."""

from __future__ import annotations

import os
import sys
import threading
import time
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Callable, Tuple

from . import retention, rotation
from .errors import ConfigurationError, RetentionError, RotationError, SinkWriteError
from .levels import Level, coerce_level
from .logging import LOG
from .record import Record
from .rotation import Rotation, parse_rotation

DEFAULT_DIRECTORY = Path("log")
DEFAULT_PREFIX = "log"
DEFAULT_MAX_FILES = 10
DEFAULT_MAX_BYTES = 1024 * 1024 * 1024
FILE_MODE = 0o644

# (logger method, message, args) held back until the sink lock is released.
Note = Tuple[Callable[..., None], str, Tuple[Any, ...]]


class Destination(Enum):
    STDOUT = "stdout"
    FILE = "file"


def _opener(path: str, flags: int) -> int:
    return os.open(path, flags | os.O_APPEND | os.O_CREAT, FILE_MODE)


def _report(notes: list[Note]) -> None:
    for emit, msg, args in notes:
        emit(msg, *args)


class Sink:
    """Serialise records to stdout or to a rotating set of files.

    Every state change and every write happens under one lock, so records
    from all threads land in the order they acquired it. The severity check
    in :meth:`write` is the only unlocked read; a stale threshold there only
    lets one record through or drops one, which is accepted for speed.
    """

    def __init__(self, level: Level | int = Level.TRACE, clock: Callable[[], float] = time.time) -> None:
        self.level = coerce_level(level)
        self.destination = Destination.STDOUT
        self.rotation = Rotation.NONE
        self.directory = DEFAULT_DIRECTORY
        self.prefix = DEFAULT_PREFIX
        self.max_files = DEFAULT_MAX_FILES
        self.max_bytes = DEFAULT_MAX_BYTES
        self.last_rotation = 0.0
        self.current_path: Path | None = None
        self._fh: BinaryIO | None = None
        self._clock = clock
        self._lock = threading.Lock()

    def __enter__(self) -> "Sink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # configuration

    def set_level(self, level: Level | int) -> Level:
        new_level = coerce_level(level)
        with self._lock:
            self.level = new_level
        return new_level

    def set_file(
        self,
        directory: str | os.PathLike[str],
        prefix: str,
        rotation_scheme: Rotation | str = Rotation.NONE,
        max_bytes: int = DEFAULT_MAX_BYTES,
        max_files: int = DEFAULT_MAX_FILES,
    ) -> None:
        """Route records to ``directory/prefix.<suffix>``.

        No file is opened here; the next write that passes the threshold
        opens it. A file already open for the old configuration is closed.
        """
        scheme = parse_rotation(rotation_scheme)
        if not prefix:
            raise ConfigurationError("Log file prefix cannot be empty")
        try:
            byte_limit, file_limit = int(max_bytes), int(max_files)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Retention limits must be integers: {exc}") from exc
        if byte_limit < 0 or file_limit < 0:
            raise ConfigurationError("Retention limits cannot be negative")
        notes: list[Note] = []
        try:
            with self._lock:
                self._close_handle(notes)
                self.destination = Destination.FILE
                self.directory = Path(directory)
                self.prefix = prefix
                self.rotation = scheme
                self.max_bytes = byte_limit
                self.max_files = file_limit
        finally:
            _report(notes)

    def set_stdout(self) -> None:
        notes: list[Note] = []
        try:
            with self._lock:
                self._close_handle(notes)
                self.destination = Destination.STDOUT
        finally:
            _report(notes)

    def close(self) -> None:
        """Close the open log file. Callers must stop writing first."""
        notes: list[Note] = []
        try:
            with self._lock:
                self._close_handle(notes)
        finally:
            _report(notes)

    # write path

    def write(self, record: Record) -> None:
        """Append ``record`` plus a newline and force it to storage.

        Records below the threshold are dropped without any I/O. Raises
        :class:`SinkWriteError` when writing or syncing fails and
        :class:`RotationError` when the next file could not be opened. In the
        latter case the record still goes to the previous file if one is open.

        Diagnostics are collected under the lock and logged after it is
        released, so handlers on the ``sinklog`` logger may write back here.
        """
        if record.level < self.level:
            return
        notes: list[Note] = []
        try:
            with self._lock:
                pending: RotationError | None = None
                if self.destination is Destination.FILE:
                    try:
                        self._rotate_if_due(notes)
                    except RotationError as exc:
                        if self._fh is None:
                            raise
                        pending = exc
                record.body += b"\n"
                self._emit(bytes(record.body), notes)
                if pending is not None:
                    pending.record_written = True
                    raise pending
        finally:
            _report(notes)

    def _emit(self, data: bytes, notes: list[Note]) -> None:
        if self.destination is Destination.STDOUT:
            self._emit_stdout(data)
            return
        fh = self._fh
        if fh is None:
            raise SinkWriteError("No log file is open")
        try:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        except (OSError, ValueError) as exc:
            notes.append((LOG.warning, "Writing to %s failed: %s", (self.current_path, exc)))
            raise SinkWriteError(f"Cannot write to {self.current_path}: {exc}") from exc

    def _emit_stdout(self, data: bytes) -> None:
        # Looked up per write so redirections of sys.stdout are honoured.
        stream = sys.stdout
        if stream is None:
            raise SinkWriteError("Standard output is not available")
        try:
            buffer = getattr(stream, "buffer", None)
            if buffer is not None:
                stream.flush()
                buffer.write(data)
                buffer.flush()
            else:
                stream.write(data.decode("utf-8", errors="replace"))
                stream.flush()
        except (OSError, ValueError) as exc:
            raise SinkWriteError(f"Cannot write to stdout: {exc}") from exc

    # rotation

    def _rotate_if_due(self, notes: list[Note]) -> None:
        now = self._clock()
        if not rotation.is_due(self.rotation, now, self.last_rotation, self._fh is not None):
            return
        name = rotation.filename(self.prefix, self.rotation, now)
        path = self.directory / name
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            removed = retention.enforce(self.directory, self.max_files, self.max_bytes, keep=name)
            fh = open(path, "ab", opener=_opener)
        except RetentionError as exc:
            notes.extend((LOG.info, "Removed old log file %s", (p,)) for p in exc.removed)
            notes.append((LOG.warning, "Log rotation to %s failed: %s", (path, exc)))
            raise RotationError(f"Cannot rotate to {path}: {exc}") from exc
        except OSError as exc:
            notes.append((LOG.warning, "Log rotation to %s failed: %s", (path, exc)))
            raise RotationError(f"Cannot rotate to {path}: {exc}") from exc

        notes.extend((LOG.info, "Removed old log file %s", (p,)) for p in removed)
        previous, self._fh = self._fh, fh
        self.current_path = path
        self.last_rotation = now
        if previous is not None:
            self._close_quietly(previous, notes)
        notes.append((LOG.info, "Rotated log to %s", (path,)))

    def _close_handle(self, notes: list[Note]) -> None:
        fh, self._fh = self._fh, None
        self.current_path = None
        self.last_rotation = 0.0
        if fh is not None:
            self._close_quietly(fh, notes)

    @staticmethod
    def _close_quietly(fh: BinaryIO, notes: list[Note]) -> None:
        try:
            fh.close()
        except OSError as exc:
            notes.append((LOG.warning, "Closing log file failed: %s", (exc,)))
