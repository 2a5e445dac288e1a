"""Exception types raised by the sink."""

from __future__ import annotations


class SinkError(Exception):
    """Base class for every error raised by sinklog."""


class ConfigurationError(SinkError, ValueError):
    """An invalid level, rotation scheme or retention limit was supplied."""


class SinkIOError(SinkError, OSError):
    """A file-system operation behind the sink failed."""


class RotationError(SinkIOError):
    """Opening the next log file failed; the previous handle is still active.

    ``record_written`` is True when the record still went to the previous file.
    """

    record_written = False


class RetentionError(SinkIOError):
    """Retention enforcement stopped part way through the directory."""

    def __init__(self, message: str, removed: list[str] | None = None) -> None:
        super().__init__(message)
        self.removed = list(removed or [])


class SinkWriteError(SinkIOError):
    """Writing or syncing a record failed."""
