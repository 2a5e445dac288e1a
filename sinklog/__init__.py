"""Thread-safe leveled logging to stdout or a rotating set of files."""

from .core.api import (
    close,
    critical,
    debug,
    error,
    get_sink,
    info,
    init,
    log,
    set_file,
    set_level,
    set_level_str,
    trace,
    warn,
)
from .core.errors import (
    ConfigurationError,
    RetentionError,
    RotationError,
    SinkError,
    SinkIOError,
    SinkWriteError,
)
from .core.levels import Level
from .core.record import Record
from .core.rotation import Rotation
from .core.sink import Sink

__all__ = [
    "ConfigurationError",
    "Level",
    "Record",
    "RetentionError",
    "Rotation",
    "RotationError",
    "Sink",
    "SinkError",
    "SinkIOError",
    "SinkWriteError",
    "close",
    "critical",
    "debug",
    "error",
    "get_sink",
    "info",
    "init",
    "log",
    "set_file",
    "set_level",
    "set_level_str",
    "trace",
    "warn",
]
