"""Process-wide sink and the convenience functions that write through it.

Call :func:`init` once at start-up and :func:`close` at shutdown. Until then
the logging functions report failure instead of writing anything.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any

from .errors import ConfigurationError, RotationError, SinkError
from .levels import Level, coerce_level, level_from_name
from .logging import LOG
from .record import build
from .rotation import Rotation
from .sink import DEFAULT_MAX_BYTES, DEFAULT_MAX_FILES, Sink

_SINK: Sink | None = None
_INIT_LOCK = threading.Lock()


def init() -> Sink:
    """Create the process-wide sink; later calls return the same instance."""
    global _SINK
    with _INIT_LOCK:
        if _SINK is None:
            _SINK = Sink()
        return _SINK


def close() -> None:
    """Close the process-wide sink. No writes may be in flight."""
    global _SINK
    with _INIT_LOCK:
        sink, _SINK = _SINK, None
    if sink is not None:
        sink.close()


def get_sink() -> Sink:
    if _SINK is None:
        raise SinkError("sinklog.init() has not been called")
    return _SINK


def set_level(level: Level | int) -> None:
    new_level = get_sink().set_level(level)
    info("set log level=%d", int(new_level))


def set_level_str(name: str) -> None:
    set_level(level_from_name(name))


def set_file(
    directory: str | os.PathLike[str],
    prefix: str,
    rotation: Rotation | str = Rotation.NONE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    max_files: int = DEFAULT_MAX_FILES,
) -> None:
    get_sink().set_file(directory, prefix, rotation, max_bytes, max_files)


def _caller(depth: int) -> tuple[str, int, str]:
    frame = sys._getframe(depth + 1)
    code = frame.f_code
    return code.co_filename, frame.f_lineno, code.co_name


def _log(level: Level, msg: str, args: tuple[Any, ...], fields: dict[str, Any], depth: int) -> bool:
    sink = _SINK
    if sink is None:
        LOG.debug("Dropping record, sinklog.init() has not been called")
        return False
    if level < sink.level:
        return True
    file, line, func = _caller(depth + 1)
    try:
        record = build(level, msg, *args, file=file, line=line, func=func, fields=fields)
        sink.write(record)
    except RotationError as exc:
        if exc.record_written:
            LOG.warning("Log rotation failed, record kept in previous file: %s", exc)
            return True
        LOG.warning("Log record not written: %s", exc)
        return False
    except SinkError as exc:
        LOG.warning("Log record not written: %s", exc)
        return False
    except (TypeError, ValueError) as exc:
        LOG.warning("Cannot format log message %r: %s", msg, exc)
        return False
    return True


def log(level: Level | int, msg: str, *args: Any, **fields: Any) -> bool:
    try:
        record_level = coerce_level(level)
    except ConfigurationError as exc:
        LOG.warning("Log record not written: %s", exc)
        return False
    return _log(record_level, msg, args, fields, 1)


def trace(msg: str, *args: Any, **fields: Any) -> bool:
    return _log(Level.TRACE, msg, args, fields, 1)


def debug(msg: str, *args: Any, **fields: Any) -> bool:
    return _log(Level.DEBUG, msg, args, fields, 1)


def info(msg: str, *args: Any, **fields: Any) -> bool:
    return _log(Level.INFO, msg, args, fields, 1)


def warn(msg: str, *args: Any, **fields: Any) -> bool:
    return _log(Level.WARN, msg, args, fields, 1)


def error(msg: str, *args: Any, **fields: Any) -> bool:
    return _log(Level.ERROR, msg, args, fields, 1)


def critical(msg: str, *args: Any, **fields: Any) -> bool:
    return _log(Level.CRITICAL, msg, args, fields, 1)
