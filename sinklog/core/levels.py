"""Severity levels and the name lookup used by ``set_level_str``."""

from __future__ import annotations

from enum import IntEnum

from .errors import ConfigurationError


class Level(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    CRITICAL = 5
    OFF = 6
    SILENT = 7  # stricter than OFF, reached through "none"


RECORD_LEVELS = (Level.TRACE, Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR, Level.CRITICAL)

# Fixed-width tags written after the timestamp of every record.
LEVEL_TAGS = {
    Level.TRACE: "trace ",
    Level.DEBUG: "debug ",
    Level.INFO: "info  ",
    Level.WARN: "warn  ",
    Level.ERROR: "error ",
    Level.CRITICAL: "criti ",
}

_NAMES = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARN,
    "error": Level.ERROR,
    "critical": Level.CRITICAL,
    "off": Level.OFF,
    "none": Level.SILENT,
}


def coerce_level(value: Level | int) -> Level:
    """Return ``value`` as a :class:`Level` or raise ``ConfigurationError``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Level must be an integer, got {value!r}")
    try:
        return Level(value)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown log level {value!r}") from exc


def level_from_name(name: str) -> Level:
    """Map a case-sensitive level name to a Level; unknown names mean TRACE."""
    return _NAMES.get(name or "", Level.TRACE)


def require_record_level(value: Level | int) -> Level:
    level = coerce_level(value)
    if level not in LEVEL_TAGS:
        raise ConfigurationError(f"Records cannot carry level {level.name}")
    return level
