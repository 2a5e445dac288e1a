"""Core functionality for sinklog."""

from . import api, errors, levels, record, retention, rotation, settings, sink, util

__all__ = [
    "api",
    "errors",
    "levels",
    "record",
    "retention",
    "rotation",
    "settings",
    "sink",
    "util",
]
