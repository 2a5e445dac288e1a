"""Miscellaneous helpers used across the sink."""

from __future__ import annotations

from datetime import datetime


def local_datetime(ts: float) -> datetime:
    """Return ``ts`` as an aware datetime in the local zone."""
    return datetime.fromtimestamp(ts).astimezone()


def record_timestamp(ts: float) -> str:
    """Render ``ts`` as e.g. ``2024-01-01T12:00:27.870000+0800``."""
    return local_datetime(ts).strftime("%Y-%m-%dT%H:%M:%S.%f%z")
