"""Rotation schemes and the calendar buckets they compare."""

from __future__ import annotations

import time
from enum import Enum

from .errors import ConfigurationError


class Rotation(Enum):
    NONE = "none"
    HOURLY = "hourly"
    DAILY = "daily"


def parse_rotation(value: Rotation | str) -> Rotation:
    if isinstance(value, Rotation):
        return value
    try:
        return Rotation(str(value).strip().lower())
    except ValueError as exc:
        raise ConfigurationError(f"Unknown rotation scheme {value!r}") from exc


def bucket(rotation: Rotation, ts: float) -> tuple[int, ...]:
    """Return the local calendar bucket ``ts`` falls in."""
    tm = time.localtime(ts)
    if rotation is Rotation.HOURLY:
        return (tm.tm_year, tm.tm_yday, tm.tm_hour)
    if rotation is Rotation.DAILY:
        return (tm.tm_year, tm.tm_yday)
    return ()


def is_due(rotation: Rotation, now: float, last: float, has_handle: bool) -> bool:
    """Decide whether a write at ``now`` must open a new file.

    A file is always opened when none is open. Otherwise the local calendar
    bucket of ``now`` is compared with that of ``last``, so any idle gap
    across a boundary rotates on the next write.
    """
    if not has_handle:
        return True
    if rotation is Rotation.NONE:
        return False
    return bucket(rotation, now) != bucket(rotation, last)


def suffix(rotation: Rotation, ts: float) -> str:
    tm = time.localtime(ts)
    if rotation is Rotation.HOURLY:
        return time.strftime("%Y-%m-%dT%H", tm)
    if rotation is Rotation.DAILY:
        return time.strftime("%Y-%m-%d", tm)
    return ""


def filename(prefix: str, rotation: Rotation, ts: float) -> str:
    return f"{prefix}.{suffix(rotation, ts)}"
