"""Record construction: the prefix, fields and message of one log line."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Mapping

from .levels import LEVEL_TAGS, Level, require_record_level
from .util import record_timestamp


@dataclass
class Record:
    """One log line being assembled by the caller."""

    level: Level
    body: bytearray = field(default_factory=bytearray)

    @classmethod
    def new(cls, level: Level | int) -> "Record":
        return cls(level=require_record_level(level))

    def append(self, text: str) -> None:
        self.body += text.encode("utf-8", errors="replace")


def stamp(record: Record, now: float | None = None) -> None:
    """Append the timestamp and the padded level tag."""
    ts = time.time() if now is None else now
    record.append(f"{record_timestamp(ts)} {LEVEL_TAGS[record.level]}")


def add_source(record: Record, file: str, line: int, func: str) -> None:
    record.append(f"{file}+{line}:{func} ")


def add_field(record: Record, key: str, value: Any) -> None:
    record.append(f"{key}={value} ")


def add_message(record: Record, msg: str, *args: Any) -> None:
    """Append ``msg`` rendered with ``%``-style ``args``."""
    text = str(msg)
    if args:
        text = text % args
    record.append(text)


def build(
    level: Level | int,
    msg: str,
    *args: Any,
    file: str = "",
    line: int = 0,
    func: str = "",
    fields: Mapping[str, Any] | None = None,
    now: float | None = None,
) -> Record:
    """Compose a complete record in the standard line layout."""
    record = Record.new(level)
    stamp(record, now)
    add_source(record, file, line, func)
    for key, value in (fields or {}).items():
        add_field(record, key, value)
    add_message(record, msg, *args)
    return record
