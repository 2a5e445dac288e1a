"""Record layout and level parsing."""
from __future__ import annotations

import re
from datetime import datetime

import pytest

from sinklog.core.errors import ConfigurationError
from sinklog.core.levels import Level, coerce_level, level_from_name
from sinklog.core.record import Record, add_field, add_message, build, stamp

STAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}[+-]\d{4} $")


def test_stamp_renders_microseconds_and_zone():
    record = Record.new(Level.WARN)
    stamp(record, datetime(2024, 6, 10, 9, 30, 1, 870000).timestamp())

    text = record.body.decode()
    assert text.startswith("2024-06-10T09:30:01.870000")
    assert text.endswith(" warn  ")
    assert STAMP_RE.match(text[: -len("warn  ")])


@pytest.mark.parametrize(
    ("level", "tag"),
    [(Level.TRACE, "trace "), (Level.ERROR, "error "), (Level.CRITICAL, "criti ")],
)
def test_level_tags_are_six_chars(level, tag):
    record = Record.new(level)
    stamp(record, 0.0)
    assert record.body.decode().endswith(tag)


def test_build_lays_out_source_fields_and_message():
    record = build(
        Level.INFO,
        "saved %d rows to %s",
        3,
        "db",
        file="app.py",
        line=42,
        func="save",
        fields={"user": "bob"},
        now=0.0,
    )

    text = record.body.decode()
    assert text.endswith("info  app.py+42:save user=bob saved 3 rows to db")


def test_message_without_args_is_verbatim():
    record = Record.new(Level.DEBUG)
    add_field(record, "k", 1)
    add_message(record, "100% done")
    assert record.body == bytearray(b"k=1 100% done")


def test_records_cannot_carry_off_levels():
    with pytest.raises(ConfigurationError):
        Record.new(Level.OFF)
    with pytest.raises(ConfigurationError):
        Record.new(Level.SILENT)


def test_level_from_name():
    assert level_from_name("warn") is Level.WARN
    assert level_from_name("critical") is Level.CRITICAL
    assert level_from_name("off") is Level.OFF
    assert level_from_name("none") is Level.SILENT
    assert level_from_name("WARN") is Level.TRACE
    assert level_from_name("bogus") is Level.TRACE
    assert level_from_name("") is Level.TRACE


def test_coerce_level_rejects_out_of_range():
    assert coerce_level(3) is Level.WARN
    for bad in (-1, 8, True, "info", None):
        with pytest.raises(ConfigurationError):
            coerce_level(bad)
