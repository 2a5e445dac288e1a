"""Rotation buckets and file naming."""
from __future__ import annotations

from datetime import datetime

import pytest

from sinklog.core.errors import ConfigurationError
from sinklog.core.rotation import Rotation, filename, is_due, parse_rotation, suffix


def _ts(*parts: int) -> float:
    return datetime(*parts).timestamp()


def test_no_handle_always_rotates():
    now = _ts(2024, 6, 10, 9, 30)
    for scheme in Rotation:
        assert is_due(scheme, now, now, has_handle=False)


def test_none_scheme_keeps_open_file():
    assert not is_due(Rotation.NONE, _ts(2024, 6, 11), _ts(2024, 6, 10), has_handle=True)


def test_hourly_buckets():
    last = _ts(2024, 6, 10, 9, 5)
    assert not is_due(Rotation.HOURLY, _ts(2024, 6, 10, 9, 59), last, has_handle=True)
    assert is_due(Rotation.HOURLY, _ts(2024, 6, 10, 10, 0), last, has_handle=True)
    # same hour on another day
    assert is_due(Rotation.HOURLY, _ts(2024, 6, 11, 9, 5), last, has_handle=True)


def test_daily_buckets_use_calendar_days():
    last = _ts(2024, 6, 10, 23, 59)
    assert is_due(Rotation.DAILY, _ts(2024, 6, 11, 0, 1), last, has_handle=True)
    assert not is_due(Rotation.DAILY, _ts(2024, 6, 10, 0, 0), _ts(2024, 6, 10, 23, 0), has_handle=True)


def test_daily_rotates_after_long_idle_gap():
    assert is_due(Rotation.DAILY, _ts(2025, 6, 10, 12), _ts(2024, 6, 10, 12), has_handle=True)


def test_suffix_formats():
    ts = _ts(2024, 6, 10, 9, 30)
    assert suffix(Rotation.HOURLY, ts) == "2024-06-10T09"
    assert suffix(Rotation.DAILY, ts) == "2024-06-10"
    assert suffix(Rotation.NONE, ts) == ""
    assert filename("app", Rotation.DAILY, ts) == "app.2024-06-10"
    assert filename("app", Rotation.NONE, ts) == "app."


def test_parse_rotation():
    assert parse_rotation("Daily") is Rotation.DAILY
    assert parse_rotation(Rotation.HOURLY) is Rotation.HOURLY
    with pytest.raises(ConfigurationError):
        parse_rotation("weekly")
