"""Retention enforcement over a log directory."""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from sinklog.core import retention
from sinklog.core.errors import RetentionError

BASE = 1_700_000_000


def _touch(directory: Path, name: str, age: int, size: int = 10) -> Path:
    path = directory / name
    path.write_bytes(b"x" * size)
    os.utime(path, (BASE + age, BASE + age))
    return path


def test_scan_orders_oldest_first(tmp_path):
    _touch(tmp_path, "b", 20)
    _touch(tmp_path, "a", 30)
    _touch(tmp_path, "c", 10)

    names = [f.name for f in retention.scan(tmp_path)]

    assert names == ["c", "b", "a"]


def test_scan_skips_symlinks_and_directories(tmp_path):
    target = _touch(tmp_path, "real", 10)
    (tmp_path / "sub").mkdir()
    os.symlink(target, tmp_path / "link")

    files = retention.scan(tmp_path)

    assert [f.name for f in files] == ["real"]
    assert files[0].size == 10


def test_scan_missing_directory_raises(tmp_path):
    with pytest.raises(RetentionError):
        retention.scan(tmp_path / "absent")


def test_enforce_removes_oldest_over_count(tmp_path):
    t1 = _touch(tmp_path, "t1", 1)
    t2 = _touch(tmp_path, "t2", 2)
    t3 = _touch(tmp_path, "t3", 3)

    removed = retention.enforce(tmp_path, max_files=2, max_bytes=10_000)

    assert removed == [t1]
    assert not t1.exists()
    assert t2.exists() and t3.exists()


def test_enforce_respects_byte_budget(tmp_path):
    _touch(tmp_path, "old", 1, size=100)
    _touch(tmp_path, "mid", 2, size=100)
    newest = _touch(tmp_path, "new", 3, size=100)

    retention.enforce(tmp_path, max_files=10, max_bytes=150)

    assert sorted(p.name for p in tmp_path.iterdir()) == [newest.name]


def test_plan_never_picks_kept_file(tmp_path):
    _touch(tmp_path, "app.current", 1)
    _touch(tmp_path, "older", 2)
    _touch(tmp_path, "newer", 3)

    victims = retention.plan(retention.scan(tmp_path), max_files=2, max_bytes=10_000, keep="app.current")

    assert [v.name for v in victims] == ["older"]


def test_plan_reserves_room_for_new_file(tmp_path):
    for age in range(3):
        _touch(tmp_path, f"f{age}", age)

    victims = retention.plan(retention.scan(tmp_path), max_files=3, max_bytes=10_000, keep="app.new")

    assert [v.name for v in victims] == ["f0"]


def test_plan_stops_when_candidates_run_out(tmp_path):
    _touch(tmp_path, "app.current", 1, size=500)

    victims = retention.plan(retention.scan(tmp_path), max_files=0, max_bytes=0, keep="app.current")

    assert victims == []


def test_enforce_aborts_on_remove_failure(tmp_path, monkeypatch):
    first = _touch(tmp_path, "first", 1)
    second = _touch(tmp_path, "second", 2)
    _touch(tmp_path, "third", 3)
    path_cls = type(first)
    real_unlink = path_cls.unlink

    def flaky_unlink(self, *args, **kwargs):
        if self.name == "second":
            raise PermissionError("denied")
        return real_unlink(self, *args, **kwargs)

    monkeypatch.setattr(path_cls, "unlink", flaky_unlink)

    with pytest.raises(RetentionError) as excinfo:
        retention.enforce(tmp_path, max_files=1, max_bytes=10_000)

    assert excinfo.value.removed == [str(first)]
    assert isinstance(excinfo.value.__cause__, PermissionError)
    assert second.exists()
