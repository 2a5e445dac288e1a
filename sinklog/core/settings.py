"""Helpers for configuring the sink from the environment and a ``.env`` file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from .errors import ConfigurationError
from .levels import Level, level_from_name
from .rotation import Rotation, parse_rotation
from .sink import DEFAULT_MAX_BYTES, DEFAULT_MAX_FILES, DEFAULT_PREFIX, Sink

ENV_PATH = Path(".env")


@dataclass(frozen=True)
class SinkSettings:
    level: Level = Level.TRACE
    directory: Path | None = None
    prefix: str = DEFAULT_PREFIX
    rotation: Rotation = Rotation.NONE
    max_bytes: int = DEFAULT_MAX_BYTES
    max_files: int = DEFAULT_MAX_FILES


def load_settings(path: Path = ENV_PATH) -> Mapping[str, str | None]:
    """Load key/value pairs from the local environment file."""
    if not path.exists():
        return {}
    return dotenv_values(path)


def save_settings(kv: Mapping[str, str], path: Path = ENV_PATH) -> None:
    """Persist a dictionary of settings to the .env file."""
    lines = [f"{key}={value}" for key, value in kv.items()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _int(env: Mapping[str, str | None], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw.replace("_", ""))
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{key} cannot be negative")
    return value


def from_env(env: Mapping[str, str | None] | None = None, path: Path = ENV_PATH) -> SinkSettings:
    """Build settings from ``env``, or from the .env file overlaid by os.environ."""
    if env is None:
        env = {**load_settings(path), **os.environ}
    directory = (env.get("SINKLOG_DIR") or "").strip()
    return SinkSettings(
        level=level_from_name((env.get("SINKLOG_LEVEL") or "").strip()),
        directory=Path(directory) if directory else None,
        prefix=(env.get("SINKLOG_PREFIX") or "").strip() or DEFAULT_PREFIX,
        rotation=parse_rotation((env.get("SINKLOG_ROTATE") or "").strip() or Rotation.NONE),
        max_bytes=_int(env, "SINKLOG_MAX_BYTES", DEFAULT_MAX_BYTES),
        max_files=_int(env, "SINKLOG_MAX_FILES", DEFAULT_MAX_FILES),
    )


def apply_settings(sink: Sink, settings: SinkSettings) -> None:
    """Point ``sink`` at the configured destination and threshold."""
    if settings.directory is None:
        sink.set_stdout()
    else:
        sink.set_file(
            settings.directory,
            settings.prefix,
            settings.rotation,
            settings.max_bytes,
            settings.max_files,
        )
    sink.set_level(settings.level)
