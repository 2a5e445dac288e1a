"""Diagnostics for sinklog itself, reported through the stdlib logging tree."""

from __future__ import annotations

import logging
import os

LOG = logging.getLogger("sinklog")
LOG.addHandler(logging.NullHandler())


def setup_logger(level: str | None = None) -> None:
    """Send sinklog diagnostics to the console; used by the scripts."""
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)

    for existing in list(LOG.handlers):
        if not isinstance(existing, logging.NullHandler):
            LOG.removeHandler(existing)
    level = (level or os.getenv("SINKLOG_DIAG_LEVEL", "INFO")).upper()
    LOG.setLevel(level)
    LOG.addHandler(handler)
