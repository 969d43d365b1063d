"""Logging configuration helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Install the console format and set the ``worker_timers`` logger level.

    Args:
        level: Numeric level or level name such as ``"DEBUG"``.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logging.getLogger("worker_timers").setLevel(level)
