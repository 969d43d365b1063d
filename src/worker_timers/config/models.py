"""Configuration models for the timer scheduler."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass


@dataclass(slots=True)
class TimerConfig:
    """Settings applied when a :class:`~worker_timers.timers.facade.Timer` is built."""

    tick_interval_s: int = 1
    max_handle: int = sys.maxsize
    use_signals: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate and normalise configuration values."""
        if isinstance(self.tick_interval_s, bool) or int(self.tick_interval_s) != self.tick_interval_s:
            raise ValueError("tick_interval_s must be a whole number of seconds")
        self.tick_interval_s = int(self.tick_interval_s)
        if self.tick_interval_s < 1:
            raise ValueError("tick_interval_s must be >= 1")
        self.max_handle = int(self.max_handle)
        if self.max_handle < 1:
            raise ValueError("max_handle must be >= 1")
        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")
        self.log_level = level

    @property
    def logging_level(self) -> int:
        """Numeric logging level for :attr:`log_level`."""
        return logging.getLevelName(self.log_level)
