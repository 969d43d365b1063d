"""Periodic wake-up sources driving the signal-based timer driver."""

from __future__ import annotations

import abc
from typing import Callable

WakeupHandler = Callable[[], None]


class BaseWakeupSource(abc.ABC):
    """Deliver a wake-up roughly every N seconds once armed."""

    def __init__(self) -> None:
        """Initialise an unarmed source without a handler."""
        self._handler: WakeupHandler | None = None
        self._armed = False

    @property
    def armed(self) -> bool:
        """Whether a wake-up is currently scheduled."""
        return self._armed

    def install(self, handler: WakeupHandler) -> None:
        """Register the callable invoked on each wake-up."""
        self._handler = handler

    @abc.abstractmethod
    def arm(self, every_s: int) -> None:
        """Schedule the next wake-up ``every_s`` seconds from now."""

    @abc.abstractmethod
    def disarm(self) -> None:
        """Cancel any scheduled wake-up."""

    def close(self) -> None:
        """Disarm and release platform resources."""
        self.disarm()
        self._handler = None

    def _deliver(self) -> None:
        handler = self._handler
        if handler is not None:
            handler()
