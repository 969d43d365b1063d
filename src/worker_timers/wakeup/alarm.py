"""SIGALRM-backed wake-up source with one-second resolution."""

from __future__ import annotations

import logging
import signal
from types import FrameType
from typing import Any

from .base import BaseWakeupSource

LOGGER = logging.getLogger(__name__)


class AlarmWakeupSource(BaseWakeupSource):
    """Request wake-ups from the kernel through ``alarm(2)``.

    Python runs signal handlers in the main thread between bytecodes, so
    ``install`` must be called from the main thread.
    """

    def __init__(self) -> None:
        """Create the source; the handler is registered by :meth:`install`."""
        super().__init__()
        self._previous: Any = None
        self._installed = False

    @staticmethod
    def available() -> bool:
        """Return whether the platform can deliver SIGALRM."""
        return hasattr(signal, "SIGALRM") and hasattr(signal, "alarm")

    def install(self, handler) -> None:
        """Register ``handler`` as the SIGALRM disposition."""
        super().install(handler)
        if not self._installed:
            self._previous = signal.signal(signal.SIGALRM, self._on_signal)
            self._installed = True
            LOGGER.debug("Installed SIGALRM wake-up handler")

    def arm(self, every_s: int) -> None:
        """Ask the kernel for SIGALRM in ``every_s`` whole seconds (minimum 1)."""
        signal.alarm(max(1, int(every_s)))
        self._armed = True

    def disarm(self) -> None:
        """Cancel a pending alarm."""
        signal.alarm(0)
        self._armed = False

    def close(self) -> None:
        """Disarm and restore the previous SIGALRM disposition."""
        super().close()
        if self._installed:
            previous = self._previous if self._previous is not None else signal.SIG_DFL
            signal.signal(signal.SIGALRM, previous)
            self._installed = False
            self._previous = None

    def _on_signal(self, signum: int, frame: FrameType | None) -> None:
        self._armed = False
        self._deliver()
