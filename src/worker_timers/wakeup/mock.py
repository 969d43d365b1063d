"""Manually pumped wake-up source for tests and signal-less platforms."""

from __future__ import annotations

from .base import BaseWakeupSource


class ManualWakeupSource(BaseWakeupSource):
    """Record arm/disarm requests; :meth:`fire` delivers a wake-up."""

    def __init__(self) -> None:
        """Create an unarmed source with empty call history."""
        super().__init__()
        self.arm_calls: list[int] = []
        self.disarm_calls = 0

    def arm(self, every_s: int) -> None:
        """Record the request and mark the source armed."""
        self.arm_calls.append(int(every_s))
        self._armed = True

    def disarm(self) -> None:
        """Record the request and mark the source unarmed."""
        self.disarm_calls += 1
        self._armed = False

    def fire(self, *, force: bool = False) -> bool:
        """Deliver one wake-up if armed (or ``force``); return whether delivered."""
        if not (self._armed or force):
            return False
        self._armed = False
        self._deliver()
        return True
