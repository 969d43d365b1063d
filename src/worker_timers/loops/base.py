"""Event-loop collaborator contract consumed by the timer facade."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Protocol, Sequence, runtime_checkable


class RepeatMode(str, Enum):
    """Whether an event-loop timer repeats or fires once."""

    TIMER = "timer"
    TIMER_ONCE = "timer_once"

    @classmethod
    def from_persistent(cls, persistent: bool) -> "RepeatMode":
        """Map the facade's ``persistent`` flag onto a repeat mode."""
        return cls.TIMER if persistent else cls.TIMER_ONCE


@runtime_checkable
class EventLoop(Protocol):
    """Timer primitives an external event loop must expose."""

    def add_timer(
        self,
        interval: float,
        mode: RepeatMode,
        callback: Callable[..., Any],
        args: Sequence[Any],
    ) -> int:
        """Register a timer and return its handle."""
        ...

    def cancel_timer(self, handle: int) -> bool:
        """Cancel the timer identified by ``handle``."""
        ...

    def clear_all_timers(self) -> None:
        """Cancel every timer registered with the loop."""
        ...
