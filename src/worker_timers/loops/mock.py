"""Mock event loop for deterministic facade testing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from .base import RepeatMode


@dataclass(slots=True)
class MockTimerCall:
    """A timer registration captured by :class:`MockEventLoop`."""

    handle: int
    interval: float
    mode: RepeatMode
    callback: Callable[..., Any]
    args: tuple[Any, ...]


@dataclass(slots=True)
class MockEventLoop:
    """Spoof event loop that records timer calls for assertions."""

    cancel_result: bool = True
    registered: dict[int, MockTimerCall] = field(default_factory=dict)
    cancelled: list[int] = field(default_factory=list)
    clear_count: int = 0
    _next_handle: int = field(default=100, init=False)

    def add_timer(
        self,
        interval: float,
        mode: RepeatMode,
        callback: Callable[..., Any],
        args: Sequence[Any],
    ) -> int:
        """Record the registration and hand out a fresh handle."""
        self._next_handle += 1
        call = MockTimerCall(self._next_handle, interval, mode, callback, tuple(args))
        self.registered[call.handle] = call
        return call.handle

    def cancel_timer(self, handle: int) -> bool:
        """Record the cancellation and return ``cancel_result``."""
        self.cancelled.append(handle)
        self.registered.pop(handle, None)
        return self.cancel_result

    def clear_all_timers(self) -> None:
        """Drop every recorded timer."""
        self.clear_count += 1
        self.registered.clear()

    def fire(self, handle: int) -> Any:
        """Invoke the callback registered under ``handle``."""
        call = self.registered[handle]
        if call.mode is RepeatMode.TIMER_ONCE:
            del self.registered[handle]
        return call.callback(*call.args)
