"""Event-loop collaborator backed by an ``asyncio`` loop."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from ..errors import CallbackFailure
from ..reporting import ErrorSink, LoggingErrorSink
from ..timers.handles import HandleAllocator
from .base import RepeatMode


@dataclass(slots=True)
class _LoopTimer:
    handle: int
    interval: float
    mode: RepeatMode
    callback: Callable[..., Any]
    args: tuple[Any, ...]
    timer_handle: asyncio.TimerHandle | None = None


class AsyncioEventLoop:
    """Schedule timers with ``loop.call_later``.

    Repeating timers re-arm after each callback returns, measured from the
    loop's clock at that moment.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        *,
        error_sink: ErrorSink | None = None,
        allocator: HandleAllocator | None = None,
    ) -> None:
        """Wrap ``loop`` (the running loop is resolved lazily when omitted)."""
        self._loop = loop
        self._error_sink: ErrorSink = error_sink or LoggingErrorSink()
        self._allocator = allocator or HandleAllocator()
        self._timers: dict[int, _LoopTimer] = {}

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """The wrapped loop, defaulting to the running one."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def add_timer(
        self,
        interval: float,
        mode: RepeatMode,
        callback: Callable[..., Any],
        args: Sequence[Any],
    ) -> int:
        """Register ``callback`` to run after ``interval`` seconds."""
        handle = self._allocator.allocate(is_live=self._timers.__contains__)
        timer = _LoopTimer(
            handle=handle,
            interval=float(interval),
            mode=RepeatMode(mode),
            callback=callback,
            args=tuple(args),
        )
        self._timers[handle] = timer
        self._arm(timer)
        return handle

    def cancel_timer(self, handle: int) -> bool:
        """Cancel ``handle``; return whether it was pending."""
        timer = self._timers.pop(handle, None)
        if timer is None:
            return False
        if timer.timer_handle is not None:
            timer.timer_handle.cancel()
        return True

    def clear_all_timers(self) -> None:
        """Cancel every pending timer."""
        for timer in list(self._timers.values()):
            if timer.timer_handle is not None:
                timer.timer_handle.cancel()
        self._timers.clear()

    def pending(self) -> int:
        """Number of registered timers."""
        return len(self._timers)

    def _arm(self, timer: _LoopTimer) -> None:
        timer.timer_handle = self.loop.call_later(timer.interval, self._fire, timer.handle)

    def _fire(self, handle: int) -> None:
        timer = self._timers.get(handle)
        if timer is None:
            return
        if timer.mode is RepeatMode.TIMER_ONCE:
            del self._timers[handle]
        try:
            timer.callback(*timer.args)
        except Exception as exc:
            self._error_sink.report(CallbackFailure(handle, timer.callback, exc))
        if timer.mode is RepeatMode.TIMER and self._timers.get(handle) is timer:
            self._arm(timer)
