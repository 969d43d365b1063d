"""Interchangeable execution strategies behind the timer facade."""

from __future__ import annotations

import abc
import contextlib
import logging
import threading
from typing import Any, Callable, Iterator

from ..errors import NotCallable
from ..loops.base import EventLoop, RepeatMode
from ..reporting import ErrorSink
from ..wakeup.base import BaseWakeupSource
from .engine import TickEngine
from .handles import HandleAllocator, LivenessMap
from .store import Task, TaskStore

LOGGER = logging.getLogger(__name__)


class BaseTimerDriver(abc.ABC):
    """Storage and firing strategy used by :class:`Timer`."""

    mode: str = "abstract"

    @abc.abstractmethod
    def add(
        self,
        interval: float,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
        persistent: bool,
    ) -> int:
        """Schedule ``callback`` and return its handle."""

    @abc.abstractmethod
    def delete(self, handle: int) -> bool:
        """Cancel ``handle``."""

    @abc.abstractmethod
    def delete_all(self) -> None:
        """Cancel every timer."""

    def pending_count(self) -> int | None:
        """Number of pending timers when the driver can tell."""
        return None

    def is_active(self, handle: int) -> bool | None:
        """Whether ``handle`` is still scheduled when the driver can tell."""
        return None

    def tick(self) -> int:
        """Run due timers; drivers without a tick engine do nothing."""
        return 0

    def close(self) -> None:
        """Cancel every timer and release resources."""
        self.delete_all()


class EventLoopDriver(BaseTimerDriver):
    """Forward every operation to an external event loop."""

    mode = "event_loop"

    def __init__(self, event_loop: EventLoop) -> None:
        """Wrap ``event_loop``."""
        self._event_loop = event_loop

    @property
    def event_loop(self) -> EventLoop:
        """The wrapped collaborator."""
        return self._event_loop

    def add(
        self,
        interval: float,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
        persistent: bool,
    ) -> int:
        """Register the timer with the loop and return the loop's handle."""
        return self._event_loop.add_timer(
            interval, RepeatMode.from_persistent(persistent), callback, args
        )

    def delete(self, handle: int) -> bool:
        """Return the loop's cancellation result."""
        return bool(self._event_loop.cancel_timer(handle))

    def delete_all(self) -> None:
        """Ask the loop to clear all of its timers."""
        self._event_loop.clear_all_timers()


class SignalDriver(BaseTimerDriver):
    """Self-driven timers woken by a periodic platform wake-up.

    Every mutation runs inside a serialized section. A wake-up delivered while
    the section is held (including from a timer callback) is recorded and
    drained when the outermost section exits, so ticks never nest.
    """

    mode = "signal"

    def __init__(
        self,
        wakeup: BaseWakeupSource,
        error_sink: ErrorSink,
        *,
        time_fn: Callable[[], float],
        tick_interval_s: int = 1,
        allocator: HandleAllocator | None = None,
    ) -> None:
        """Create the driver and install its wake-up handler.

        Args:
            wakeup: Source of periodic wake-ups.
            error_sink: Receives callback failures.
            time_fn: Clock returning seconds since the epoch.
            tick_interval_s: Seconds between wake-ups while timers are pending.
            allocator: Handle allocator; a fresh one is created when omitted.
        """
        if tick_interval_s < 1:
            raise ValueError("tick_interval_s must be >= 1")
        self._wakeup = wakeup
        self._time_fn = time_fn
        self._tick_interval_s = int(tick_interval_s)
        self._store = TaskStore()
        self._liveness = LivenessMap()
        self._allocator = allocator or HandleAllocator()
        self._engine = TickEngine(
            self._store,
            self._liveness,
            error_sink,
            time_fn=time_fn,
            on_idle=self._wakeup.disarm,
        )
        self._lock = threading.RLock()
        self._depth = 0
        self._wakeup_pending = False
        self._fired_total = 0
        self._wakeup.install(self._on_wakeup)

    @property
    def wakeup(self) -> BaseWakeupSource:
        """The wake-up source driving this driver."""
        return self._wakeup

    @property
    def store(self) -> TaskStore:
        """Pending tasks."""
        return self._store

    @property
    def liveness(self) -> LivenessMap:
        """Handles still eligible for rescheduling."""
        return self._liveness

    @property
    def fired_total(self) -> int:
        """Callbacks invoked since the driver was created."""
        return self._fired_total

    def add(
        self,
        interval: float,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
        persistent: bool,
    ) -> int:
        """Store a new task and arm the wake-up for the first pending one."""
        if not callable(callback):
            raise NotCallable(callback)
        with self._serialized():
            handle = self._allocator.allocate(is_live=self._is_live)
            if self._store.is_empty():
                self._wakeup.arm(self._tick_interval_s)
            task = Task(
                handle=handle,
                callback=callback,
                args=args,
                interval=interval,
                persistent=persistent,
                next_fire_time=self._time_fn() + interval,
            )
            self._store.insert(task)
            self._liveness.mark_active(handle)
        LOGGER.debug(
            "Added timer %d (interval=%s, persistent=%s)", handle, interval, persistent
        )
        return handle

    def delete(self, handle: int) -> bool:
        """Remove ``handle`` from the store and liveness map together."""
        with self._serialized():
            removed = self._store.remove(handle)
            self._liveness.discard(handle)
        if removed:
            LOGGER.debug("Deleted timer %d", handle)
        return True

    def delete_all(self) -> None:
        """Drop every task and stop the wake-up."""
        with self._serialized():
            self._store.clear()
            self._liveness.clear()
            self._wakeup.disarm()
            self._wakeup_pending = False

    def pending_count(self) -> int:
        """Number of stored tasks."""
        return len(self._store)

    def is_active(self, handle: int) -> bool:
        """Whether ``handle`` is still scheduled."""
        return self._is_live(handle)

    def tick(self) -> int:
        """Deliver one wake-up by hand; return callbacks run if it ran now."""
        before = self._fired_total
        self._on_wakeup()
        return self._fired_total - before

    def close(self) -> None:
        """Cancel everything and release the wake-up source."""
        self.delete_all()
        self._wakeup.close()

    def _is_live(self, handle: int) -> bool:
        return self._liveness.is_active(handle) or handle in self._store

    def _on_wakeup(self) -> None:
        self._wakeup_pending = True
        if self._depth:
            return
        if not self._lock.acquire(blocking=False):
            return
        try:
            self._drain_wakeups()
        finally:
            self._lock.release()

    def _drain_wakeups(self) -> None:
        self._depth += 1
        try:
            while self._wakeup_pending:
                self._wakeup_pending = False
                self._wakeup.arm(self._tick_interval_s)
                self._fired_total += self._engine.tick()
        finally:
            self._depth -= 1

    @contextlib.contextmanager
    def _serialized(self) -> Iterator[None]:
        with self._lock:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
                if not self._depth and self._wakeup_pending:
                    self._drain_wakeups()
