"""Tick engine draining due tasks for the signal-driven driver."""

from __future__ import annotations

import logging
from typing import Callable

from ..errors import CallbackFailure
from ..reporting import ErrorSink
from .handles import LivenessMap
from .store import TaskStore

LOGGER = logging.getLogger(__name__)


class TickEngine:
    """Run every due task once per wake-up and reschedule persistent ones.

    Tasks are rescheduled relative to the time they finished firing, so a slow
    tick delays later fires instead of building a backlog.
    """

    def __init__(
        self,
        store: TaskStore,
        liveness: LivenessMap,
        error_sink: ErrorSink,
        *,
        time_fn: Callable[[], float],
        on_idle: Callable[[], None] | None = None,
    ) -> None:
        """Bind the engine to the driver's shared state.

        Args:
            store: Pending tasks keyed by fire time.
            liveness: Handles that may still be rescheduled.
            error_sink: Receives ``CallbackFailure`` for every raising callback.
            time_fn: Clock returning seconds since the epoch.
            on_idle: Invoked when a tick finds nothing pending.
        """
        self._store = store
        self._liveness = liveness
        self._error_sink = error_sink
        self._time_fn = time_fn
        self._on_idle = on_idle
        self._tick_count = 0

    @property
    def tick_count(self) -> int:
        """Number of ticks executed so far."""
        return self._tick_count

    def tick(self) -> int:
        """Fire every due task and return how many callbacks ran."""
        self._tick_count += 1
        if self._store.is_empty():
            if self._on_idle is not None:
                self._on_idle()
            return 0

        now = self._time_fn()
        fired = 0
        for fire_time in self._store.due_times(now):
            bucket = self._store.bucket(fire_time)
            for handle in list(bucket):
                task = bucket.get(handle)
                # cancelled by a sibling callback earlier in this tick
                if task is None or not self._liveness.is_active(handle):
                    continue
                fired += 1
                try:
                    task.run()
                except Exception as exc:
                    self._error_sink.report(CallbackFailure(handle, task.callback, exc))

                # the callback may have deleted its timer and reissued the handle
                owned = self._store.get(handle) is task and self._liveness.is_active(handle)
                if not owned:
                    continue
                if task.persistent:
                    task.next_fire_time = self._time_fn() + task.interval
                    self._store.insert(task)
                else:
                    self._liveness.discard(handle)
            self._store.pop_bucket(fire_time)

        if fired:
            LOGGER.debug("Tick fired %d timer(s); %d pending", fired, len(self._store))
        return fired
