"""Public timer facade used by worker processes."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any, Callable

from ..config.models import TimerConfig
from ..errors import InvalidInterval, TimerError
from ..loops.base import EventLoop
from ..reporting import ErrorSink, LoggingErrorSink
from ..wakeup.base import BaseWakeupSource
from .drivers import BaseTimerDriver
from .handles import NO_TIMER
from .selector import select_driver

LOGGER = logging.getLogger(__name__)


class Timer:
    """Schedule callbacks to run once or repeatedly after a delay.

    Build one instance per process and pass it to whatever needs timers. The
    execution strategy is fixed at construction: an external event loop when
    one is supplied, otherwise a self-driven tick woken by a periodic signal.

    Example:
        timer = Timer()
        handle = timer.add(2.0, heartbeat, ("worker-1",))
        ...
        timer.delete(handle)
    """

    def __init__(
        self,
        config: TimerConfig | None = None,
        *,
        event_loop: EventLoop | None = None,
        error_sink: ErrorSink | None = None,
        wakeup: BaseWakeupSource | None = None,
        time_fn: Callable[[], float] | None = None,
    ) -> None:
        """Select and initialise the driver.

        Args:
            config: Scheduler settings; defaults are used when omitted.
            event_loop: Collaborator to delegate every timer to.
            error_sink: Receives validation and callback failures.
            wakeup: Wake-up source for self-driven mode (SIGALRM by default).
            time_fn: Clock returning seconds since the epoch.
        """
        self._config = config or TimerConfig()
        self._error_sink: ErrorSink = error_sink or LoggingErrorSink()
        self._driver: BaseTimerDriver = select_driver(
            self._config,
            error_sink=self._error_sink,
            time_fn=time_fn or time.time,
            event_loop=event_loop,
            wakeup=wakeup,
        )
        self._closed = False

    @property
    def mode(self) -> str:
        """``"event_loop"`` or ``"signal"``."""
        return self._driver.mode

    @property
    def driver(self) -> BaseTimerDriver:
        """The active execution strategy."""
        return self._driver

    @property
    def config(self) -> TimerConfig:
        """Settings the timer was built with."""
        return self._config

    def add(
        self,
        interval: float,
        callback: Callable[..., Any],
        args: Any = (),
        persistent: bool = True,
    ) -> int:
        """Schedule ``callback(*args)`` after ``interval`` seconds.

        Args:
            interval: Delay in seconds; must be greater than zero.
            callback: Callable to invoke.
            args: Positional arguments; ``None`` means none and a non-sequence
                value is passed as the single argument.
            persistent: Repeat every ``interval`` seconds until deleted.

        Returns:
            int: Handle of the new timer, or ``NO_TIMER`` when rejected. The
            rejection is reported to the error sink.
        """
        try:
            interval = _validate_interval(interval)
            return self._driver.add(interval, callback, _normalise_args(args), bool(persistent))
        except TimerError as exc:
            self._error_sink.report(exc)
            return NO_TIMER

    def delete(self, handle: int) -> bool:
        """Cancel ``handle``; cancelling an unknown handle still succeeds."""
        return self._driver.delete(handle)

    def delete_all(self) -> None:
        """Cancel every timer and stop the periodic wake-up."""
        self._driver.delete_all()
        LOGGER.debug("Deleted all timers")

    def pending_count(self) -> int | None:
        """Number of pending timers (``None`` when delegated to an event loop)."""
        return self._driver.pending_count()

    def is_active(self, handle: int) -> bool | None:
        """Whether ``handle`` is pending (``None`` when delegated to an event loop)."""
        return self._driver.is_active(handle)

    def tick(self) -> int:
        """Pump one wake-up by hand and return how many callbacks ran."""
        return self._driver.tick()

    def close(self) -> None:
        """Cancel every timer and release the wake-up source."""
        if self._closed:
            return
        self._closed = True
        self._driver.close()

    def __enter__(self) -> "Timer":
        """Enter the timer context."""
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Close the timer when leaving the context."""
        self.close()


def build_timer(
    config: TimerConfig | None = None,
    *,
    event_loop: EventLoop | None = None,
    error_sink: ErrorSink | None = None,
    wakeup: BaseWakeupSource | None = None,
    time_fn: Callable[[], float] | None = None,
) -> Timer:
    """Convenience constructor mirroring :class:`Timer`."""
    return Timer(
        config,
        event_loop=event_loop,
        error_sink=error_sink,
        wakeup=wakeup,
        time_fn=time_fn,
    )


def _validate_interval(interval: Any) -> float:
    if isinstance(interval, bool):
        raise InvalidInterval(interval)
    try:
        value = float(interval)
    except (TypeError, ValueError) as exc:
        raise InvalidInterval(interval) from exc
    if not value > 0:
        raise InvalidInterval(interval)
    return value


def _normalise_args(args: Any) -> tuple[Any, ...]:
    if args is None:
        return ()
    if isinstance(args, (str, bytes)) or not isinstance(args, Sequence):
        return (args,)
    return tuple(args)
