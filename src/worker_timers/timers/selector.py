"""Choose the execution strategy backing a :class:`Timer`."""

from __future__ import annotations

import logging
from typing import Callable

from ..config.models import TimerConfig
from ..loops.base import EventLoop
from ..reporting import ErrorSink
from ..wakeup.alarm import AlarmWakeupSource
from ..wakeup.base import BaseWakeupSource
from ..wakeup.mock import ManualWakeupSource
from .drivers import BaseTimerDriver, EventLoopDriver, SignalDriver
from .handles import HandleAllocator

LOGGER = logging.getLogger(__name__)


def select_driver(
    config: TimerConfig,
    *,
    error_sink: ErrorSink,
    time_fn: Callable[[], float],
    event_loop: EventLoop | None = None,
    wakeup: BaseWakeupSource | None = None,
) -> BaseTimerDriver:
    """Return an event-loop driver when a loop is given, else a signal driver.

    Without an explicit ``wakeup``, SIGALRM is used when the platform supports
    it and ``config.use_signals`` is set; otherwise the driver gets a manual
    source and the host must pump :meth:`Timer.tick` itself.
    """
    if event_loop is not None:
        if not isinstance(event_loop, EventLoop):
            raise TypeError(f"{event_loop!r} does not implement the EventLoop protocol")
        LOGGER.info("Timers delegated to event loop %s", type(event_loop).__name__)
        return EventLoopDriver(event_loop)

    if wakeup is None:
        if config.use_signals and AlarmWakeupSource.available():
            wakeup = AlarmWakeupSource()
        else:
            if config.use_signals:
                LOGGER.warning(
                    "SIGALRM is unavailable on this platform; timers fire only when tick() is called"
                )
            wakeup = ManualWakeupSource()
    LOGGER.info(
        "Timers self-driven by %s every %d s", type(wakeup).__name__, config.tick_interval_s
    )
    return SignalDriver(
        wakeup,
        error_sink,
        time_fn=time_fn,
        tick_interval_s=config.tick_interval_s,
        allocator=HandleAllocator(config.max_handle),
    )
