"""Process-local timer scheduling for long-running workers."""

from .config import TimerConfig, load_timer_config
from .errors import (
    CallbackFailure,
    HandlesExhausted,
    InvalidInterval,
    NotCallable,
    TimerError,
)
from .loops import AsyncioEventLoop, EventLoop, RepeatMode
from .reporting import ErrorSink, InMemoryErrorSink, LoggingErrorSink
from .timers import NO_TIMER, Timer, build_timer

__all__ = [
    "Timer",
    "build_timer",
    "NO_TIMER",
    "TimerConfig",
    "load_timer_config",
    "EventLoop",
    "RepeatMode",
    "AsyncioEventLoop",
    "ErrorSink",
    "LoggingErrorSink",
    "InMemoryErrorSink",
    "TimerError",
    "InvalidInterval",
    "NotCallable",
    "CallbackFailure",
    "HandlesExhausted",
]
