"""Error taxonomy raised and reported by the timer scheduler."""

from __future__ import annotations

from typing import Any, Callable


class TimerError(RuntimeError):
    """Base class for timer scheduling failures."""


class InvalidInterval(TimerError, ValueError):  # noqa: N818
    """Raised when a timer interval is not strictly positive."""

    def __init__(self, interval: Any) -> None:
        super().__init__(f"bad time interval {interval!r}; must be > 0")
        self.interval = interval


class NotCallable(TimerError, TypeError):  # noqa: N818
    """Raised when a timer callback cannot be invoked."""

    def __init__(self, obj: Any) -> None:
        super().__init__(f"timer callback {obj!r} is not callable")
        self.obj = obj


class CallbackFailure(TimerError):  # noqa: N818
    """Wraps an exception raised by a timer callback during a tick."""

    def __init__(self, handle: int, callback: Callable[..., Any], cause: BaseException) -> None:
        name = getattr(callback, "__qualname__", None) or repr(callback)
        super().__init__(f"timer {handle} callback {name} failed: {cause!r}")
        self.handle = handle
        self.callback = callback
        self.__cause__ = cause


class HandlesExhausted(TimerError):  # noqa: N818
    """Raised when every timer handle in the configured range is live."""

    def __init__(self, max_handle: int) -> None:
        super().__init__(f"all {max_handle} timer handles are in use")
        self.max_handle = max_handle
