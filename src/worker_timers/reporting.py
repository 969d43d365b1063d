"""Error sinks used to report timer failures without crashing the scheduler.

Provides a protocol and two implementations:
- LoggingErrorSink: forwards errors to the stdlib logging module.
- InMemoryErrorSink: keeps reported errors in memory for tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class ErrorSink(Protocol):
    """Collaborator receiving scheduler failures; must never raise."""

    def report(self, error: BaseException) -> None:
        """Record a single failure."""
        ...


class LoggingErrorSink:
    """Sink that logs every reported error with its traceback."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Create a sink writing to ``logger`` (``worker_timers.errors`` by default)."""
        self._logger = logger or logging.getLogger("worker_timers.errors")

    def report(self, error: BaseException) -> None:
        """Log ``error`` at ERROR level."""
        self._logger.error("%s", error, exc_info=(type(error), error, error.__traceback__))


@dataclass(slots=True)
class InMemoryErrorSink:
    """Bounded sink that stores reported errors for assertions."""

    capacity: int = 1_000
    errors: list[BaseException] = field(default_factory=list, init=False)

    def report(self, error: BaseException) -> None:
        """Append ``error``, dropping the oldest entry when full."""
        if len(self.errors) >= self.capacity:
            self.errors.pop(0)
        self.errors.append(error)

    def of_type(self, kind: type[BaseException]) -> list[BaseException]:
        """Return the reported errors that are instances of ``kind``."""
        return [error for error in self.errors if isinstance(error, kind)]

    def clear(self) -> None:
        """Forget every stored error."""
        self.errors.clear()
