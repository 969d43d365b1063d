"""Timer handle allocation and liveness tracking."""

from __future__ import annotations

import sys
from typing import Callable, Iterator

from ..errors import HandlesExhausted

NO_TIMER = 0
"""Handle value meaning "no timer"; returned by ``Timer.add`` on failure."""


class HandleAllocator:
    """Issue monotonically increasing handles that wrap back to 1.

    After wrapping, handles still reported live by ``is_live`` are skipped so a
    long-running process never hands out a handle that is already in use.
    """

    def __init__(self, max_handle: int = sys.maxsize) -> None:
        """Create an allocator issuing handles in ``[1, max_handle]``."""
        if max_handle < 1:
            raise ValueError("max_handle must be >= 1")
        self._max_handle = int(max_handle)
        self._last = NO_TIMER

    @property
    def last(self) -> int:
        """Most recently issued handle (``NO_TIMER`` before the first)."""
        return self._last

    def allocate(self, is_live: Callable[[int], bool] | None = None) -> int:
        """Return the next free handle.

        Raises:
            HandlesExhausted: If every handle in the range is live.
        """
        candidate = self._last
        for _ in range(self._max_handle):
            candidate = 1 if candidate >= self._max_handle else candidate + 1
            if is_live is None or not is_live(candidate):
                self._last = candidate
                return candidate
        raise HandlesExhausted(self._max_handle)


class LivenessMap:
    """Track which handles may still be rescheduled."""

    def __init__(self) -> None:
        """Create an empty map."""
        self._active: dict[int, bool] = {}

    def mark_active(self, handle: int) -> None:
        """Flag ``handle`` as live."""
        self._active[handle] = True

    def is_active(self, handle: int) -> bool:
        """Return whether ``handle`` is live."""
        return self._active.get(handle, False)

    def discard(self, handle: int) -> bool:
        """Forget ``handle``; return whether it was present."""
        return self._active.pop(handle, None) is not None

    def clear(self) -> None:
        """Forget every handle."""
        self._active.clear()

    def __contains__(self, handle: object) -> bool:
        return handle in self._active

    def __iter__(self) -> Iterator[int]:
        return iter(self._active)

    def __len__(self) -> int:
        return len(self._active)
