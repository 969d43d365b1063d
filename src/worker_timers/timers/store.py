"""Pending timer tasks bucketed by absolute fire time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator


@dataclass(slots=True)
class Task:
    """One scheduled unit of work owned by the signal-driven driver."""

    handle: int
    callback: Callable[..., Any]
    args: tuple[Any, ...]
    interval: float
    persistent: bool
    next_fire_time: float

    def run(self) -> Any:
        """Invoke the callback with the stored arguments."""
        return self.callback(*self.args)


class TaskStore:
    """Map ``fire_time -> {handle: Task}``.

    A handle is held by at most one bucket; empty buckets are dropped.
    """

    def __init__(self) -> None:
        """Create an empty store."""
        self._buckets: dict[float, dict[int, Task]] = {}
        self._fire_times: dict[int, float] = {}

    def insert(self, task: Task) -> None:
        """Add ``task`` to the bucket for its fire time, moving it if already stored."""
        self.remove(task.handle)
        self._buckets.setdefault(task.next_fire_time, {})[task.handle] = task
        self._fire_times[task.handle] = task.next_fire_time

    def remove(self, handle: int) -> bool:
        """Remove ``handle`` from whichever bucket holds it."""
        found = False
        for fire_time in list(self._buckets):
            bucket = self._buckets[fire_time]
            if bucket.pop(handle, None) is not None:
                found = True
                if not bucket:
                    del self._buckets[fire_time]
        self._fire_times.pop(handle, None)
        return found

    def get(self, handle: int) -> Task | None:
        """Return the stored task for ``handle`` if any."""
        fire_time = self._fire_times.get(handle)
        if fire_time is None:
            return None
        return self._buckets.get(fire_time, {}).get(handle)

    def due_times(self, now: float) -> list[float]:
        """Return fire times of every bucket due at ``now``."""
        return [fire_time for fire_time in self._buckets if fire_time <= now]

    def bucket(self, fire_time: float) -> dict[int, Task]:
        """Return the live bucket at ``fire_time`` (empty mapping if absent)."""
        return self._buckets.get(fire_time, {})

    def pop_bucket(self, fire_time: float) -> dict[int, Task]:
        """Detach and return the bucket at ``fire_time``."""
        bucket = self._buckets.pop(fire_time, {})
        for handle in bucket:
            if self._fire_times.get(handle) == fire_time:
                del self._fire_times[handle]
        return bucket

    def next_fire_time(self) -> float | None:
        """Earliest pending fire time, or ``None`` when empty."""
        return min(self._buckets) if self._buckets else None

    def clear(self) -> None:
        """Drop every pending task."""
        self._buckets.clear()
        self._fire_times.clear()

    def is_empty(self) -> bool:
        """Return whether no task is pending."""
        return not self._buckets

    def __contains__(self, handle: object) -> bool:
        return handle in self._fire_times

    def __iter__(self) -> Iterator[Task]:
        for bucket in list(self._buckets.values()):
            yield from list(bucket.values())

    def __len__(self) -> int:
        return len(self._fire_times)
