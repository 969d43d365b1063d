"""Tests covering handle allocation and the liveness map."""

from __future__ import annotations

import pytest

from worker_timers.errors import HandlesExhausted
from worker_timers.timers.handles import NO_TIMER, HandleAllocator, LivenessMap


def test_allocator_is_monotonic_and_never_zero() -> None:
    allocator = HandleAllocator()
    handles = [allocator.allocate() for _ in range(5)]
    assert handles == [1, 2, 3, 4, 5]
    assert NO_TIMER not in handles
    assert allocator.last == 5


def test_allocator_wraps_to_one() -> None:
    allocator = HandleAllocator(max_handle=3)
    assert [allocator.allocate() for _ in range(4)] == [1, 2, 3, 1]


def test_allocator_skips_live_handles_after_wrap() -> None:
    """Handles still in use are never reissued after wraparound."""
    allocator = HandleAllocator(max_handle=3)
    for _ in range(3):
        allocator.allocate()
    live = {1, 2}
    assert allocator.allocate(is_live=live.__contains__) == 3
    live.add(3)
    live.discard(1)
    assert allocator.allocate(is_live=live.__contains__) == 1


def test_allocator_raises_when_every_handle_is_live() -> None:
    allocator = HandleAllocator(max_handle=2)
    with pytest.raises(HandlesExhausted):
        allocator.allocate(is_live=lambda handle: True)


def test_allocator_rejects_empty_range() -> None:
    with pytest.raises(ValueError):
        HandleAllocator(max_handle=0)


def test_liveness_map_tracks_handles() -> None:
    liveness = LivenessMap()
    liveness.mark_active(7)
    assert liveness.is_active(7)
    assert 7 in liveness
    assert len(liveness) == 1
    assert list(liveness) == [7]
    assert liveness.discard(7) is True
    assert liveness.discard(7) is False
    assert not liveness.is_active(7)
