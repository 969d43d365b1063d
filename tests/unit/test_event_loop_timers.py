"""Tests covering timers delegated to an event loop."""

from __future__ import annotations

import asyncio

import pytest

from worker_timers import (
    NO_TIMER,
    AsyncioEventLoop,
    CallbackFailure,
    InMemoryErrorSink,
    InvalidInterval,
    RepeatMode,
    Timer,
)
from worker_timers.loops.mock import MockEventLoop
from worker_timers.timers.drivers import EventLoopDriver


def test_add_forwards_to_event_loop() -> None:
    loop = MockEventLoop()
    timer = Timer(event_loop=loop, error_sink=InMemoryErrorSink())
    assert timer.mode == "event_loop"
    assert isinstance(timer.driver, EventLoopDriver)

    calls: list[str] = []
    repeating = timer.add(2, calls.append, ["tick"])
    once = timer.add(1, calls.append, ["once"], persistent=False)

    assert loop.registered[repeating].mode is RepeatMode.TIMER
    assert loop.registered[repeating].interval == 2.0
    assert loop.registered[once].mode is RepeatMode.TIMER_ONCE
    assert loop.registered[once].args == ("once",)

    loop.fire(once)
    loop.fire(repeating)
    assert calls == ["once", "tick"]
    assert once not in loop.registered
    assert timer.pending_count() is None


def test_delete_returns_event_loop_result() -> None:
    loop = MockEventLoop(cancel_result=False)
    timer = Timer(event_loop=loop, error_sink=InMemoryErrorSink())
    handle = timer.add(1, lambda: None)
    assert timer.delete(handle) is False
    assert loop.cancelled == [handle]


def test_delete_all_clears_event_loop_timers() -> None:
    loop = MockEventLoop()
    timer = Timer(event_loop=loop, error_sink=InMemoryErrorSink())
    timer.add(1, lambda: None)
    timer.delete_all()
    assert loop.clear_count == 1
    assert loop.registered == {}


def test_invalid_interval_not_forwarded() -> None:
    loop = MockEventLoop()
    sink = InMemoryErrorSink()
    timer = Timer(event_loop=loop, error_sink=sink)
    assert timer.add(-3, lambda: None) == NO_TIMER
    assert loop.registered == {}
    assert sink.of_type(InvalidInterval)


def test_callable_check_is_left_to_event_loop() -> None:
    loop = MockEventLoop()
    timer = Timer(event_loop=loop, error_sink=InMemoryErrorSink())
    handle = timer.add(1, "not-callable")
    assert handle in loop.registered


def test_non_event_loop_collaborator_rejected() -> None:
    with pytest.raises(TypeError):
        Timer(event_loop=object())


def test_asyncio_event_loop_repeats_and_cancels() -> None:
    sink = InMemoryErrorSink()

    async def scenario() -> tuple[list[str], int]:
        adapter = AsyncioEventLoop(asyncio.get_running_loop(), error_sink=sink)
        timer = Timer(event_loop=adapter, error_sink=sink)
        calls: list[str] = []
        repeating = timer.add(0.01, calls.append, ["tick"])
        timer.add(0.01, calls.append, ["once"], persistent=False)
        await asyncio.sleep(0.08)
        assert timer.delete(repeating) is True
        assert timer.delete(repeating) is False
        ticks = calls.count("tick")
        await asyncio.sleep(0.05)
        assert adapter.pending() == 0
        return calls, ticks

    calls, ticks = asyncio.run(scenario())
    assert calls.count("once") == 1
    assert ticks >= 2
    assert calls.count("tick") == ticks
    assert sink.errors == []


def test_asyncio_event_loop_reports_failures() -> None:
    sink = InMemoryErrorSink()

    def boom() -> None:
        raise KeyError("missing")

    async def scenario() -> list[str]:
        adapter = AsyncioEventLoop(error_sink=sink)
        timer = Timer(event_loop=adapter, error_sink=sink)
        calls: list[str] = []
        timer.add(0.01, boom, persistent=False)
        timer.add(0.01, calls.append, ["sibling"], persistent=False)
        await asyncio.sleep(0.05)
        timer.delete_all()
        return calls

    assert asyncio.run(scenario()) == ["sibling"]
    [failure] = sink.of_type(CallbackFailure)
    assert isinstance(failure.__cause__, KeyError)
