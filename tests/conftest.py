"""Pytest configuration ensuring the project src directory is importable."""

import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from worker_timers import InMemoryErrorSink, Timer, TimerConfig  # noqa: E402
from worker_timers.wakeup.mock import ManualWakeupSource  # noqa: E402


class FakeClock:
    """Deterministic epoch clock advanced by tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> InMemoryErrorSink:
    return InMemoryErrorSink()


@pytest.fixture
def wakeup() -> ManualWakeupSource:
    return ManualWakeupSource()


@pytest.fixture
def timer(
    clock: FakeClock, sink: InMemoryErrorSink, wakeup: ManualWakeupSource
) -> Iterator[Timer]:
    """Signal-mode timer pumped by hand with a fake clock."""
    instance = Timer(TimerConfig(), error_sink=sink, wakeup=wakeup, time_fn=clock)
    yield instance
    instance.close()
