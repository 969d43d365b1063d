"""Tests covering the SIGALRM wake-up source."""

from __future__ import annotations

import signal

import pytest

from worker_timers import InMemoryErrorSink, Timer
from worker_timers.wakeup.alarm import AlarmWakeupSource

pytestmark = pytest.mark.skipif(
    not AlarmWakeupSource.available(), reason="SIGALRM not supported on this platform"
)


@pytest.fixture
def alarm_calls(monkeypatch: pytest.MonkeyPatch) -> list[int]:
    """Record alarm(2) requests instead of scheduling real signals."""
    calls: list[int] = []
    monkeypatch.setattr(signal, "alarm", lambda seconds: calls.append(seconds) or 0)
    return calls


def test_install_and_close_restore_previous_handler(alarm_calls: list[int]) -> None:
    previous = signal.getsignal(signal.SIGALRM)
    source = AlarmWakeupSource()
    source.install(lambda: None)
    assert signal.getsignal(signal.SIGALRM) is not previous
    source.arm(0)
    assert alarm_calls == [1]
    assert source.armed
    source.close()
    assert alarm_calls == [1, 0]
    assert not source.armed
    assert signal.getsignal(signal.SIGALRM) == previous


def test_sigalrm_drives_a_tick(alarm_calls: list[int], clock) -> None:
    calls: list[str] = []
    with Timer(wakeup=AlarmWakeupSource(), time_fn=clock, error_sink=InMemoryErrorSink()) as timer:
        timer.add(1, calls.append, ["fired"], persistent=False)
        assert alarm_calls == [1]
        clock.advance(1)
        signal.raise_signal(signal.SIGALRM)
        assert calls == ["fired"]
        assert alarm_calls == [1, 1]
    assert alarm_calls[-1] == 0
