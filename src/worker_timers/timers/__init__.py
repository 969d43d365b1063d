"""Timer scheduling: facade, drivers, tick engine and task state."""

from .handles import NO_TIMER, HandleAllocator, LivenessMap
from .store import Task, TaskStore
from .engine import TickEngine
from .drivers import BaseTimerDriver, EventLoopDriver, SignalDriver
from .selector import select_driver
from .facade import Timer, build_timer

__all__ = [
    "NO_TIMER",
    "HandleAllocator",
    "LivenessMap",
    "Task",
    "TaskStore",
    "TickEngine",
    "BaseTimerDriver",
    "EventLoopDriver",
    "SignalDriver",
    "select_driver",
    "Timer",
    "build_timer",
]
