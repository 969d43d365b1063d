"""Event-loop collaborators for the timer facade."""

from .asyncio_loop import AsyncioEventLoop
from .base import EventLoop, RepeatMode
from .mock import MockEventLoop

__all__ = ["EventLoop", "RepeatMode", "AsyncioEventLoop", "MockEventLoop"]
