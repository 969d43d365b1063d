"""Platform wake-up sources."""

from .alarm import AlarmWakeupSource
from .base import BaseWakeupSource
from .mock import ManualWakeupSource

__all__ = ["BaseWakeupSource", "AlarmWakeupSource", "ManualWakeupSource"]
