"""Configuration models and YAML loading."""

from .loader import load_timer_config, parse_timer_config
from .models import TimerConfig

__all__ = ["TimerConfig", "load_timer_config", "parse_timer_config"]
