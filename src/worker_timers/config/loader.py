"""Load timer configuration from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from .models import TimerConfig

_FIELDS = ("tick_interval_s", "max_handle", "use_signals", "log_level")


def load_timer_config(path: str | Path) -> TimerConfig:
    """Parse a YAML file holding a top-level ``timers`` mapping.

    Args:
        path: Filesystem path to the YAML file.

    Returns:
        TimerConfig: Validated configuration.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: When the ``timers`` section is malformed.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, Mapping):
        raise ValueError("Timer config YAML must be a mapping")
    return parse_timer_config(raw.get("timers", {}))


def parse_timer_config(section: Any) -> TimerConfig:
    """Build a :class:`TimerConfig` from an already-parsed mapping."""
    if section is None:
        section = {}
    if not isinstance(section, Mapping):
        raise ValueError("'timers' section must be a mapping")
    unknown = sorted(set(section) - set(_FIELDS))
    if unknown:
        raise ValueError(f"Unknown timer config keys: {', '.join(map(str, unknown))}")
    use_signals = section.get("use_signals", True)
    if not isinstance(use_signals, bool):
        raise ValueError("'use_signals' must be a boolean")
    try:
        return TimerConfig(**{key: section[key] for key in _FIELDS if key in section})
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid timer config: {exc}") from exc
