"""Convenience CLI running a heartbeat demo on top of the timer scheduler."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

# Ensure local sources are importable without installation
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from worker_timers import AsyncioEventLoop, Timer, TimerConfig, load_timer_config  # noqa: E402
from worker_timers.utils.logging import configure_logging  # noqa: E402

LOGGER = logging.getLogger("worker_timers.scripts.run")

DEFAULT_CONFIG_PATH = Path(__file__).with_name("timers_config.yaml")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the heartbeat demo."""
    parser = argparse.ArgumentParser(description="Run a timer heartbeat demo")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to timer config YAML",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=2.0,
        help="Heartbeat interval in seconds",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=10.0,
        help="How long to run before cancelling every timer",
    )
    parser.add_argument(
        "--asyncio",
        action="store_true",
        help="Delegate timers to an asyncio event loop instead of SIGALRM",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def _heartbeat(name: str, started: float) -> None:
    LOGGER.info("heartbeat %s at +%.2f s", name, time.monotonic() - started)


def _schedule_demo(timer: Timer, interval: float, started: float) -> int:
    handle = timer.add(interval, _heartbeat, ("persistent", started))
    timer.add(interval / 2, _heartbeat, ("one-shot", started), persistent=False)
    return handle


def run_signal_mode(config: TimerConfig, interval: float, duration_s: float) -> None:
    """Drive timers from SIGALRM while the main thread sleeps."""
    started = time.monotonic()
    with Timer(config) as timer:
        _schedule_demo(timer, interval, started)
        deadline = started + duration_s
        while time.monotonic() < deadline:
            time.sleep(min(0.25, max(0.0, deadline - time.monotonic())))
        LOGGER.info("Pending timers at shutdown: %s", timer.pending_count())


async def run_asyncio_mode(config: TimerConfig, interval: float, duration_s: float) -> None:
    """Delegate timers to the running asyncio loop."""
    started = time.monotonic()
    with Timer(config, event_loop=AsyncioEventLoop(asyncio.get_running_loop())) as timer:
        _schedule_demo(timer, interval, started)
        await asyncio.sleep(duration_s)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the heartbeat demo CLI."""
    args = parse_args(argv)
    try:
        config = load_timer_config(args.config.expanduser().resolve())
    except FileNotFoundError as exc:
        configure_logging(logging.INFO)
        LOGGER.error("Config file not found: %s", exc)
        return 1
    except ValueError as exc:
        configure_logging(logging.INFO)
        LOGGER.error("Invalid config: %s", exc)
        return 1

    configure_logging(logging.DEBUG if args.verbose else config.logging_level)
    LOGGER.info(
        "Starting heartbeat every %.2f s for %.2f s (%s mode)",
        args.interval,
        args.duration,
        "asyncio" if args.asyncio else "signal",
    )
    try:
        if args.asyncio:
            asyncio.run(run_asyncio_mode(config, args.interval, args.duration))
        else:
            run_signal_mode(config, args.interval, args.duration)
    except KeyboardInterrupt:
        LOGGER.info("Received keyboard interrupt, stopping timers")
    except Exception:
        LOGGER.exception("Timer demo terminated with an error")
        return 2
    finally:
        LOGGER.info("Timer demo finished")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
