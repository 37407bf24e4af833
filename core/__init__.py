"""
Core daemon logic.

Public API:
    - PolarityResolver: Find the LED pin and polarity in the bootloader env
    - read_blink_interval: Read the half-period from the sentinel file
    - RuntimeState / WatchState: State of one daemon run
    - WatchLoop: Sentinel file -> LED state machine
    - LifecycleManager / CancellationFlag: Backgrounding, signals, cleanup

Usage:
    from core import PolarityResolver, WatchLoop

    line = PolarityResolver().resolve()
"""

from core.interval import IntervalError, read_blink_interval
from core.lifecycle import CancellationFlag, LifecycleManager
from core.polarity import PolarityResolver, parse_env_lines, parse_polarity
from core.runtime import RuntimeState, WatchState
from core.watch_loop import WatchLoop

__all__ = [
    "CancellationFlag",
    "IntervalError",
    "LifecycleManager",
    "PolarityResolver",
    "RuntimeState",
    "WatchLoop",
    "WatchState",
    "parse_env_lines",
    "parse_polarity",
    "read_blink_interval",
]
