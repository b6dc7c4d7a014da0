"""Ticker: deferred and periodic callbacks on the asyncio event loop.

This package provides the Timer, which binds one callback to immediate,
delayed or repeating execution with explicit cancellation, together with the
one-shot DelayedTick it is built on and optional leak tracking for repeating
timers that are never stopped.
"""

from .delayed_tick import DelayedTick
from .leak_tracker import (
    TimerLeakTracker,
    disable_leak_tracking,
    enable_leak_tracking,
    get_leak_tracker,
)
from .timer import Timer

__all__ = [
    "Timer",
    "DelayedTick",
    "TimerLeakTracker",
    "enable_leak_tracking",
    "disable_leak_tracking",
    "get_leak_tracker",
]
