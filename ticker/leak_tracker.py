"""Leak tracking for repeating timers.

A repeating timer that is never stopped keeps its callback (and everything the
callback references) alive for the life of the process. In debug setups a
TimerLeakTracker records every timer that currently has a repeating schedule,
together with the stack that armed it, so tests and tooling can report timers
that were never stopped.

The tracker is optional. Pass one to ``Timer`` directly, or install a
process-wide one with ``enable_leak_tracking()`` (this is what the ``debug``
configuration flag does). Without either, timers do no tracking work.
"""

import logging
import threading
import traceback
from typing import Any, Optional

logger = logging.getLogger(__name__)


def capture_stack() -> str:
    """Return the caller's stack as a string, without this frame."""
    return "".join(traceback.format_stack()[:-1])


class TimerLeakTracker:
    """Maps active repeating timers to the stack trace that armed them."""

    def __init__(self):
        self._active: dict[Any, str] = {}
        self._lock = threading.Lock()

    def track(self, timer, stack: str):
        """Record ``timer`` as having an active repeating schedule.

        An existing entry for the same timer is overwritten.
        """
        with self._lock:
            self._active[timer] = stack

    def untrack(self, timer):
        """Forget ``timer``. Does nothing if it is not tracked."""
        with self._lock:
            self._active.pop(timer, None)

    def active_timers(self) -> dict[Any, str]:
        """Return a snapshot of the tracked timers and their stacks."""
        with self._lock:
            return dict(self._active)

    def clear(self):
        with self._lock:
            self._active.clear()

    def report_leaks(self) -> list[str]:
        """Log every timer still tracked and return their creation stacks.

        Returns:
            Creation stacks of the leaked timers, empty if there are none
        """
        leaks = self.active_timers()
        for timer, stack in leaks.items():
            logger.warning(f"Repeating timer {timer!r} was never stopped:\n{stack}")
        return list(leaks.values())

    def __contains__(self, timer) -> bool:
        with self._lock:
            return timer in self._active

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)


_global_tracker: Optional[TimerLeakTracker] = None


def enable_leak_tracking() -> TimerLeakTracker:
    """Install the process-wide tracker, creating it on first use.

    Timers created after this call pick the tracker up automatically.

    Returns:
        The installed TimerLeakTracker
    """
    global _global_tracker
    if _global_tracker is None:
        _global_tracker = TimerLeakTracker()
        logger.info("Timer leak tracking enabled")
    return _global_tracker


def disable_leak_tracking():
    """Remove the process-wide tracker. Existing timers keep theirs."""
    global _global_tracker
    if _global_tracker is not None:
        _global_tracker = None
        logger.info("Timer leak tracking disabled")


def get_leak_tracker() -> Optional[TimerLeakTracker]:
    """Return the process-wide tracker, or None when tracking is off."""
    return _global_tracker
