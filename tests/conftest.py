"""Global pytest configuration and fixtures for the test suite."""

import heapq

import pytest

from ticker.leak_tracker import TimerLeakTracker, disable_leak_tracking


class FakeTimerHandle:
    """Stand-in for asyncio.TimerHandle on a FakeLoop."""

    def __init__(self, when, callback):
        self.when = when
        self._callback = callback
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled

    def run(self):
        self._callback()


class FakeLoop:
    """Event loop stand-in with a virtual clock.

    Implements the ``call_later`` part of the asyncio loop API. Time only
    moves when ``advance`` is called, which runs every due callback in
    deadline order and skips handles cancelled before their turn.
    """

    def __init__(self):
        self._now = 0.0
        self._seq = 0
        self._scheduled = []

    def time(self):
        return self._now

    def call_later(self, delay, callback):
        handle = FakeTimerHandle(self._now + delay, callback)
        heapq.heappush(self._scheduled, (handle.when, self._seq, handle))
        self._seq += 1
        return handle

    def pending_count(self):
        """Number of scheduled handles that are not cancelled."""
        return sum(1 for _, _, handle in self._scheduled if not handle.cancelled())

    def advance(self, seconds):
        """Move the clock forward, running callbacks that become due."""
        target = self._now + seconds
        while self._scheduled and self._scheduled[0][0] <= target:
            when, _, handle = heapq.heappop(self._scheduled)
            self._now = when
            if not handle.cancelled():
                handle.run()
        self._now = target


@pytest.fixture
def fake_loop():
    """Create a FakeLoop starting at time zero."""
    return FakeLoop()


@pytest.fixture
def leak_tracker():
    """Provide a fresh TimerLeakTracker and fail the test on leaked timers."""
    tracker = TimerLeakTracker()
    yield tracker
    leaks = tracker.report_leaks()
    assert not leaks, f"{len(leaks)} repeating timer(s) left running"


@pytest.fixture(autouse=True)
def reset_global_leak_tracking():
    """Make sure no test leaves the process-wide tracker installed."""
    yield
    disable_leak_tracking()
