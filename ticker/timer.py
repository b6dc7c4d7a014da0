"""Timer: run one callback now, later, or at a fixed interval.

A Timer is committed to a single callback for its whole life. Each time the
timer does its work is a "tick". The timer owns at most one pending
DelayedTick; every arming operation stops the current one before creating the
next, so a stopped timer can never tick again from an old schedule.
"""

import asyncio
import logging
from typing import Callable, Optional

from ticker.delayed_tick import DelayedTick
from ticker.leak_tracker import TimerLeakTracker, capture_stack, get_leak_tracker

logger = logging.getLogger(__name__)


class _RepeatingTick:
    """Fire callback of a repeating schedule.

    Every fire rearms the owning DelayedTick first and only then ticks. If
    ``on_tick`` stops the timer, the stop cancels the rearm that was just
    made, so the timer never fires again.
    """

    def __init__(self, on_tick: Callable[[], None], seconds: float):
        self.on_tick = on_tick
        self.seconds = seconds
        # Bound to the owning DelayedTick.tick_after once it exists.
        self.rearm: Optional[Callable[[float], DelayedTick]] = None

    def __call__(self):
        self.rearm(self.seconds)
        self.on_tick()


class Timer:
    """Schedules a single callback for deferred or periodic execution.

    Example:
        timer = Timer(poll)
        timer.tick_every(5)
        ...
        timer.stop()

    ``tick_now``, ``tick_after`` and ``tick_every`` return the timer, so
    ``Timer(poll).tick_every(5)`` works. Exceptions raised by the callback are
    not caught: ``tick_now`` passes them to its caller, scheduled ticks pass
    them to the event loop. A repeating timer is rearmed before its callback
    runs and keeps firing after a failed tick.
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        loop: Optional[asyncio.AbstractEventLoop] = None,
        leak_tracker: Optional[TimerLeakTracker] = None,
    ):
        """Initialize Timer.

        Args:
            on_tick: Callback invoked on every tick, takes no arguments
            loop: Event loop for scheduled ticks (default: the running loop
                when the timer is armed)
            leak_tracker: Tracker recording this timer while it repeats
                (default: the process-wide tracker, if enabled)

        Raises:
            TypeError: If on_tick is not callable
        """
        if not callable(on_tick):
            raise TypeError(f"on_tick must be callable, got {type(on_tick).__name__}")

        self._on_tick = on_tick
        self._loop = loop
        self._leak_tracker = (
            leak_tracker if leak_tracker is not None else get_leak_tracker()
        )
        self._ticker: Optional[DelayedTick] = None

    @property
    def armed(self) -> bool:
        """Whether a tick is currently scheduled."""
        return self._ticker is not None

    def tick_now(self) -> "Timer":
        """Stop any schedule and call ``on_tick`` right away.

        Returns:
            This timer, for chaining
        """
        self.stop()
        self._on_tick()
        return self

    def tick_after(self, seconds: float) -> "Timer":
        """Call ``on_tick`` once after ``seconds`` unless stopped first.

        Any existing schedule is stopped first. The delay is not validated
        here; the event loop decides what a negative or non-finite delay does.

        Args:
            seconds: Delay before the tick

        Returns:
            This timer, for chaining
        """
        self.stop()

        ticker = DelayedTick(lambda: self._tick_once(ticker), self._loop)
        self._ticker = ticker.tick_after(seconds)

        logger.debug(f"{self!r} armed to tick once after {seconds}s")
        return self

    def tick_every(self, seconds: float) -> "Timer":
        """Call ``on_tick`` every ``seconds`` until ``stop`` is called.

        Any existing schedule is stopped first. When a leak tracker is
        present, the timer is recorded in it with the current stack until it
        is stopped.

        Args:
            seconds: Interval between ticks

        Returns:
            This timer, for chaining
        """
        self.stop()

        repeating = _RepeatingTick(self._on_tick, seconds)
        ticker = DelayedTick(repeating, self._loop)
        repeating.rearm = ticker.tick_after
        self._ticker = ticker.tick_after(seconds)

        # Tracked only once arming succeeded, so a failed arm leaves no entry.
        if self._leak_tracker is not None:
            self._leak_tracker.track(self, capture_stack())

        logger.debug(f"{self!r} armed to tick every {seconds}s")
        return self

    def stop(self):
        """Stop the timer and clear its schedule.

        The timer can be armed again afterwards. Stopping a timer that is not
        armed does nothing, and it is safe to call from inside ``on_tick``.
        """
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None
            logger.debug(f"{self!r} stopped")

        if self._leak_tracker is not None:
            self._leak_tracker.untrack(self)

    def _tick_once(self, ticker: DelayedTick):
        # A one-shot that fired is spent; the timer is disarmed before the
        # callback so that on_tick sees armed == False and may re-arm.
        if self._ticker is ticker:
            self._ticker = None
        self._on_tick()

    def __repr__(self) -> str:
        name = getattr(self._on_tick, "__qualname__", repr(self._on_tick))
        return f"Timer(on_tick={name}, armed={self.armed})"
