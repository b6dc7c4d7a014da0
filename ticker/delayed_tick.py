"""One-shot delayed callback on top of the asyncio event loop.

DelayedTick is the single-fire building block used by Timer. It wraps
``loop.call_later`` so that a callback runs once after a delay, can be
re-armed, and can be cancelled at any point before it runs.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DelayedTick:
    """Calls a function once after a delay unless stopped first.

    Re-arming with ``tick_after`` replaces the pending call. Stopping
    discards the pending call even if the loop already queued it, because
    a cancelled ``asyncio.TimerHandle`` is skipped when the loop runs its
    ready queue.
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """Initialize DelayedTick.

        Args:
            on_tick: Function to call when the delay elapses
            loop: Event loop to schedule on (default: the running loop at
                arming time)
        """
        self._on_tick = on_tick
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        """Whether a call is registered and has not run or been stopped."""
        return self._handle is not None

    def tick_after(self, seconds: float) -> "DelayedTick":
        """Call ``on_tick`` once after ``seconds``, replacing any pending call.

        The delay is handed to ``call_later`` as is.

        Args:
            seconds: Delay in seconds

        Returns:
            This DelayedTick, for chaining

        Raises:
            RuntimeError: If no loop was given and none is running
        """
        self.stop()

        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        self._handle = loop.call_later(seconds, self._fire)
        return self

    def stop(self):
        """Cancel the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self):
        # Forget the spent handle before the callback so that a re-arm from
        # inside on_tick is not mistaken for this one.
        self._handle = None
        self._on_tick()
