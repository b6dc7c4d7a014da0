"""
Integration tests for Timer on a real asyncio event loop.

Delays are kept short and assertions avoid exact tick counts where real
scheduling jitter could change them.
"""

import asyncio
from unittest.mock import Mock

import pytest

from ticker.leak_tracker import TimerLeakTracker
from ticker.timer import Timer

INTERVAL = 0.01


class TestTimerEventLoop:
    """Test Timer against the running asyncio loop."""

    @pytest.mark.asyncio
    async def test_tick_after_uses_running_loop(self):
        """Test that a timer created without a loop schedules on the running one."""
        fired = asyncio.Event()
        timer = Timer(fired.set)

        timer.tick_after(INTERVAL)
        await asyncio.wait_for(fired.wait(), timeout=1)

        assert not timer.armed

    @pytest.mark.asyncio
    async def test_tick_after_never_fires_synchronously(self):
        """Test that a zero delay still waits for the loop."""
        on_tick = Mock()
        timer = Timer(on_tick)

        timer.tick_after(0)
        on_tick.assert_not_called()

        await asyncio.sleep(INTERVAL)
        on_tick.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_stop_before_delay(self):
        """Test that a stopped timer never ticks."""
        on_tick = Mock()
        timer = Timer(on_tick).tick_after(INTERVAL)

        timer.stop()
        await asyncio.sleep(INTERVAL * 5)

        on_tick.assert_not_called()

    @pytest.mark.asyncio
    async def test_stop_discards_queued_tick(self):
        """Test that stopping a timer whose tick is already due still cancels it."""
        second_tick = Mock()
        second = Timer(second_tick)
        first = Timer(second.stop)

        first.tick_after(0)
        second.tick_after(0)
        await asyncio.sleep(INTERVAL * 5)

        second_tick.assert_not_called()

    @pytest.mark.asyncio
    async def test_repeating_timer_stopped_in_first_tick(self):
        """Test that a repeating timer stopping itself ticks exactly once."""
        on_tick = Mock(side_effect=lambda: timer.stop())
        timer = Timer(on_tick).tick_every(INTERVAL)

        await asyncio.sleep(INTERVAL * 10)

        on_tick.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_repeating_timer_ticks_until_stopped(self):
        """Test that repeating ticks stop with the timer."""
        tracker = TimerLeakTracker()
        on_tick = Mock()
        timer = Timer(on_tick, leak_tracker=tracker).tick_every(INTERVAL)

        await asyncio.sleep(INTERVAL * 10)
        timer.stop()
        count = on_tick.call_count
        await asyncio.sleep(INTERVAL * 5)

        assert count >= 2
        assert on_tick.call_count == count
        assert tracker.report_leaks() == []

    @pytest.mark.asyncio
    async def test_failing_tick_reaches_loop_and_repeats(self):
        """Test that tick errors reach the loop and ticking continues."""
        loop = asyncio.get_running_loop()
        errors = []
        loop.set_exception_handler(lambda _loop, context: errors.append(context))
        on_tick = Mock(side_effect=ValueError("bad tick"))
        timer = Timer(on_tick, loop=loop).tick_every(INTERVAL)

        try:
            await asyncio.sleep(INTERVAL * 10)
        finally:
            timer.stop()
            loop.set_exception_handler(None)

        assert on_tick.call_count >= 2
        assert len(errors) == on_tick.call_count
        assert isinstance(errors[0]["exception"], ValueError)
