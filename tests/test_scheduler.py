"""Tests for lanedash.game.scheduler — virtual and asyncio interval timers."""

import asyncio
import sys
import time
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lanedash.game.scheduler import AsyncioScheduler, VirtualScheduler


class TestVirtualScheduler:
    def test_fires_on_period_multiples(self):
        sched = VirtualScheduler()
        fast, slow = [], []
        sched.every(16, lambda: fast.append(sched.now))
        sched.every(50, lambda: slow.append(sched.now))
        sched.advance(100)
        assert fast == [16, 32, 48, 64, 80, 96]
        assert slow == [50, 100]
        assert sched.now == 100

    def test_ties_fire_in_registration_order(self):
        sched = VirtualScheduler()
        order = []
        sched.every(10, lambda: order.append("a"))
        sched.every(10, lambda: order.append("b"))
        sched.advance(30)
        assert order == ["a", "b"] * 3

    def test_cancel(self):
        sched = VirtualScheduler()
        calls = []
        handle = sched.every(10, lambda: calls.append(1))
        sched.advance(25)
        sched.cancel(handle)
        sched.advance(100)
        assert len(calls) == 2
        assert sched.active == 0

    def test_restart_from_callback(self):
        """A timer restarted every tick of a faster timer never fires."""
        sched = VirtualScheduler()
        fired = []
        handles = {"slow": sched.every(30, lambda: fired.append(sched.now))}

        def restart():
            sched.cancel(handles["slow"])
            handles["slow"] = sched.every(30, lambda: fired.append(sched.now))

        sched.every(10, restart)
        sched.advance(200)
        assert fired == []

    def test_cancel_all(self):
        sched = VirtualScheduler()
        sched.every(5, lambda: None)
        sched.every(7, lambda: None)
        sched.cancel_all()
        assert sched.active == 0

    def test_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            VirtualScheduler().every(0, lambda: None)


class TestAsyncioScheduler:
    def test_ticks_and_teardown(self):
        """Timers fire on the loop and stop firing after cancel_all()."""

        async def scenario():
            sched = AsyncioScheduler()
            calls = []
            sched.every(10, lambda: calls.append(1))
            await asyncio.sleep(0.1)
            sched.cancel_all()
            seen = len(calls)
            await asyncio.sleep(0.05)
            return seen, len(calls), sched.active

        seen, after, active = asyncio.run(scenario())
        assert seen >= 3
        assert after == seen
        assert active == 0

    def test_stalled_loop_does_not_burst(self):
        """After a long blocking callback the timer resumes its pace."""

        async def scenario():
            sched = AsyncioScheduler()
            calls = []

            def tick():
                calls.append(1)
                if len(calls) == 1:
                    time.sleep(0.1)

            sched.every(10, tick)
            await asyncio.sleep(0.14)
            sched.cancel_all()
            return len(calls)

        # ~1 + 3 ticks after the stall; catching up would give 10+
        assert asyncio.run(scenario()) <= 7
