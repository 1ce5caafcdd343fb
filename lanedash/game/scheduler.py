"""
Periodic timers for the four game loops.

Both schedulers expose the same surface:
    every(period_ms, callback) -> handle
    cancel(handle)
    cancel_all()

`VirtualScheduler` runs on a simulated millisecond timeline (headless runs
and tests). `AsyncioScheduler` runs on a live asyncio event loop (web
streaming). Callbacks never run concurrently with each other.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Timer:
    handle: int
    period: float
    next_due: float
    callback: Callable[[], None]


class VirtualScheduler:
    """Deterministic interval timers on a simulated clock.

    A timer registered at time t fires at t + k * period. Timers due at the
    same instant fire in registration order.
    """

    def __init__(self):
        self.now = 0.0
        self._timers: dict[int, _Timer] = {}
        self._seq = itertools.count()

    def every(self, period_ms: float, callback: Callable[[], None]) -> int:
        if period_ms <= 0:
            raise ValueError("period_ms must be > 0")
        handle = next(self._seq)
        self._timers[handle] = _Timer(handle, period_ms, self.now + period_ms, callback)
        return handle

    def cancel(self, handle: int) -> None:
        self._timers.pop(handle, None)

    def cancel_all(self) -> None:
        self._timers.clear()

    @property
    def active(self) -> int:
        return len(self._timers)

    def advance(self, ms: float) -> None:
        """Run every callback due in (now, now + ms], then move the clock."""
        end = self.now + ms
        while True:
            due = [t for t in self._timers.values() if t.next_due <= end]
            if not due:
                break
            timer = min(due, key=lambda t: (t.next_due, t.handle))
            self.now = timer.next_due
            timer.next_due += timer.period
            # The callback may cancel or register timers
            timer.callback()
        self.now = end


class AsyncioScheduler:
    """Interval timers on a running asyncio loop (call_at, no drift)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop or asyncio.get_running_loop()
        self._timers: dict[int, _Timer] = {}
        self._pending: dict[int, asyncio.TimerHandle] = {}
        self._seq = itertools.count()

    def every(self, period_ms: float, callback: Callable[[], None]) -> int:
        if period_ms <= 0:
            raise ValueError("period_ms must be > 0")
        handle = next(self._seq)
        period = period_ms / 1000.0
        timer = _Timer(handle, period, self._loop.time() + period, callback)
        self._timers[handle] = timer
        self._arm(timer)
        return handle

    def _arm(self, timer: _Timer) -> None:
        self._pending[timer.handle] = self._loop.call_at(timer.next_due, self._fire, timer.handle)

    def _fire(self, handle: int) -> None:
        timer = self._timers.get(handle)
        if timer is None:
            return
        timer.next_due += timer.period
        now = self._loop.time()
        if timer.next_due <= now:
            # Stalled loop: skip missed ticks instead of firing them back to back
            timer.next_due = now + timer.period
        self._arm(timer)
        timer.callback()

    def cancel(self, handle: int) -> None:
        self._timers.pop(handle, None)
        pending = self._pending.pop(handle, None)
        if pending is not None:
            pending.cancel()

    def cancel_all(self) -> None:
        for handle in list(self._timers):
            self.cancel(handle)

    @property
    def active(self) -> int:
        return len(self._timers)
