"""
LaneGame — wires spawner, clock, autopilot and player motion onto one
scheduler. Pure logic; renderers only read `snapshot()`.
"""

from __future__ import annotations

import random
from typing import Callable

from lanedash.config.defaults import default_settings
from lanedash.config.schema import Settings
from lanedash.game.avoidance import AvoidanceController
from lanedash.game.clock import SimulationClock
from lanedash.game.motion import PlayerMotion
from lanedash.game.scheduler import VirtualScheduler
from lanedash.game.spawner import ObstacleSpawner, spawn_interval_ms
from lanedash.game.state import GameState, Snapshot

TickListener = Callable[[GameState], None]


class LaneGame:
    def __init__(self, settings: Settings | None = None, scheduler=None, rng: random.Random | None = None):
        self.settings = settings or default_settings()
        self.scheduler = scheduler if scheduler is not None else VirtualScheduler()
        self.rng = rng if rng is not None else random.Random(self.settings.seed)

        self.state = GameState()
        self.spawner = ObstacleSpawner(self.rng)
        self.clock = SimulationClock(self.settings.speed_step, self.settings.max_speed)
        self.avoidance = AvoidanceController()
        self.motion = PlayerMotion()

        self._handles: dict[str, int] = {}
        self._tick_listeners: list[TickListener] = []

    @property
    def running(self) -> bool:
        return bool(self._handles)

    def add_tick_listener(self, listener: TickListener) -> None:
        """Call `listener(state)` after every clock tick."""
        self._tick_listeners.append(listener)

    def start(self) -> None:
        if self.running:
            return
        s = self.settings
        self._handles["motion"] = self.scheduler.every(s.motion_tick_ms, self._on_motion)
        self._schedule_spawn()
        self._handles["clock"] = self.scheduler.every(s.tick_ms, self._on_clock)
        self._handles["ai"] = self.scheduler.every(s.ai_tick_ms, self._on_ai)

    def dispose(self) -> None:
        """Tear down all four loops together."""
        for handle in self._handles.values():
            self.scheduler.cancel(handle)
        self._handles.clear()

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()

    # ── loops ──────────────────────────────────────────────────────────

    def _schedule_spawn(self) -> None:
        # Restart (not adjust) the spawn timer with the interval for the current speed
        old = self._handles.pop("spawn", None)
        if old is not None:
            self.scheduler.cancel(old)
        interval = spawn_interval_ms(self.state.run.speed)
        self._handles["spawn"] = self.scheduler.every(interval, self._on_spawn)

    def _on_spawn(self) -> None:
        self.spawner.spawn(self.state)

    def _on_clock(self) -> None:
        if self.clock.tick(self.state) and self.running:
            self._schedule_spawn()
        for listener in self._tick_listeners:
            listener(self.state)

    def _on_ai(self) -> None:
        self.avoidance.tick(self.state)

    def _on_motion(self) -> None:
        self.motion.tick(self.state)
