"""Fixed-rate simulation tick: car motion, pruning, score and speed ramp."""

from __future__ import annotations

from lanedash.game.state import GameState, RunState

TICK_MS = 16
SPEED_STEP = 0.003
MAX_SPEED = 8.0


class SimulationClock:
    def __init__(self, speed_step: float = SPEED_STEP, max_speed: float = MAX_SPEED):
        self.speed_step = speed_step
        # Game speed never leaves [1, MAX_SPEED]
        self.max_speed = min(max_speed, MAX_SPEED)

    def tick(self, state: GameState) -> bool:
        """Advance one frame. Returns True when the game speed changed.

        Cars always move, whatever the player is doing.
        """
        moved = (o.advanced() for o in state.obstacles)
        state.obstacles = tuple(o for o in moved if not o.gone())

        run = state.run
        speed = min(run.speed + self.speed_step, self.max_speed)
        state.run = RunState(score=run.score + 1, speed=speed)
        return speed != run.speed
