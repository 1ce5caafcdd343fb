"""Obstacle spawning: random lane, random palette entry, speed-scaled pace."""

from __future__ import annotations

import random

from lanedash.game.geometry import CAR_WIDTH, TRACKS, check_lane
from lanedash.game.state import CAR_TYPES, GameState, Obstacle

BASE_SPEED = 5.0
SPEED_JITTER = 5.0
SPEED_FACTOR = 1.0

# Spawn pacing (ms)
SPAWN_INTERVAL_MAX = 1100
SPAWN_INTERVAL_MIN = 300
SPAWN_INTERVAL_PER_SPEED = 80


def spawn_interval_ms(speed: float) -> float:
    """Delay between spawns at the given game speed."""
    return max(SPAWN_INTERVAL_MAX - speed * SPAWN_INTERVAL_PER_SPEED, SPAWN_INTERVAL_MIN)


class ObstacleSpawner:
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng if rng is not None else random.Random()

    def make_obstacle(self, obstacle_id: str, game_speed: float) -> Obstacle:
        """Build one car at the left edge. Draw order: lane, speed, type."""
        lane = check_lane(self.rng.randrange(TRACKS))
        car_speed = BASE_SPEED + self.rng.random() * SPEED_JITTER + SPEED_FACTOR * game_speed
        car_type = self.rng.choice(CAR_TYPES)
        return Obstacle(
            id=obstacle_id,
            x=float(-CAR_WIDTH),
            lane=lane,
            speed=car_speed,
            color=car_type.color,
            type=car_type.type,
        )

    def spawn(self, state: GameState) -> Obstacle:
        obstacle = self.make_obstacle(state.next_obstacle_id(), state.run.speed)
        state.obstacles = state.obstacles + (obstacle,)
        state.spawned += 1
        return obstacle
