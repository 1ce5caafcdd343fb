"""
Game state for LaneDash.

Obstacles, player and run counters are frozen values; the components in
this package mutate `GameState` only by replacing whole values, so a
reader never sees a half-updated tick.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from lanedash.game.geometry import (
    CAR_WIDTH,
    GAME_WIDTH,
    PLAYER_X,
    middle_lane,
    player_track_y,
    track_y,
)

SETTLED = "settled"
TRANSITIONING = "transitioning"

INITIAL_SPEED = 1.0


@dataclass(frozen=True)
class CarType:
    type: str
    color: str


# Fixed palette, drawn uniformly by the spawner
CAR_TYPES = (
    CarType("sports", "#FF1744"),
    CarType("sedan", "#00E676"),
    CarType("truck", "#FF9100"),
    CarType("taxi", "#E91E63"),
    CarType("police", "#2196F3"),
    CarType("luxury", "#9C27B0"),
    CarType("electric", "#00BCD4"),
)


@dataclass(frozen=True)
class Obstacle:
    id: str
    x: float
    lane: int
    speed: float
    color: str
    type: str

    def advanced(self) -> "Obstacle":
        return replace(self, x=self.x + self.speed)

    def gone(self) -> bool:
        return self.x >= GAME_WIDTH + CAR_WIDTH

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": track_y(self.lane),
            "lane": self.lane,
            "color": self.color,
            "type": self.type,
        }


@dataclass(frozen=True)
class PlayerState:
    current_lane: int
    target_lane: int
    y: float

    @classmethod
    def initial(cls) -> "PlayerState":
        lane = middle_lane()
        return cls(current_lane=lane, target_lane=lane, y=player_track_y(lane))

    @property
    def offset(self) -> float:
        """Distance between `y` and the committed lane's resting position."""
        return abs(self.y - player_track_y(self.current_lane))

    @property
    def phase(self) -> str:
        if self.current_lane == self.target_lane and self.y == player_track_y(self.target_lane):
            return SETTLED
        return TRANSITIONING


@dataclass(frozen=True)
class RunState:
    score: int = 0
    speed: float = INITIAL_SPEED


@dataclass(frozen=True)
class Snapshot:
    """Read-only per-frame view handed to renderers."""

    obstacles: tuple[Obstacle, ...]
    player: PlayerState
    score: int
    speed: float

    @property
    def elapsed_seconds(self) -> int:
        # Score counts ~60 Hz clock ticks
        return self.score // 60

    def to_dict(self) -> dict[str, Any]:
        return {
            "obstacles": [o.to_dict() for o in self.obstacles],
            "player": {
                "x": PLAYER_X,
                "y": self.player.y,
                "lane": self.player.current_lane,
                "target_lane": self.player.target_lane,
                "phase": self.player.phase,
            },
            "score": self.score,
            "speed": self.speed,
            "hud": {
                "time": self.elapsed_seconds,
                "speed": f"{self.speed:.1f}x",
            },
        }


class GameState:
    def __init__(self):
        self.obstacles: tuple[Obstacle, ...] = ()
        self.player = PlayerState.initial()
        self.run = RunState()
        self.spawned = 0
        self.lane_changes = 0

    def next_obstacle_id(self) -> str:
        return f"car-{self.spawned + 1}"

    def snapshot(self) -> Snapshot:
        return Snapshot(
            obstacles=self.obstacles,
            player=self.player,
            score=self.run.score,
            speed=self.run.speed,
        )
