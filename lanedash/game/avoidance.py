"""
Autopilot lane choice.

Runs on its own slower timer, reads obstacles and player state, and only
ever writes `player.target_lane`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from lanedash.game.geometry import PLAYER_X, TRACKS, check_lane
from lanedash.game.state import GameState, Obstacle

AI_TICK_MS = 50

DANGER_BASE = 200
DANGER_PER_SPEED = 20
THREAT_AHEAD = 60    # how far past the player a car still counts as a threat
SAFETY_AHEAD = 100   # same, when scoring candidate lanes
SETTLE_TOLERANCE = 10


def danger_zone(speed: float) -> float:
    """Reaction distance in front of the player; grows with game speed."""
    return DANGER_BASE + speed * DANGER_PER_SPEED


def lane_counts(obstacles: Iterable[Obstacle], lo: float, hi: float) -> list[int]:
    """Number of cars per lane with lo < x < hi."""
    counts = [0] * TRACKS
    for o in obstacles:
        if lo < o.x < hi:
            counts[o.lane] += 1
    return counts


def safest_lane(counts: list[int]) -> int:
    """Lane with the fewest cars; ties go to the lowest index."""
    best = 0
    for lane, count in enumerate(counts):
        if count < counts[best]:
            best = lane
    return best


class AvoidanceController:
    def decide(self, state: GameState) -> int | None:
        """Return the safest lane if the player's lane is threatened, else None."""
        lane = state.player.current_lane
        zone = danger_zone(state.run.speed)
        lo = PLAYER_X - zone

        threatened = any(
            o.lane == lane and lo < o.x < PLAYER_X + THREAT_AHEAD
            for o in state.obstacles
        )
        if not threatened:
            return None

        return safest_lane(lane_counts(state.obstacles, lo, PLAYER_X + SAFETY_AHEAD))

    def tick(self, state: GameState) -> bool:
        """Retarget the player if needed. Returns True when the target changed."""
        choice = self.decide(state)
        if choice is None:
            return False

        player = state.player
        # No retargeting while a lane change is still in flight
        if choice == player.target_lane or player.offset >= SETTLE_TOLERANCE:
            return False

        state.player = replace(player, target_lane=check_lane(choice))
        return True
