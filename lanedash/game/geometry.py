"""
Play-field geometry for LaneDash — no rendering dependency.
Shared by the simulation, the web snapshot stream and tests.
"""

from __future__ import annotations

from lanedash.core.errors import LaneIndexError

# ─────────────────────────────────────────
# Constants
# ─────────────────────────────────────────
TRACKS = 5
TRACK_HEIGHT = 120
GAME_WIDTH = 1200
GAME_HEIGHT = TRACKS * TRACK_HEIGHT

CAR_WIDTH, CAR_HEIGHT = 80, 50
PLAYER_SIZE = 40
PLAYER_X = GAME_WIDTH - 100


def track_y(lane: int) -> float:
    """Top offset of a car sprite centred in `lane`."""
    return lane * TRACK_HEIGHT + (TRACK_HEIGHT - CAR_HEIGHT) / 2


def player_track_y(lane: int) -> float:
    """Resting Y of the player sprite in `lane`."""
    return lane * TRACK_HEIGHT + (TRACK_HEIGHT - PLAYER_SIZE) / 2


def track_lines() -> list[int]:
    return [i * TRACK_HEIGHT for i in range(TRACKS + 1)]


def middle_lane() -> int:
    return TRACKS // 2


def check_lane(lane: int) -> int:
    if not 0 <= lane < TRACKS:
        raise LaneIndexError(f"lane {lane!r} outside [0, {TRACKS})")
    return lane
