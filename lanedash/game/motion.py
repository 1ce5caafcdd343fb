"""Player sprite easing between lanes."""

from __future__ import annotations

from dataclasses import replace

from lanedash.game.geometry import player_track_y
from lanedash.game.state import GameState

MOTION_TICK_MS = 16
SNAP_DISTANCE = 2.0
EASE = 0.15


class PlayerMotion:
    def tick(self, state: GameState) -> None:
        player = state.player
        target_y = player_track_y(player.target_lane)
        diff = target_y - player.y

        if abs(diff) < SNAP_DISTANCE:
            if player.current_lane != player.target_lane:
                state.lane_changes += 1
            state.player = replace(player, y=target_y, current_lane=player.target_lane)
        else:
            state.player = replace(player, y=player.y + diff * EASE)
