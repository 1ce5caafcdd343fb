"""Tests for lanedash.game.geometry — lane offsets and lane bounds."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lanedash.core.errors import LaneIndexError
from lanedash.game.geometry import (
    GAME_HEIGHT,
    PLAYER_X,
    TRACKS,
    check_lane,
    middle_lane,
    player_track_y,
    track_lines,
    track_y,
)


class TestGeometry:
    def test_field_size(self):
        assert TRACKS == 5
        assert GAME_HEIGHT == 600
        assert PLAYER_X == 1100

    def test_resting_positions(self):
        """Cars and player are centred vertically in their lane."""
        assert track_y(0) == 35
        assert track_y(2) == 275
        assert player_track_y(0) == 40
        assert player_track_y(2) == 280

    def test_track_lines(self):
        lines = track_lines()
        assert len(lines) == TRACKS + 1
        assert lines[0] == 0
        assert lines[-1] == GAME_HEIGHT

    def test_middle_lane(self):
        assert middle_lane() == 2

    def test_check_lane_bounds(self):
        assert check_lane(0) == 0
        assert check_lane(TRACKS - 1) == TRACKS - 1
        with pytest.raises(LaneIndexError):
            check_lane(TRACKS)
        with pytest.raises(LaneIndexError):
            check_lane(-1)

    def test_lane_error_is_value_error(self):
        assert issubclass(LaneIndexError, ValueError)
