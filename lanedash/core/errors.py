from __future__ import annotations


class LaneIndexError(ValueError):
    """A lane index fell outside the play field."""
