"""LaneDash streaming service — runs one LaneGame on the server's event loop
and hands out snapshots for the browser to draw."""

from __future__ import annotations

import time
from typing import Any

from lanedash.config.schema import Settings
from lanedash.game.engine import LaneGame
from lanedash.game.scheduler import AsyncioScheduler


class GameStreamService:
    """Owns one game session: start, snapshot, stop."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.game: LaneGame | None = None
        self._started_at: float | None = None

    def start(self):
        """Start the four game loops. Must be called from a running event loop."""
        self.game = LaneGame(self.settings, scheduler=AsyncioScheduler())
        self.game.start()
        self._started_at = time.monotonic()
        print(f"[game] session started (seed={self.settings.seed})", flush=True)

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    @property
    def alive(self) -> bool:
        return (
            self.game is not None
            and self.game.running
            and self.elapsed < self.settings.session_seconds
        )

    def get_snapshot(self) -> dict[str, Any] | None:
        if self.game is None:
            return None
        return self.game.snapshot().to_dict()

    def stop(self):
        """Dispose the game; no timer fires afterwards."""
        if self.game is not None and self.game.running:
            self.game.dispose()
            print(f"[game] session stopped at score={self.game.state.run.score}", flush=True)
