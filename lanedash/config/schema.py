from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from lanedash.game.clock import MAX_SPEED


@dataclass(frozen=True)
class Paths:
    project_dir: Path
    results_dir: Path
    results_json: Path

    def ensure_dirs(self) -> None:
        self.results_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class Settings:
    paths: Paths

    # Loop periods (ms)
    tick_ms: float
    motion_tick_ms: float
    ai_tick_ms: float

    speed_step: float
    max_speed: float
    seed: int | None

    # Web streaming
    snapshot_fps: int
    session_seconds: float
    host: str
    port: int

    # Headless runs
    sims_per_run: int
    sim_workers: int
    duration_ms: int
    record_every: int

    def with_overrides(self, **kwargs) -> "Settings":
        return replace(self, **kwargs)

    def validate(self) -> "Settings":
        for name in ("tick_ms", "motion_tick_ms", "ai_tick_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")
        if self.speed_step < 0:
            raise ValueError("speed_step must be >= 0")
        if not 1 <= self.max_speed <= MAX_SPEED:
            raise ValueError(f"max_speed must be between 1 and {MAX_SPEED}")
        if not 1 <= self.snapshot_fps <= 120:
            raise ValueError("snapshot_fps must be between 1 and 120")
        if self.session_seconds <= 0:
            raise ValueError("session_seconds must be > 0")
        if self.sims_per_run <= 0 or self.sim_workers <= 0:
            raise ValueError("sims_per_run and sim_workers must be > 0")
        if self.duration_ms <= 0 or self.record_every <= 0:
            raise ValueError("duration_ms and record_every must be > 0")
        return self
