"""Default runtime settings for LaneDash."""
from __future__ import annotations

import multiprocessing as _mp
from pathlib import Path

from lanedash.game.avoidance import AI_TICK_MS
from lanedash.game.clock import MAX_SPEED, SPEED_STEP, TICK_MS
from lanedash.game.motion import MOTION_TICK_MS

from .schema import Paths, Settings

# Directories
PROJECT_DIR = Path(__file__).resolve().parents[2]
RESULTS_DIR = PROJECT_DIR / "results"
RESULTS_JSON = "simulation_summary.json"

# Web streaming
SNAPSHOT_FPS = 30
SESSION_SECONDS = 45.0
HOST = "0.0.0.0"
PORT = 8000

# Simulation settings
SIMS_PER_RUN = 20
SIM_WORKERS = max(2, _mp.cpu_count() - 2)
DURATION_MS = 60_000
RECORD_EVERY = 2


def make_paths(results_dir: Path | None = None) -> Paths:
    results_dir = Path(results_dir) if results_dir is not None else RESULTS_DIR
    return Paths(
        project_dir=PROJECT_DIR,
        results_dir=results_dir,
        results_json=results_dir / RESULTS_JSON,
    )


def default_settings() -> Settings:
    # Loop constants come from the game modules to avoid drift
    return Settings(
        paths=make_paths(),
        tick_ms=TICK_MS,
        motion_tick_ms=MOTION_TICK_MS,
        ai_tick_ms=AI_TICK_MS,
        speed_step=SPEED_STEP,
        max_speed=MAX_SPEED,
        seed=None,
        snapshot_fps=SNAPSHOT_FPS,
        session_seconds=SESSION_SECONDS,
        host=HOST,
        port=PORT,
        sims_per_run=SIMS_PER_RUN,
        sim_workers=SIM_WORKERS,
        duration_ms=DURATION_MS,
        record_every=RECORD_EVERY,
    )
