from __future__ import annotations

"""Headless simulation runs (virtual clock, multiprocessing batches)."""

import multiprocessing
import random
import time
from dataclasses import replace
from itertools import islice
from typing import Any

import numpy as np

from lanedash.config.schema import Settings
from lanedash.core.contracts import BatchSummary, RunSummary
from lanedash.core.results import save_summary
from lanedash.game.engine import LaneGame
from lanedash.game.scheduler import VirtualScheduler
from lanedash.game.state import GameState


def simulate(
    settings: Settings,
    seed: int = 0,
    *,
    duration_ms: int | None = None,
    record_every: int | None = None,
) -> RunSummary:
    """
    Run one game on a virtual clock.

    Args:
        settings: runtime settings (loop periods, speed ramp)
        seed: random seed for lanes, speeds and car types
        duration_ms: simulated wall time, defaults to settings.duration_ms
        record_every: keep every Nth clock-tick snapshot in `frames`

    Same seed + same settings = same result.
    """
    duration_ms = settings.duration_ms if duration_ms is None else duration_ms
    record_every = settings.record_every if record_every is None else record_every
    if duration_ms <= 0 or record_every <= 0:
        raise ValueError("duration_ms and record_every must be > 0")

    scheduler = VirtualScheduler()
    game = LaneGame(settings, scheduler=scheduler, rng=random.Random(seed))
    frames: list[dict[str, Any]] = []
    max_obstacles = 0

    def _record(state: GameState):
        nonlocal max_obstacles
        max_obstacles = max(max_obstacles, len(state.obstacles))
        if state.run.score % record_every == 0:
            frames.append(state.snapshot().to_dict())

    game.add_tick_listener(_record)
    game.start()
    try:
        scheduler.advance(duration_ms)
    finally:
        game.dispose()

    state = game.state
    return RunSummary(
        seed=seed,
        duration_ms=duration_ms,
        score=state.run.score,
        final_speed=state.run.speed,
        spawned=state.spawned,
        lane_changes=state.lane_changes,
        max_obstacles=max_obstacles,
        frames=frames,
    )


def _run_seed_batch(args):
    """Worker function: run one chunk of seeds without recording frames."""
    settings, seeds = args
    # Frames stay in the worker; summaries only
    return [replace(simulate(settings, seed), frames=[]) for seed in seeds]


def _chunked(items, chunk_size):
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    it = iter(items)
    while True:
        chunk = list(islice(it, chunk_size))
        if not chunk:
            return
        yield chunk


def aggregate(runs: list[RunSummary]) -> dict[str, Any]:
    if not runs:
        raise ValueError("aggregate() needs at least one run")
    scores = np.array([r.score for r in runs])
    changes = np.array([r.lane_changes for r in runs])
    spawned = np.array([r.spawned for r in runs])
    crowding = np.array([r.max_obstacles for r in runs])
    return {
        "n_runs": len(runs),
        "avg_score": float(np.mean(scores)),
        "avg_lane_changes": float(np.mean(changes)),
        "std_lane_changes": float(np.std(changes)),
        "min_lane_changes": int(np.min(changes)),
        "max_lane_changes": int(np.max(changes)),
        "avg_spawned": float(np.mean(spawned)),
        "avg_max_obstacles": float(np.mean(crowding)),
        "final_speed": float(np.max([r.final_speed for r in runs])),
    }


def run_simulations(settings: Settings, *, n_sims: int | None = None) -> BatchSummary:
    """Run repeated seeded games across a process pool and save a summary."""
    n_sims = n_sims or settings.sims_per_run
    seed_rng = random.Random(settings.seed)
    seeds = seed_rng.sample(range(100_000), n_sims)

    worker_count = min(n_sims, settings.sim_workers)
    seeds_per_worker = max(1, (n_sims + worker_count - 1) // worker_count)
    args_list = [(settings, chunk) for chunk in _chunked(seeds, seeds_per_worker)]

    print(f"[sim] {n_sims} runs x {settings.duration_ms / 1000:.0f}s on {worker_count} workers", flush=True)
    start = time.time()
    runs: list[RunSummary] = []
    if worker_count == 1:
        for args in args_list:
            runs.extend(_run_seed_batch(args))
    else:
        with multiprocessing.Pool(processes=worker_count) as pool:
            for worker_runs in pool.map(_run_seed_batch, args_list):
                runs.extend(worker_runs)
    print(f"[sim] done in {time.time() - start:.1f}s", flush=True)

    metrics = aggregate(runs)
    payload = {
        **metrics,
        "duration_ms": settings.duration_ms,
        "seeds": [r.seed for r in runs],
        "lane_changes": [r.lane_changes for r in runs],
        "spawned": [r.spawned for r in runs],
    }
    path = save_summary(settings.paths.results_json, payload)
    return BatchSummary(metrics=metrics, runs=runs, path=path)
