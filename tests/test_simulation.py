"""Tests for lanedash.simulation.runner — headless runs and batch summaries."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lanedash.config.loader import load_settings
from lanedash.core.contracts import RunSummary
from lanedash.core.results import SCHEMA_VERSION, load_summary
from lanedash.simulation.runner import aggregate, run_simulations, simulate


@pytest.fixture
def settings(tmp_path):
    return load_settings(results_dir=tmp_path, seed=5, speed_step=0.01, duration_ms=20_000, sim_workers=1)


class TestSimulate:
    def test_simulate_basic(self, settings):
        run = simulate(settings, seed=42)
        assert run.seed == 42
        assert run.duration_ms == 20_000
        assert run.score == 20_000 // 16
        assert run.final_speed == settings.max_speed
        assert run.spawned > 0

    def test_simulate_deterministic(self, settings):
        """Same seed + same settings = same run."""
        r1 = simulate(settings, seed=123)
        r2 = simulate(settings, seed=123)
        assert r1.spawned == r2.spawned
        assert r1.lane_changes == r2.lane_changes
        assert r1.frames == r2.frames

    def test_different_seeds_differ(self, settings):
        r1 = simulate(settings, seed=1)
        r2 = simulate(settings, seed=999)
        assert r1.frames != r2.frames

    def test_frames_recorded_every_nth_tick(self, settings):
        run = simulate(settings, seed=3, duration_ms=1600, record_every=10)
        assert len(run.frames) == 10
        assert [f["score"] for f in run.frames] == list(range(10, 101, 10))
        assert {"obstacles", "player", "score", "speed", "hud"} <= set(run.frames[0])


class TestAggregate:
    def test_aggregate_empty(self):
        with pytest.raises(ValueError):
            aggregate([])

    def test_aggregate_values(self):
        runs = [
            RunSummary(seed=1, duration_ms=100, score=6, final_speed=1.5, spawned=2, lane_changes=1, max_obstacles=2),
            RunSummary(seed=2, duration_ms=100, score=6, final_speed=2.0, spawned=4, lane_changes=3, max_obstacles=4),
        ]
        metrics = aggregate(runs)
        assert metrics["n_runs"] == 2
        assert metrics["avg_lane_changes"] == 2.0
        assert metrics["std_lane_changes"] == 1.0
        assert metrics["min_lane_changes"] == 1
        assert metrics["max_lane_changes"] == 3
        assert metrics["avg_spawned"] == 3.0
        assert metrics["final_speed"] == 2.0


class TestRunSimulations:
    def test_batch_saves_summary(self, settings):
        summary = run_simulations(settings.with_overrides(duration_ms=4000), n_sims=3)
        assert len(summary.runs) == 3
        assert all(r.frames == [] for r in summary.runs)
        assert summary.path == settings.paths.results_json

        data = load_summary(summary.path)
        assert data["schema_version"] == SCHEMA_VERSION
        assert data["n_runs"] == 3
        assert len(data["seeds"]) == 3

    def test_batch_seeds_follow_settings_seed(self, settings):
        s = settings.with_overrides(duration_ms=1000)
        a = run_simulations(s, n_sims=2)
        b = run_simulations(s, n_sims=2)
        assert [r.seed for r in a.runs] == [r.seed for r in b.runs]


class TestSummaryFiles:
    def test_newer_schema_rejected(self, tmp_path):
        path = tmp_path / "future.json"
        path.write_text('{"schema_version": 99}')
        with pytest.raises(ValueError):
            load_summary(path)

    def test_unversioned_file_defaults_to_zero(self, tmp_path):
        path = tmp_path / "old.json"
        path.write_text('{"n_runs": 1}')
        assert load_summary(path)["schema_version"] == 0


class TestSimulateArguments:
    def test_explicit_zero_rejected(self, settings):
        with pytest.raises(ValueError):
            simulate(settings, seed=1, duration_ms=0)
        with pytest.raises(ValueError):
            simulate(settings, seed=1, duration_ms=1000, record_every=0)
