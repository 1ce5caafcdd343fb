from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class RunSummary:
    seed: int
    duration_ms: int
    score: int
    final_speed: float
    spawned: int
    lane_changes: int
    max_obstacles: int
    frames: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class BatchSummary:
    metrics: dict[str, Any]
    runs: list[RunSummary]
    path: Path | None = None
