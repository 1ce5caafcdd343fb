"""Versioned JSON storage for batch simulation summaries."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

SCHEMA_VERSION = 1


def save_summary(path: Path, payload: dict[str, Any]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"schema_version": SCHEMA_VERSION, "saved_at": time.time(), **payload}
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path


def load_summary(path: Path) -> dict[str, Any]:
    """Read a summary; files from a newer writer are rejected."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    version = data.setdefault("schema_version", 0)
    if version > SCHEMA_VERSION:
        raise ValueError(f"{path}: schema_version {version} is newer than {SCHEMA_VERSION}")
    return data
