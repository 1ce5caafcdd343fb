from __future__ import annotations

import importlib.util
from dataclasses import dataclass

from lanedash.config.schema import Settings


@dataclass(frozen=True)
class Check:
    name: str
    ok: bool
    detail: str


def _has_module(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def run_doctor(settings: Settings) -> list[Check]:
    checks: list[Check] = []
    try:
        settings.validate()
        checks.append(Check("settings", True, f"tick={settings.tick_ms}ms ai={settings.ai_tick_ms}ms"))
    except ValueError as exc:
        checks.append(Check("settings", False, str(exc)))
    checks.append(Check("numpy", _has_module("numpy"), "required for batch metrics"))
    checks.append(Check("fastapi", _has_module("fastapi"), "required for the web server"))
    checks.append(Check("uvicorn", _has_module("uvicorn"), "required for `lanedash serve`"))
    checks.append(Check("pydantic", _has_module("pydantic"), "required for web request models"))
    checks.append(Check("httpx", _has_module("httpx"), "optional, web tests"))

    paths = settings.paths
    checks.append(Check("results_dir", paths.results_dir.exists(), str(paths.results_dir)))
    checks.append(Check("results_json", paths.results_json.exists(), str(paths.results_json)))
    return checks
