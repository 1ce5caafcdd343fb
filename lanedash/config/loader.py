from __future__ import annotations

from pathlib import Path

from .defaults import default_settings, make_paths
from .schema import Settings


def load_settings(*, results_dir: str | Path | None = None, **overrides) -> Settings:
    """Load runtime settings, applying non-None overrides on top of the defaults.

    Raises ValueError for unknown keys or out-of-range values.
    """
    settings = default_settings()
    if results_dir is not None:
        settings = settings.with_overrides(paths=make_paths(Path(results_dir)))

    overrides = {k: v for k, v in overrides.items() if v is not None}
    unknown = sorted(set(overrides) - set(Settings.__dataclass_fields__))
    if unknown:
        raise ValueError(f"Unknown settings: {unknown}")
    if overrides:
        settings = settings.with_overrides(**overrides)

    settings.validate()
    settings.paths.ensure_dirs()
    return settings
