"""YAML config loader."""

from pathlib import Path

import yaml

from weatherview.config.schema import DashboardConfig


def load_config(path: str | Path | None = None) -> DashboardConfig:
    """Load and validate config from a YAML file.

    With no path, or an empty file, every section takes its defaults.
    """
    if path is None:
        return DashboardConfig()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return DashboardConfig(**raw)


def dump_config(config: DashboardConfig) -> str:
    """Render the effective config as indented JSON."""
    return config.model_dump_json(indent=2)
