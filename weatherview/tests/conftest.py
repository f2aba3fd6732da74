"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weatherview.config.schema import DashboardConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def api_key_env(monkeypatch):
    """Every test sees a fake API key unless it removes it."""
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")


@pytest.fixture
def utc_config() -> DashboardConfig:
    return DashboardConfig(
        api={"base_url": "https://test-owm.example.com/data/2.5"},
        display={"timezone": "UTC"},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"units": "imperial"},
        "display": {"default_city": "Paris", "forecast_days": 5},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURE_DIR


@pytest.fixture
def mumbai_current() -> dict:
    with open(FIXTURE_DIR / "owm_current_mumbai.json") as f:
        return json.load(f)


@pytest.fixture
def mumbai_forecast() -> dict:
    with open(FIXTURE_DIR / "owm_forecast_mumbai.json") as f:
        return json.load(f)
