"""Tests for the FastAPI dashboard."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from weatherview.config.schema import DashboardConfig
from weatherview.dashboard import build_orchestrator, create_app
from weatherview.ingest.owm_client import OpenWeatherError
from weatherview.ingest.weather_fetcher import WeatherFetcher
from weatherview.models.weather import CurrentWeather, WeatherReport
from weatherview.pipeline.orchestrator import DashboardStore, FetchOrchestrator
from weatherview.tests.factories import entries_on_days


def _report(city: str) -> WeatherReport:
    return WeatherReport(
        current=CurrentWeather(
            city_name=city,
            country="XX",
            temperature=18.4,
            humidity=70,
            wind_speed=2.5,
            description="light rain",
            icon="10d",
        ),
        forecast=tuple(entries_on_days([0, 1, 2, 3, 4])),
    )


def _fetch(city: str) -> WeatherReport:
    if city == "Atlantis":
        raise OpenWeatherError("HTTP 404: city not found", 404)
    return _report(city)


@pytest.fixture
def fetcher() -> MagicMock:
    mock = MagicMock(spec=WeatherFetcher)
    mock.load_weather.side_effect = _fetch
    return mock


@pytest.fixture
def client(fetcher, utc_config: DashboardConfig):
    orchestrator = FetchOrchestrator(
        fetcher, DashboardStore(utc_config.display.default_city)
    )
    app = create_app(utc_config, orchestrator)
    with TestClient(app) as c:
        yield c


class TestDashboard:
    def test_startup_loads_default_city(self, client, fetcher):
        fetcher.load_weather.assert_called_once_with("Mumbai")
        data = client.get("/api/weather").json()
        assert data["phase"] == "ready"
        assert data["weather"]["city_name"] == "Mumbai"
        assert len(data["forecast"]) == 5

    def test_page(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "<h2>Mumbai - XX</h2>" in resp.text
        assert 'placeholder="Search for a city"' in resp.text

    def test_search_form_redirects(self, client, fetcher):
        resp = client.get("/search", params={"city": " Paris "}, follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/"
        fetcher.load_weather.assert_called_with("Paris")

        page = client.get("/").text
        assert "<h2>Paris - XX</h2>" in page

    def test_blank_search_does_not_fetch(self, client, fetcher):
        client.get("/search", params={"city": "  "}, follow_redirects=False)
        assert fetcher.load_weather.call_count == 1

    def test_api_search(self, client):
        resp = client.post("/api/search", json={"city": "Tokyo"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["city"] == "Tokyo"
        assert data["phase"] == "ready"
        assert data["generation"] == 2

    def test_api_search_blank(self, client):
        resp = client.post("/api/search", json={"city": " "})
        assert resp.status_code == 422

    def test_failed_city(self, client):
        data = client.post("/api/search", json={"city": "Atlantis"}).json()
        assert data["phase"] == "failed"
        assert data["weather"] is None
        assert "Could not fetch weather data." in client.get("/").text

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data == {"status": "ok", "city": "Mumbai", "phase": "ready"}


class TestRetryAfterFailedStartup:
    def test_same_city_refetched_after_failure(self, utc_config: DashboardConfig):
        fetcher = MagicMock(spec=WeatherFetcher)
        fetcher.load_weather.side_effect = [
            OpenWeatherError("Request failed: connection reset"),
            _report("Mumbai"),
        ]
        orchestrator = FetchOrchestrator(
            fetcher, DashboardStore(utc_config.display.default_city)
        )
        app = create_app(utc_config, orchestrator)

        with TestClient(app) as client:
            assert client.get("/api/weather").json()["phase"] == "failed"

            data = client.post("/api/search", json={"city": "Mumbai"}).json()

        assert fetcher.load_weather.call_count == 2
        assert data["phase"] == "ready"
        assert data["weather"]["city_name"] == "Mumbai"

    def test_same_city_not_refetched_when_ready(self, client, fetcher):
        client.get("/search", params={"city": "Mumbai"}, follow_redirects=False)
        assert fetcher.load_weather.call_count == 1


class TestBuildOrchestrator:
    def test_wires_config(self, utc_config: DashboardConfig):
        orchestrator = build_orchestrator(utc_config)
        assert orchestrator.fetcher.client.api_key == "test-key"
        assert orchestrator.fetcher.client.base_url == utc_config.api.base_url
        assert orchestrator.fetcher.forecast_days == 7
        assert orchestrator.store.snapshot().city == "Mumbai"

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("WEATHER_API_KEY", raising=False)
        with pytest.raises(OpenWeatherError):
            build_orchestrator(DashboardConfig())
