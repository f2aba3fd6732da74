"""Weather dashboard: FastAPI app serving the page, a search endpoint, and JSON."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel

from weatherview.config.schema import DashboardConfig
from weatherview.ingest.owm_client import OpenWeatherClient
from weatherview.ingest.weather_fetcher import WeatherFetcher
from weatherview.models.state import Phase
from weatherview.pipeline.orchestrator import DashboardStore, FetchOrchestrator
from weatherview.pipeline.search import SearchBox
from weatherview.reporting.formatters import (
    options_from_config,
    render_html,
    snapshot_to_dict,
)

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    city: str


def build_orchestrator(config: DashboardConfig) -> FetchOrchestrator:
    """Wire client, fetcher and store from config. Reads the API key from env."""
    client = OpenWeatherClient(
        base_url=config.api.base_url,
        units=config.api.units,
        timeout=config.api.timeout,
    )
    fetcher = WeatherFetcher(
        client,
        forecast_days=config.display.forecast_days,
        tz=config.display.tzinfo(),
    )
    return FetchOrchestrator(fetcher, DashboardStore(config.display.default_city))


def create_app(
    config: DashboardConfig, orchestrator: FetchOrchestrator | None = None
) -> FastAPI:
    if orchestrator is None:
        orchestrator = build_orchestrator(config)
    default_city = config.display.default_city
    search = SearchBox(
        default_city,
        needs_refetch=lambda: orchestrator.store.snapshot().phase == Phase.FAILED,
    )
    search.subscribe(orchestrator.refresh)
    opts = options_from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Loading initial weather for %s", default_city)
        await run_in_threadpool(orchestrator.refresh, default_city)
        yield

    app = FastAPI(title="Weather Dashboard", version="0.1.0", lifespan=lifespan)
    app.state.orchestrator = orchestrator
    app.state.search = search

    @app.get("/", response_class=HTMLResponse)
    def serve_dashboard():
        return HTMLResponse(render_html(orchestrator.store.snapshot(), opts))

    @app.get("/search")
    def search_city(city: str = ""):
        """Form target: submit the search text, then show the page again."""
        search.submit(city)
        return RedirectResponse("/", status_code=303)

    @app.get("/api/weather")
    def get_weather():
        """Current dashboard snapshot."""
        return snapshot_to_dict(orchestrator.store.snapshot(), opts)

    @app.post("/api/search")
    def post_search(req: SearchRequest):
        """Submit a city and return the snapshot once its fetch cycle ends."""
        if not req.city.strip():
            raise HTTPException(422, "City must not be blank")
        search.submit(req.city)
        return snapshot_to_dict(orchestrator.store.snapshot(), opts)

    @app.get("/api/health")
    def get_health():
        snap = orchestrator.store.snapshot()
        return {"status": "ok", "city": snap.city, "phase": str(snap.phase)}

    return app
