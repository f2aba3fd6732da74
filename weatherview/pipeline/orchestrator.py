"""Fetch orchestration: dashboard state, transitions, and stale-result discarding."""

import logging
import threading

from weatherview.ingest.weather_fetcher import WeatherFetcher
from weatherview.models.state import DashboardSnapshot, Phase
from weatherview.models.weather import WeatherReport

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Could not fetch weather data."


class DashboardStore:
    """Owns the dashboard state. All changes go through begin/complete/fail.

    Every fetch cycle is tagged with a generation number from begin(). A
    result carrying any generation but the latest is dropped, so a slow
    response for an earlier city never overwrites a newer one.
    """

    def __init__(self, city: str):
        self._lock = threading.Lock()
        self._generation = 0
        self._snapshot = DashboardSnapshot(city=city, phase=Phase.LOADING)

    @property
    def latest_generation(self) -> int:
        with self._lock:
            return self._generation

    def snapshot(self) -> DashboardSnapshot:
        with self._lock:
            return self._snapshot

    def begin(self, city: str) -> int:
        """Start a fetch cycle for city. Previous data is hidden immediately."""
        with self._lock:
            self._generation += 1
            self._snapshot = DashboardSnapshot(
                city=city, phase=Phase.LOADING, generation=self._generation
            )
            return self._generation

    def complete(self, generation: int, report: WeatherReport) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Discarding result of generation %d (latest is %d)",
                    generation, self._generation,
                )
                return False
            self._snapshot = DashboardSnapshot(
                city=self._snapshot.city,
                phase=Phase.READY,
                generation=generation,
                weather=report.current,
                forecast=report.forecast,
            )
            return True

    def fail(self, generation: int, message: str = FETCH_FAILED_MESSAGE) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Discarding failure of generation %d (latest is %d)",
                    generation, self._generation,
                )
                return False
            self._snapshot = DashboardSnapshot(
                city=self._snapshot.city,
                phase=Phase.FAILED,
                generation=generation,
                error=message,
            )
            return True


class FetchOrchestrator:
    def __init__(self, fetcher: WeatherFetcher, store: DashboardStore):
        self.fetcher = fetcher
        self.store = store

    def refresh(self, city: str) -> DashboardSnapshot:
        """Run one fetch cycle for city and return the resulting snapshot.

        Every failure collapses to the failed phase; the loading phase is
        left on every path.
        """
        generation = self.store.begin(city)
        try:
            report = self.fetcher.load_weather(city)
        except Exception:
            logger.exception("Error fetching weather data for %s", city)
            self.store.fail(generation)
        else:
            self.store.complete(generation, report)
        return self.store.snapshot()
