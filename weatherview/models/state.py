"""Dashboard state snapshot exposed to the renderers."""

from dataclasses import dataclass
from enum import StrEnum

from weatherview.models.weather import CurrentWeather, ForecastEntry


class Phase(StrEnum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class DashboardSnapshot:
    city: str
    phase: Phase
    generation: int = 0
    weather: CurrentWeather | None = None
    forecast: tuple[ForecastEntry, ...] = ()
    error: str | None = None

    @property
    def loading(self) -> bool:
        return self.phase == Phase.LOADING
