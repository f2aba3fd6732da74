"""OpenWeatherMap current-conditions and forecast models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentWeather:
    city_name: str
    country: str
    temperature: float
    humidity: int
    wind_speed: float
    description: str
    icon: str


@dataclass(frozen=True)
class ForecastEntry:
    timestamp: int  # seconds since epoch, UTC
    temperature: float
    description: str
    icon: str


@dataclass(frozen=True)
class WeatherReport:
    """Result of one successful fetch cycle."""

    current: CurrentWeather
    forecast: tuple[ForecastEntry, ...]
