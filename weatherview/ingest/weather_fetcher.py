"""Weather fetcher: one sequential current + forecast fetch cycle per city."""

import logging
from datetime import tzinfo

from weatherview.ingest.normalizer import MAX_FORECAST_DAYS, normalize_forecast
from weatherview.ingest.owm_client import MalformedPayloadError, OpenWeatherClient
from weatherview.models.weather import CurrentWeather, ForecastEntry, WeatherReport

logger = logging.getLogger(__name__)


class WeatherFetcher:
    def __init__(
        self,
        client: OpenWeatherClient,
        forecast_days: int = MAX_FORECAST_DAYS,
        tz: tzinfo | None = None,
    ):
        self.client = client
        self.forecast_days = forecast_days
        self.tz = tz

    def load_weather(self, city: str) -> WeatherReport:
        """Fetch current conditions, then the forecast, for a city.

        The forecast request is only issued once current conditions have
        been fetched and parsed. Raises OpenWeatherError on any failure.
        """
        raw_current = self.client.get_current(city)
        current = parse_current(raw_current)

        raw_forecast = self.client.get_forecast(city)
        entries = parse_forecast(raw_forecast)
        days = normalize_forecast(entries, limit=self.forecast_days, tz=self.tz)

        logger.info(
            "Fetched weather for %s: %s, %s, %d forecast days from %d samples",
            city, current.city_name, current.country, len(days), len(entries),
        )
        return WeatherReport(current=current, forecast=tuple(days))


def parse_current(raw: dict) -> CurrentWeather:
    """Extract the fields the dashboard shows from a /weather payload."""
    try:
        condition = raw["weather"][0]
        return CurrentWeather(
            city_name=str(raw["name"]),
            country=str(raw["sys"]["country"]),
            temperature=float(raw["main"]["temp"]),
            humidity=int(raw["main"]["humidity"]),
            wind_speed=float(raw["wind"]["speed"]),
            description=str(condition["description"]),
            icon=str(condition["icon"]),
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Malformed current weather payload: {e!r}") from e


def parse_forecast(raw: dict) -> list[ForecastEntry]:
    """Extract forecast entries from a /forecast payload, in provider order."""
    try:
        items = raw["list"]
        return [_parse_forecast_item(item) for item in items]
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Malformed forecast payload: {e!r}") from e


def _parse_forecast_item(item: dict) -> ForecastEntry:
    condition = item["weather"][0]
    return ForecastEntry(
        timestamp=int(item["dt"]),
        temperature=float(item["main"]["temp"]),
        description=str(condition["description"]),
        icon=str(condition["icon"]),
    )
