"""OpenWeatherMap REST client for current conditions and the 5 day forecast."""

import logging
import os

import httpx

from weatherview.config.schema import OWM_BASE_URL, Units

logger = logging.getLogger(__name__)

API_KEY_ENV = "WEATHER_API_KEY"


class OpenWeatherError(Exception):
    """Raised when a weather request fails or its payload is unusable."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedPayloadError(OpenWeatherError):
    """Raised when a response is missing a field the dashboard depends on."""


class OpenWeatherClient:
    """Thin wrapper around the OpenWeatherMap 2.5 API.

    No retries: a failed request surfaces immediately. Without an explicit
    timeout the httpx default applies.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = OWM_BASE_URL,
        units: Units = Units.METRIC,
        timeout: float | None = None,
    ):
        self.api_key = api_key or os.environ.get(API_KEY_ENV, "")
        if not self.api_key:
            raise OpenWeatherError(f"{API_KEY_ENV} not set")
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.timeout = timeout

    def get_current(self, city: str) -> dict:
        """Fetch current conditions for a city name."""
        return self._get("/weather", city)

    def get_forecast(self, city: str) -> dict:
        """Fetch the 5 day / 3 hour forecast for a city name."""
        return self._get("/forecast", city)

    def _get(self, endpoint: str, city: str) -> dict:
        url = f"{self.base_url}{endpoint}"
        params = {"q": city, "appid": self.api_key, "units": str(self.units)}
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        try:
            resp = httpx.get(url, params=params, **kwargs)
        except httpx.RequestError as e:
            logger.error("OpenWeather request failed: %s q=%s -> %s", endpoint, city, e)
            raise OpenWeatherError(f"Request failed: {e}") from e

        if resp.status_code >= 400:
            logger.error(
                "OpenWeather %d: %s q=%s -> %s",
                resp.status_code, endpoint, city, resp.text,
            )
            raise OpenWeatherError(
                f"HTTP {resp.status_code}: {resp.text}", resp.status_code
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedPayloadError(f"Invalid JSON from {endpoint}") from e
        if not isinstance(data, dict):
            raise MalformedPayloadError(f"Unexpected payload from {endpoint}")
        return data
