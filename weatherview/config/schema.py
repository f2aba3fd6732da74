"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

OWM_BASE_URL = "https://api.openweathermap.org/data/2.5"
OWM_ICON_URL_TEMPLATE = "http://openweathermap.org/img/wn/{icon}@2x.png"


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"  # Kelvin


TEMPERATURE_SYMBOLS: dict[Units, str] = {
    Units.METRIC: "°C",
    Units.IMPERIAL: "°F",
    Units.STANDARD: "K",
}

WIND_SPEED_UNITS: dict[Units, str] = {
    Units.METRIC: "m/s",
    Units.IMPERIAL: "mph",
    Units.STANDARD: "m/s",
}


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OWM_BASE_URL
    units: Units = Units.METRIC
    timeout: float | None = Field(default=None, gt=0.0)
    icon_url_template: str = OWM_ICON_URL_TEMPLATE

    @field_validator("icon_url_template")
    @classmethod
    def _template_has_icon(cls, v: str) -> str:
        if "{icon}" not in v:
            raise ValueError("icon_url_template must contain '{icon}'")
        try:
            v.format(icon="01d")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"icon_url_template may only use the {{icon}} placeholder: {e!r}"
            ) from e
        return v


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_city: str = Field(default="Mumbai", min_length=1)
    forecast_days: int = Field(default=7, ge=1, le=7)
    timezone: str | None = None  # None = viewer local time

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    display: DisplayConfig = DisplayConfig()
    server: ServerConfig = ServerConfig()
