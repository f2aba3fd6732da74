"""Dashboard renderers: text for the terminal, HTML for the page, dicts for JSON.

All functions here are pure. They branch only on the snapshot's phase and on
whether weather data is present.
"""

import math
from dataclasses import dataclass
from datetime import datetime, tzinfo
from html import escape

from weatherview.config.schema import (
    OWM_ICON_URL_TEMPLATE,
    TEMPERATURE_SYMBOLS,
    WIND_SPEED_UNITS,
    DashboardConfig,
    Units,
)
from weatherview.models.state import DashboardSnapshot, Phase
from weatherview.models.weather import ForecastEntry

LOADING_MESSAGE = "Loading..."
NO_DATA_MESSAGE = "Could not fetch weather data."
UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class RenderOptions:
    units: Units = Units.METRIC
    icon_url_template: str = OWM_ICON_URL_TEMPLATE
    tz: tzinfo | None = None  # None = viewer local time


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_temperature(value: float, units: Units = Units.METRIC) -> str:
    return f"{round_half_up(value)}{TEMPERATURE_SYMBOLS[units]}"


def format_wind(value: float, units: Units = Units.METRIC) -> str:
    shown = int(value) if float(value).is_integer() else value
    return f"{shown} {WIND_SPEED_UNITS[units]}"


def icon_url(icon: str, template: str = OWM_ICON_URL_TEMPLATE) -> str:
    return template.format(icon=icon)


def weekday_name(timestamp: int, tz: tzinfo | None = None) -> str:
    return datetime.fromtimestamp(timestamp, tz).strftime("%A")


def today_header(now: datetime) -> tuple[str, str]:
    """Weekday name and short date (M/D/YYYY) for the dashboard header."""
    return now.strftime("%A"), f"{now.month}/{now.day}/{now.year}"


def _now(opts: RenderOptions, now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(opts.tz)


# ── Text ────────────────────────────────────────────────────────


def render_text(
    snapshot: DashboardSnapshot,
    opts: RenderOptions = RenderOptions(),
    now: datetime | None = None,
) -> str:
    """Plain text dashboard for the CLI."""
    if snapshot.phase == Phase.LOADING:
        return LOADING_MESSAGE
    w = snapshot.weather
    if w is None:
        return NO_DATA_MESSAGE

    weekday, date = today_header(_now(opts, now))
    lines = [
        f"{weekday}  {date}",
        f"{w.city_name} - {w.country}",
        f"{format_temperature(w.temperature, opts.units)}  {w.description}",
        "",
    ]
    for entry in snapshot.forecast:
        lines.append(
            f"  {weekday_name(entry.timestamp, opts.tz):<10} "
            f"{format_temperature(entry.temperature, opts.units):>6}  "
            f"{entry.description}"
        )
    lines += [
        "",
        f"UV Index: {UNAVAILABLE}",
        f"Humidity: {w.humidity}%",
        f"Wind: {format_wind(w.wind_speed, opts.units)}",
        f"Population: {UNAVAILABLE}",
    ]
    return "\n".join(lines)


# ── JSON ────────────────────────────────────────────────────────


def snapshot_to_dict(
    snapshot: DashboardSnapshot, opts: RenderOptions = RenderOptions()
) -> dict:
    """JSON-ready view of a snapshot for the dashboard API."""
    data: dict = {
        "city": snapshot.city,
        "phase": str(snapshot.phase),
        "generation": snapshot.generation,
        "weather": None,
        "forecast": [],
        "error": snapshot.error,
    }
    w = snapshot.weather
    if snapshot.phase == Phase.LOADING or w is None:
        return data

    data["weather"] = {
        "city_name": w.city_name,
        "country": w.country,
        "temperature": w.temperature,
        "temperature_display": format_temperature(w.temperature, opts.units),
        "humidity": w.humidity,
        "wind_speed": w.wind_speed,
        "wind_display": format_wind(w.wind_speed, opts.units),
        "description": w.description,
        "icon_url": icon_url(w.icon, opts.icon_url_template),
        "uv_index": None,
        "population": None,
    }
    data["forecast"] = [_forecast_dict(e, opts) for e in snapshot.forecast]
    return data


def _forecast_dict(entry: ForecastEntry, opts: RenderOptions) -> dict:
    return {
        "timestamp": entry.timestamp,
        "weekday": weekday_name(entry.timestamp, opts.tz),
        "temperature": entry.temperature,
        "temperature_display": format_temperature(entry.temperature, opts.units),
        "description": entry.description,
        "icon_url": icon_url(entry.icon, opts.icon_url_template),
    }


# ── HTML ────────────────────────────────────────────────────────

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Weather - {title}</title>
<style>
body {{ font-family: Arial, sans-serif; background: #1d2b3a; color: white;
       display: flex; flex-direction: column; align-items: center; }}
.search {{ margin: 20px 0; display: flex; }}
.search input {{ padding: 10px; font-size: 16px; width: 300px; }}
.search button {{ padding: 10px 20px; font-size: 16px; background: #007bff;
                 color: white; border: none; cursor: pointer; }}
.box {{ background: rgba(0, 0, 0, 0.7); border-radius: 12px; padding: 15px; }}
.weather {{ display: flex; gap: 20px; width: 800px; max-width: 90%; }}
.forecast {{ display: flex; flex-wrap: wrap; gap: 10px; }}
.card {{ flex: 1; text-align: center; }}
.card img {{ width: 50px; }}
.temp {{ font-weight: bold; color: #007bff; }}
</style>
</head>
<body>
<form class="search" action="/search" method="get">
<input type="text" name="city" placeholder="Search for a city">
<button type="submit">Search</button>
</form>
{body}
</body>
</html>
"""


def render_html(
    snapshot: DashboardSnapshot,
    opts: RenderOptions = RenderOptions(),
    now: datetime | None = None,
) -> str:
    """Full dashboard page, search form included."""
    return _PAGE.format(
        title=escape(snapshot.city), body=_html_body(snapshot, opts, now)
    )


def _html_body(
    snapshot: DashboardSnapshot, opts: RenderOptions, now: datetime | None
) -> str:
    if snapshot.phase == Phase.LOADING:
        return f"<p>{LOADING_MESSAGE}</p>"
    w = snapshot.weather
    if w is None:
        return f"<p>{NO_DATA_MESSAGE}</p>"

    weekday, date = today_header(_now(opts, now))
    cards = "\n".join(_html_card(e, opts) for e in snapshot.forecast)
    return (
        '<div class="weather">\n'
        '<div class="box">\n'
        f"<h1>{weekday}</h1>\n"
        f"<h3>{date}</h3>\n"
        f"<h2>{escape(w.city_name)} - {escape(w.country)}</h2>\n"
        f"<h1>{format_temperature(w.temperature, opts.units)}</h1>\n"
        f"<p>{escape(w.description)}</p>\n"
        "</div>\n"
        "<div>\n"
        f'<div class="box forecast">\n{cards}\n</div>\n'
        '<div class="box">\n'
        f"<p>UV Index: {UNAVAILABLE}</p>\n"
        f"<p>Humidity: {w.humidity}%</p>\n"
        f"<p>Wind: {format_wind(w.wind_speed, opts.units)}</p>\n"
        f"<p>Population: {UNAVAILABLE}</p>\n"
        "</div>\n"
        "</div>\n"
        "</div>"
    )


def _html_card(entry: ForecastEntry, opts: RenderOptions) -> str:
    src = escape(icon_url(entry.icon, opts.icon_url_template), quote=True)
    return (
        f'<div class="card" data-dt="{entry.timestamp}">'
        f"<p><b>{weekday_name(entry.timestamp, opts.tz)}</b></p>"
        f'<img src="{src}" alt="Weather Icon">'
        f'<p class="temp">{format_temperature(entry.temperature, opts.units)}</p>'
        f"<p>{escape(entry.description)}</p>"
        "</div>"
    )


def options_from_config(config: DashboardConfig) -> RenderOptions:
    return RenderOptions(
        units=config.api.units,
        icon_url_template=config.api.icon_url_template,
        tz=config.display.tzinfo(),
    )
