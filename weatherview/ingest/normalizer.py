"""Reduce the 3-hourly forecast feed to one entry per calendar weekday."""

from collections.abc import Iterable
from datetime import datetime, tzinfo

from weatherview.models.weather import ForecastEntry

MAX_FORECAST_DAYS = 7


def entry_weekday(entry: ForecastEntry, tz: tzinfo | None = None) -> int:
    """Weekday (Mon=0) of an entry's timestamp; local time when tz is None."""
    return datetime.fromtimestamp(entry.timestamp, tz).weekday()


def normalize_forecast(
    entries: Iterable[ForecastEntry],
    limit: int = MAX_FORECAST_DAYS,
    tz: tzinfo | None = None,
) -> list[ForecastEntry]:
    """Keep the first entry seen for each weekday, in input order, up to limit.

    Weekdays are keyed, not dates: a second Monday a week later is dropped.
    """
    seen: set[int] = set()
    kept: list[ForecastEntry] = []
    for entry in entries:
        if len(kept) >= limit:
            break
        day = entry_weekday(entry, tz)
        if day in seen:
            continue
        seen.add(day)
        kept.append(entry)
    return kept
