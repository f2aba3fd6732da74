"""Builders for forecast entries at known weekdays."""

from weatherview.models.weather import ForecastEntry

# Monday 2026-02-09 00:00:00 UTC
MONDAY_UTC = 1770595200
HOUR = 3600
DAY = 24 * HOUR


def entry_at(timestamp: int, temp: float = 20.0, icon: str = "01d") -> ForecastEntry:
    return ForecastEntry(
        timestamp=timestamp, temperature=temp, description="clear sky", icon=icon
    )


def entries_on_days(day_offsets: list[int], hour: int = 12) -> list[ForecastEntry]:
    """One entry per offset (in days from MONDAY_UTC), at the given UTC hour."""
    return [
        entry_at(MONDAY_UTC + offset * DAY + hour * HOUR, temp=float(i))
        for i, offset in enumerate(day_offsets)
    ]
