"""Search box: turns submitted text into city changes."""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

CityListener = Callable[[str], object]


class SearchBox:
    """Publishes a city when the submitted text names a new one.

    ``needs_refetch`` lets the owner force a republish of the current city,
    e.g. after its last fetch failed.
    """

    def __init__(self, city: str, needs_refetch: Callable[[], bool] | None = None):
        self.city = city
        self._needs_refetch = needs_refetch
        self._listeners: list[CityListener] = []

    def subscribe(self, listener: CityListener) -> None:
        self._listeners.append(listener)

    def submit(self, text: str) -> str | None:
        """Publish the trimmed text as the new city.

        Blank text is ignored. The current city is ignored unless
        needs_refetch says otherwise. Returns the published city, or None
        when nothing was published.
        """
        city = text.strip()
        if not city:
            return None
        if city == self.city and not (self._needs_refetch and self._needs_refetch()):
            logger.debug("City unchanged (%s), not refetching", city)
            return None
        self.city = city
        for listener in self._listeners:
            listener(city)
        return city
