"""APOD service: the image fetcher and the cached "today" lookup.

This service coordinates the APOD repository (HTTP) and the today cache.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime

from nasa_apod.entities import Image
from nasa_apod.errors import UpstreamInvalidError
from nasa_apod.repositories import ApodRepository
from nasa_apod.services.today_cache import TodayCache

logger = logging.getLogger(__name__)


class ApodService:
    """Fetches pictures of the day and keeps today's one cached.

    Satisfies the ImageFetcher protocol.

    Example:
        ```python
        service = ApodService.create()

        image = service.today()                   # cached after the first call
        image = service.fetch(date(2017, 5, 11))  # always hits the API
        ```
    """

    def __init__(
        self,
        repository: ApodRepository,
        cache: TodayCache | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the APOD service.

        Args:
            repository: HTTP access to the APOD endpoint (required).
            cache: Today cache to populate. A private one is created if None.
            clock: Source of the current time, injectable for tests.
        """
        self._repository = repository
        self._cache = cache if cache is not None else TodayCache()
        self._clock = clock

    @classmethod
    def create(
        cls,
        repository: ApodRepository | None = None,
        cache: TodayCache | None = None,
    ) -> "ApodService":
        """Factory method to create an ApodService with defaults from settings."""
        return cls(repository=repository or ApodRepository.create(), cache=cache)

    def today_string(self) -> str:
        """Today's date as ``YYYY-MM-DD`` according to the service clock."""
        return self._clock().date().isoformat()

    def fetch(self, when: date | None = None) -> Image:
        """Fetch the picture for a date.

        Business logic:
        1. Clamp future dates to today (the API has no future data)
        2. Omit the date parameter when asking for today
        3. Reject replies without any image url
        4. Store today's picture in the cache

        Args:
            when: Date or datetime to fetch, None for today

        Returns:
            A valid Image

        Raises:
            NetworkError: If the API cannot be reached
            ParseError: If the reply is malformed
            UpstreamInvalidError: If the reply holds no usable image
        """
        now = self._clock().date()
        requested = now if when is None else _as_date(when)
        if requested > now:
            requested = now
        is_today = requested == now

        payload = self._repository.get(None if is_today else requested.isoformat())
        image = Image.from_payload(payload)
        if not image.is_valid:
            raise UpstreamInvalidError(
                "NASA APOD API returned an invalid response, may be down temporarily"
            )

        if is_today:
            self._cache.update(image)
            logger.debug("Cached today's APOD %s (%s)", image.date, image.title)
        return image

    def today(self) -> Image:
        """Return today's picture, from the cache when it is still fresh.

        Two concurrent calls on a cold cache may both fetch; the cache simply
        keeps the last successful reply.
        """
        entry = self._cache.read_today()
        if entry.is_fresh(self.today_string()) and entry.cached_image is not None:
            return entry.cached_image
        return self.fetch(None)

    @property
    def cache(self) -> TodayCache:
        """Get the underlying today cache."""
        return self._cache

    @property
    def repository(self) -> ApodRepository:
        """Get the underlying repository (for testing)."""
        return self._repository


def _as_date(when: date) -> date:
    if isinstance(when, datetime):
        return when.date()
    return when
