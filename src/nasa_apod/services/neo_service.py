"""Near Earth Object feed service."""

from collections.abc import Callable
from datetime import date, datetime, timedelta

from nasa_apod.entities import NeoFeed
from nasa_apod.repositories import NeoRepository

# The feed endpoint rejects windows longer than a week
MAX_WINDOW_DAYS = 7


class NeoService:
    """Lists asteroids by closest approach date.

    Example:
        ```python
        feed = NeoService.create().feed(date(2015, 9, 7), date(2015, 9, 8))
        print(feed.element_count)
        ```
    """

    def __init__(
        self,
        repository: NeoRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    @classmethod
    def create(cls, repository: NeoRepository | None = None) -> "NeoService":
        """Factory method to create a NeoService with defaults from settings."""
        return cls(repository=repository or NeoRepository.create())

    def feed(self, start: date | None = None, end: date | None = None) -> NeoFeed:
        """Fetch the feed for ``[start, end]``.

        ``start`` defaults to today and ``end`` to ``start``.

        Raises:
            ValueError: If the window is reversed or longer than a week
            NetworkError, ParseError, UpstreamInvalidError: From the API call
        """
        start = start or self._clock().date()
        end = end or start
        if end < start:
            raise ValueError(f"end date {end} is before start date {start}")
        if end - start > timedelta(days=MAX_WINDOW_DAYS):
            raise ValueError(f"NEO feed window is limited to {MAX_WINDOW_DAYS} days")

        start_date, end_date = start.isoformat(), end.isoformat()
        payload = self._repository.get_feed(start_date, end_date)
        return NeoFeed.from_payload(payload, start=start_date, end=end_date)
