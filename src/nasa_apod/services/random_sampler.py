"""Random sampling of past pictures of the day."""

import logging
import random
from collections.abc import Callable
from datetime import datetime, timedelta

from nasa_apod.entities import Image
from nasa_apod.protocols import ImageFetcher

logger = logging.getLogger(__name__)

# Any day in the last two years
WINDOW_DAYS = 2 * 365

# Seeded once per process from the OS entropy source (time based as a fallback)
_process_rng = random.Random()


class RandomSampler:
    """Picks a random date in the last two years and fetches its picture.

    No caching is done here: every call may hit the network.
    """

    def __init__(
        self,
        fetcher: ImageFetcher,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
        window_days: int = WINDOW_DAYS,
    ) -> None:
        if window_days < 1:
            raise ValueError("window_days must be at least 1")
        self._fetcher = fetcher
        self._rng = rng or _process_rng
        self._clock = clock
        self._window_days = window_days

    def pick_offset(self) -> int:
        """Number of days to go back, uniform in ``[0, window_days)``."""
        return self._rng.randrange(self._window_days)

    def sample(self) -> Image:
        """Fetch the picture of a random past day.

        Raises:
            NetworkError, ParseError, UpstreamInvalidError: From the fetcher
        """
        offset = self.pick_offset()
        when = self._clock() - timedelta(days=offset)
        logger.debug("Sampling APOD %d days back (%s)", offset, when.date().isoformat())
        return self._fetcher.fetch(when)
