"""Rate limited cache of a randomly sampled picture, backing the random page."""

import logging
import threading
import time
from collections.abc import Callable

from nasa_apod.entities import Image
from nasa_apod.errors import NasaError

logger = logging.getLogger(__name__)


class RandomApodCache:
    """Keeps the last random picture and refreshes it at most once per period.

    A failed refresh keeps the previous picture. The cache also satisfies
    the ImageSink protocol, so an UpdateLoop can feed it in the background.
    """

    def __init__(
        self,
        sample: Callable[[], Image],
        refresh_seconds: float = 1.0,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the random cache.

        Args:
            sample: Produces a random image, usually ``RandomSampler.sample``.
            refresh_seconds: Minimum age before a request triggers a new sample.
            monotonic: Clock used to age the cached picture.
        """
        self._sample = sample
        self._refresh_seconds = refresh_seconds
        self._monotonic = monotonic
        self._lock = threading.Lock()
        self._image: Image | None = None
        self._updated_at: float | None = None

    @property
    def image(self) -> Image | None:
        """The cached picture, None until a sample succeeded."""
        return self._image

    def is_stale(self) -> bool:
        updated_at = self._updated_at
        if updated_at is None:
            return True
        return self._monotonic() - updated_at > self._refresh_seconds

    def current(self) -> Image | None:
        """Return the cached picture, sampling a new one when it is stale.

        Concurrent callers on a stale picture wait for a single refresh.
        """
        if not self.is_stale():
            return self._image

        with self._lock:
            if not self.is_stale():
                return self._image
            try:
                image = self._sample()
            except NasaError as e:
                logger.warning("Unable to refresh random APOD, keeping previous one: %s", e)
                image = None
            if image is not None and image.is_valid:
                self._image = image
            self._updated_at = self._monotonic()
            return self._image

    def consume(self, image: Image) -> None:
        """Store a picture produced elsewhere."""
        with self._lock:
            self._image = image
            self._updated_at = self._monotonic()

    def close(self) -> None:
        """Nothing to release; present for the ImageSink protocol."""
