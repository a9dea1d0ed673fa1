"""Single-slot freshness cache for today's APOD."""

import threading

from nasa_apod.entities import CacheEntry, Image


class TodayCache:
    """Holds the most recently fetched picture of the day.

    The whole ``CacheEntry`` is swapped in one reference assignment under a
    writer lock, so readers take a snapshot without locking and can never see
    a date from one update paired with the image of another. Replaces are
    mutually exclusive with each other.

    Example:
        ```python
        cache = TodayCache()
        cache.update(image)
        entry = cache.read_today()
        if entry.is_fresh("2017-05-11"):
            ...
        ```
    """

    def __init__(self) -> None:
        self._write_lock = threading.Lock()
        self._entry = CacheEntry()
        self._updates = 0

    def read_today(self) -> CacheEntry:
        """Return a consistent snapshot of the cached entry."""
        return self._entry

    def update(self, image: Image) -> None:
        """Replace the cached entry with ``image``.

        Raises:
            ValueError: If the image links to no picture
        """
        if not image.is_valid:
            raise ValueError("refusing to cache an image without url or hd_url")
        entry = CacheEntry.for_image(image)
        with self._write_lock:
            self._entry = entry
            self._updates += 1

    def clear(self) -> None:
        """Drop the cached entry."""
        with self._write_lock:
            self._entry = CacheEntry()

    @property
    def updates(self) -> int:
        """Number of successful replaces since creation."""
        return self._updates
