"""Today cache entry domain entity."""

from dataclasses import dataclass

from .image import Image


@dataclass(frozen=True)
class CacheEntry:
    """The cache's current knowledge of today's picture.

    Entries are never mutated; the cache swaps in a new one on every update.

    Attributes:
        cached_date: Date string the entry belongs to (``YYYY-MM-DD``)
        cached_image: The picture for that date, None while the cache is cold
    """

    cached_date: str = ""
    cached_image: Image | None = None

    def __post_init__(self) -> None:
        if self.cached_image is not None and self.cached_image.date != self.cached_date:
            raise ValueError(
                f"cached_date {self.cached_date!r} does not match image date "
                f"{self.cached_image.date!r}"
            )

    @classmethod
    def for_image(cls, image: Image) -> "CacheEntry":
        """Create an entry keyed by the image's own date."""
        return cls(cached_date=image.date, cached_image=image)

    def is_fresh(self, today: str) -> bool:
        """Check if the entry holds a picture for the given date string."""
        return self.cached_image is not None and self.cached_date == today
