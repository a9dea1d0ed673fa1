"""Image fetcher protocol.

Defines the interface for anything that can return the APOD for a date.
The random sampler depends on this protocol only, so tests can count
calls without touching the network.
"""

from datetime import date
from typing import Protocol, runtime_checkable

from nasa_apod.entities import Image


@runtime_checkable
class ImageFetcher(Protocol):
    """Protocol for APOD fetchers."""

    def fetch(self, when: date | None = None) -> Image:
        """Fetch the picture published on a date.

        Args:
            when: Date (or datetime) to fetch, None for today.
                  Future dates are clamped to today.

        Returns:
            A valid Image

        Raises:
            NetworkError: If the upstream API cannot be reached
            ParseError: If the reply body is malformed
            UpstreamInvalidError: If the reply holds no usable image
        """
        ...
