"""Image sink protocol.

A sink consumes images produced by the update loop. Implementations
include the wallpaper writer and the random page cache.
"""

from typing import Protocol, runtime_checkable

from nasa_apod.entities import Image


@runtime_checkable
class ImageSink(Protocol):
    """Protocol for consumers of successfully fetched images."""

    def consume(self, image: Image) -> None:
        """Hand a fetched image to the sink.

        Raises:
            SinkFailureError: If the image could not be persisted or applied
        """
        ...

    def close(self) -> None:
        """Release scratch resources. Must be safe to call more than once."""
        ...
