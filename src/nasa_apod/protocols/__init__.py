"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the NASA fetcher for a stub in tests
- Feeding the update loop any sink (wallpaper, in-memory page cache)
- Choosing a wallpaper setter per platform at startup

Usage:
    ```python
    from nasa_apod.protocols import ImageFetcher, ImageSink

    fetcher: ImageFetcher = ApodService(...)
    sink: ImageSink = WallpaperSink(...)
    ```
"""

from .image_fetcher import ImageFetcher
from .image_sink import ImageSink
from .wallpaper_setter import WallpaperSetter

__all__ = [
    "ImageFetcher",
    "ImageSink",
    "WallpaperSetter",
]
