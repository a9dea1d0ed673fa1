"""NASA APOD - Astronomy Picture of the Day and Near Earth Object client.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (ImageFetcher, ImageSink, WallpaperSetter)
    - repositories: HTTP access to the NASA open APIs
    - services: Fetcher with today's cache, random sampler, retry, update loop
    - sinks: Wallpaper writer and platform setters
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from datetime import date

    from nasa_apod.services import ApodService

    apod = ApodService.create()
    print(apod.today())
    print(apod.fetch(date(2017, 5, 11)))
    ```

For the HTTP app:
    ```python
    from nasa_apod.api.app import app
    ```
"""

__version__ = "0.1.0"

from nasa_apod.config import Settings, get_settings  # noqa: E402
from nasa_apod.entities import CacheEntry, Image, NeoFeed  # noqa: E402
from nasa_apod.errors import (  # noqa: E402
    ConfigInvalidError,
    NasaError,
    NetworkError,
    ParseError,
    SinkFailureError,
    UpstreamInvalidError,
)
from nasa_apod.services import ApodService, NeoService, RandomSampler, TodayCache, UpdateLoop  # noqa: E402

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Entities
    "CacheEntry",
    "Image",
    "NeoFeed",
    # Services
    "ApodService",
    "NeoService",
    "RandomSampler",
    "TodayCache",
    "UpdateLoop",
    # Errors
    "ConfigInvalidError",
    "NasaError",
    "NetworkError",
    "ParseError",
    "SinkFailureError",
    "UpstreamInvalidError",
]
