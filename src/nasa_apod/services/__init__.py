"""Service layer for business logic.

This layer contains the core logic: the APOD fetcher with its today cache,
the random sampler, the bounded retry policy and the update loop.
Services depend on protocols and repositories, never on HTTP handlers.

Architecture:
    Handler / CLI -> Service -> Repository
    (HTTP, argv)  -> (Business) -> (NASA API)

Usage:
    ```python
    from nasa_apod.services import ApodService, RandomSampler

    apod = ApodService.create()
    sampler = RandomSampler(apod)
    image = sampler.sample()
    ```
"""

from .apod_service import ApodService
from .neo_service import NeoService
from .random_cache import RandomApodCache
from .random_sampler import RandomSampler
from .retry import attempt
from .today_cache import TodayCache
from .update_loop import LoopStats, TickResult, UpdateLoop

__all__ = [
    "ApodService",
    "LoopStats",
    "NeoService",
    "RandomApodCache",
    "RandomSampler",
    "TickResult",
    "TodayCache",
    "UpdateLoop",
    "attempt",
]
