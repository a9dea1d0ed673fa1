"""Data Transfer Objects for API contracts.

These Pydantic models define the external HTTP contract.
Internal logic uses entities from the entities package.
"""

from .requests import DisplayOptions
from .responses import (
    AsteroidItem,
    HealthCheckResponse,
    ImageResponse,
    NeoFeedResponse,
)

__all__ = [
    "AsteroidItem",
    "DisplayOptions",
    "HealthCheckResponse",
    "ImageResponse",
    "NeoFeedResponse",
]
