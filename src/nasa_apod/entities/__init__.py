"""Domain entities for internal representation.

These are pure frozen dataclasses used by services, repositories and sinks.
They are NOT used for API contracts - use DTOs from the dto package for that.

Each entity knows how to build itself from the upstream JSON payload and
raises ``ParseError`` when that payload is malformed.
"""

from .cache_entry import CacheEntry
from .image import Image
from .neo_feed import Asteroid, CloseApproach, NeoFeed

__all__ = ["Asteroid", "CacheEntry", "CloseApproach", "Image", "NeoFeed"]
