"""Repository layer for data access.

This layer wraps the NASA open APIs behind small classes that only know
about HTTP: building the query, enforcing the timeout and decoding JSON.
Validation of the decoded bodies lives in the entities and services.
"""

from .apod_repository import ApodRepository
from .neo_repository import NeoRepository

__all__ = [
    "ApodRepository",
    "NeoRepository",
]
