"""Handler layer for HTTP endpoints.

Handlers depend on services, never directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (NASA API)
"""

from .apod_handler import ApodHandler

__all__ = [
    "ApodHandler",
]
