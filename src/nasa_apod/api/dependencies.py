"""Dependency injection configuration for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services built once and stored in app.state during lifespan
    - Dependency functions retrieve them from request.app.state
    - Tests pass a prebuilt handler to skip the default wiring
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from nasa_apod.config import get_settings
from nasa_apod.handlers import ApodHandler
from nasa_apod.repositories import ApodRepository, NeoRepository
from nasa_apod.services import (
    ApodService,
    NeoService,
    RandomApodCache,
    RandomSampler,
    TodayCache,
)

logger = logging.getLogger(__name__)


def build_handler() -> ApodHandler:
    """Wire repositories, services and the handler from settings."""
    settings = get_settings()
    apod_service = ApodService.create(repository=ApodRepository.create(), cache=TodayCache())
    sampler = RandomSampler(apod_service)
    random_cache = RandomApodCache(sampler.sample, refresh_seconds=settings.random_refresh_seconds)
    return ApodHandler(
        apod_service=apod_service,
        neo_service=NeoService.create(NeoRepository.create()),
        random_cache=random_cache,
    )


def get_handler(request: Request) -> ApodHandler:
    """Dependency injection for ApodHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "apod_handler", None)
    if handler is None:
        raise RuntimeError("ApodHandler not initialized. Check lifespan setup.")
    return handler


def make_lifespan(handler: ApodHandler | None = None):
    """Build the lifespan context manager, optionally around a prebuilt handler."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        app.state.apod_handler = handler or build_handler()
        if settings.uses_demo_key:
            logger.warning("Using the rate limited DEMO_KEY, set NASA_API_KEY for your own key")
        logger.info("APOD web server ready")

        yield

        del app.state.apod_handler
        logger.info("APOD web server shut down")

    return lifespan


# Type alias for cleaner dependency injection
HandlerDep = Annotated[ApodHandler, Depends(get_handler)]
