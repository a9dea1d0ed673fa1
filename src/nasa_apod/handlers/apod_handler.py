"""HTTP handlers for the APOD pages and the JSON API.

Handlers convert between services and HTTP: rendering pages, building DTOs
and turning NASA errors into status codes.
"""

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from nasa_apod.config import get_settings
from nasa_apod.dto import DisplayOptions, HealthCheckResponse, ImageResponse, NeoFeedResponse
from nasa_apod.entities import Image
from nasa_apod.errors import NasaError
from nasa_apod.services import ApodService, NeoService, RandomApodCache

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

UNAVAILABLE_MESSAGE = "NASA API currently unavailable, it's experiencing downtime :("


class ApodHandler:
    """HTTP handlers for picture pages.

    Example:
        ```python
        handler = ApodHandler(apod_service, neo_service, random_cache)

        @app.get("/")
        def index(request: Request):
            return handler.index(request, DisplayOptions())
        ```
    """

    def __init__(
        self,
        apod_service: ApodService,
        neo_service: NeoService,
        random_cache: RandomApodCache,
        templates: Jinja2Templates | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            apod_service: Fetcher with today's cache (required).
            neo_service: NEO feed access (required).
            random_cache: Rate limited random picture cache (required).
            templates: Template loader, the bundled templates if None.
        """
        self._apod = apod_service
        self._neo = neo_service
        self._random = random_cache
        self._templates = templates or Jinja2Templates(directory=str(TEMPLATES_DIR))

    def _render(
        self,
        request: Request,
        image: Image | None,
        options: DisplayOptions,
        title: str | None = None,
    ) -> Response:
        if image is None or not image.is_valid:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=UNAVAILABLE_MESSAGE,
            )
        return self._templates.TemplateResponse(
            request,
            "apod.html",
            {"image": image, "options": options, "title": title},
        )

    def _fetch_or_503(self, fetch: Callable[..., Image], *args: Any) -> Image:
        try:
            return fetch(*args)
        except NasaError as e:
            logger.warning("APOD unavailable: %s", e)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"{UNAVAILABLE_MESSAGE} ({e})",
            ) from e

    def index(self, request: Request, options: DisplayOptions) -> Response:
        """Handle GET / with today's cached picture."""
        return self._render(request, self._fetch_or_503(self._apod.today), options)

    def random_apod(self, request: Request, options: DisplayOptions) -> Response:
        """Handle GET /random-apod/ with a rate limited random picture."""
        return self._render(
            request,
            self._random.current(),
            options,
            title="Random NASA Astronomy Picture of the Day",
        )

    def apod_on_date(self, request: Request, apod_date: date, options: DisplayOptions) -> Response:
        """Handle GET /apod/{date}."""
        return self._render(request, self._fetch_or_503(self._apod.fetch, apod_date), options)

    def api_apod(self, apod_date: date | None = None) -> ImageResponse:
        """Handle GET /api/apod, today's picture when no date is given."""
        if apod_date is None:
            image = self._fetch_or_503(self._apod.today)
        else:
            image = self._fetch_or_503(self._apod.fetch, apod_date)
        return ImageResponse.from_entity(image)

    def api_neo(self, start_date: date | None, end_date: date | None) -> NeoFeedResponse:
        """Handle GET /api/neo."""
        try:
            feed = self._neo.feed(start_date, end_date)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        except NasaError as e:
            logger.warning("NEO feed unavailable: %s", e)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"NEO feed unavailable: {e}",
            ) from e
        return NeoFeedResponse.from_entity(feed)

    def health(self) -> HealthCheckResponse:
        """Handle GET /health."""
        entry = self._apod.cache.read_today()
        return HealthCheckResponse(
            status="ok",
            cached_date=entry.cached_date or None,
            cache_fresh=entry.is_fresh(self._apod.today_string()),
            demo_key=get_settings().uses_demo_key,
        )
