from datetime import date
from typing import Annotated

from fastapi import Depends, FastAPI, Query, Request
from starlette.responses import Response

from nasa_apod import __version__
from nasa_apod.api.dependencies import HandlerDep, make_lifespan
from nasa_apod.config import get_settings
from nasa_apod.dto import DisplayOptions, HealthCheckResponse, ImageResponse, NeoFeedResponse
from nasa_apod.handlers import ApodHandler


def display_options(
    sd: str | None = Query(None, description="Any value shows the standard definition image"),
    auto: str | None = Query(None, description="Any value reloads the page periodically"),
    interval: str | None = Query(None, description="Reload interval in seconds"),
) -> DisplayOptions:
    """Build page display options from the query string."""
    return DisplayOptions.from_query(sd=sd, auto=auto, interval=interval)


OptionsDep = Annotated[DisplayOptions, Depends(display_options)]


def create_app(handler: ApodHandler | None = None) -> FastAPI:
    """Create the web application.

    Args:
        handler: Prebuilt handler; the default wiring from settings is used if None.
    """
    app = FastAPI(
        title="NASA APOD",
        description="NASA Astronomy Picture of the Day viewer and API",
        version=__version__,
        lifespan=make_lifespan(handler),
    )

    @app.get("/", include_in_schema=False)
    def index(request: Request, handler: HandlerDep, options: OptionsDep) -> Response:
        """Today's picture of the day."""
        return handler.index(request, options)

    @app.get("/random-apod/", include_in_schema=False)
    def random_apod(request: Request, handler: HandlerDep, options: OptionsDep) -> Response:
        """A random picture from the last two years."""
        return handler.random_apod(request, options)

    @app.get("/apod/{apod_date}", include_in_schema=False)
    def apod_on_date(
        request: Request,
        apod_date: date,
        handler: HandlerDep,
        options: OptionsDep,
    ) -> Response:
        """The picture published on a given date."""
        return handler.apod_on_date(request, apod_date, options)

    @app.get("/api/apod", response_model=ImageResponse)
    def api_apod(
        handler: HandlerDep,
        apod_date: date | None = Query(None, alias="date", description="YYYY-MM-DD"),
    ) -> ImageResponse:
        """Picture of the day as JSON, today's when no date is given."""
        return handler.api_apod(apod_date)

    @app.get("/api/neo", response_model=NeoFeedResponse)
    def api_neo(
        handler: HandlerDep,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> NeoFeedResponse:
        """Near Earth Objects by closest approach date."""
        return handler.api_neo(start_date, end_date)

    @app.get("/health", response_model=HealthCheckResponse)
    def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return handler.health()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "nasa_apod.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
    )
