"""Shared fixtures: stub NASA upstream, controllable clock, fresh settings."""

from datetime import datetime

import httpx
import pytest

from nasa_apod.config import get_settings
from nasa_apod.repositories import ApodRepository, NeoRepository
from nasa_apod.services import ApodService, TodayCache

APOD_ENDPOINT = "https://api.test/planetary/apod"
NEO_ENDPOINT = "https://api.test/neo/rest/v1/feed"


class FakeClock:
    """Callable clock whose time can be moved by tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class StubUpstream:
    """httpx MockTransport handler replaying APOD style replies.

    When ``payload`` is None the reply echoes the requested date (or the
    clock's today) with valid urls. Every request is recorded.
    """

    def __init__(self, clock: FakeClock, payload=None, status_code: int = 200) -> None:
        self.clock = clock
        self.payload = payload
        self.status_code = status_code
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None

    @property
    def calls(self) -> int:
        return len(self.requests)

    def params(self, index: int = -1) -> dict[str, str]:
        return dict(self.requests[index].url.params)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        payload = self.payload
        if payload is None:
            apod_date = request.url.params.get("date") or self.clock().date().isoformat()
            payload = {
                "date": apod_date,
                "title": f"Picture of {apod_date}",
                "url": f"https://apod.test/{apod_date}.jpg",
                "hdurl": f"https://apod.test/{apod_date}-hd.jpg",
                "explanation": "Stars.",
            }
        if isinstance(payload, (bytes, str)):
            return httpx.Response(self.status_code, content=payload)
        return httpx.Response(self.status_code, json=payload)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings and the demo key."""
    for name in ("NASA_API_KEY", "NASAKEY", "WALLPAPER_CMD", "WALLPAPER_CMD_DEFAULT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2017, 5, 20, 12, 0, 0))


@pytest.fixture
def upstream(clock) -> StubUpstream:
    return StubUpstream(clock)


@pytest.fixture
def apod_repository(upstream) -> ApodRepository:
    client = httpx.Client(transport=httpx.MockTransport(upstream))
    return ApodRepository(api_key="TEST_KEY", endpoint=APOD_ENDPOINT, client=client)


@pytest.fixture
def apod_service(apod_repository, clock) -> ApodService:
    return ApodService(repository=apod_repository, cache=TodayCache(), clock=clock)


@pytest.fixture
def neo_repository_factory():
    def factory(handler) -> NeoRepository:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return NeoRepository(api_key="TEST_KEY", endpoint=NEO_ENDPOINT, client=client)

    return factory
