"""HTTP access to the NeoWs feed endpoint."""

from typing import Any

import httpx

from nasa_apod.config import get_settings
from nasa_apod.repositories.http_json import get_json


class NeoRepository:
    """Thin client for ``GET /neo/rest/v1/feed``."""

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.nasa_api_key
        self._endpoint = endpoint or settings.neo_endpoint
        self._timeout = timeout or settings.request_timeout
        self._client = client

    @classmethod
    def create(cls, api_key: str | None = None) -> "NeoRepository":
        """Factory method to create a NeoRepository from settings."""
        return cls(api_key=api_key)

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def get_feed(self, start_date: str, end_date: str) -> Any:
        """Fetch the raw feed body for an inclusive ``YYYY-MM-DD`` window."""
        params = {
            "api_key": self._api_key,
            "start_date": start_date,
            "end_date": end_date,
        }
        return get_json(self.client, self._endpoint, params)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None
