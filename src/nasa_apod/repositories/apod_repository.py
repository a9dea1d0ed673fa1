"""HTTP access to the APOD endpoint."""

from typing import Any

import httpx

from nasa_apod.config import get_settings
from nasa_apod.repositories.http_json import get_json


class ApodRepository:
    """Thin client for ``GET /planetary/apod``.

    Example:
        ```python
        repo = ApodRepository.create()
        payload = repo.get("2017-05-11")  # raw JSON body
        payload = repo.get(None)          # today's picture
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the APOD repository.

        Args:
            api_key: NASA API key. Defaults to settings.
            endpoint: APOD endpoint URL. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
            client: Preconfigured HTTP client, mostly for tests.
        """
        settings = get_settings()
        self._api_key = api_key or settings.nasa_api_key
        self._endpoint = endpoint or settings.apod_endpoint
        self._timeout = timeout or settings.request_timeout
        self._client = client

    @classmethod
    def create(cls, api_key: str | None = None) -> "ApodRepository":
        """Factory method to create an ApodRepository from settings."""
        return cls(api_key=api_key)

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def get(self, apod_date: str | None) -> Any:
        """Fetch the raw APOD body.

        Args:
            apod_date: ``YYYY-MM-DD`` to request, None to let the API default to today

        Returns:
            The decoded JSON body
        """
        params = {"api_key": self._api_key}
        if apod_date is not None:
            params["date"] = apod_date
        return get_json(self.client, self._endpoint, params)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None
