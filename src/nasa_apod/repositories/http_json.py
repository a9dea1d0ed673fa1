"""Shared JSON GET helper for the NASA repositories."""

import logging
from typing import Any

import httpx

from nasa_apod.errors import NetworkError, ParseError, UpstreamInvalidError

logger = logging.getLogger(__name__)


def get_json(client: httpx.Client, url: str, params: dict[str, str]) -> Any:
    """GET ``url`` and decode the JSON body.

    Raises:
        NetworkError: On timeouts and transport failures
        UpstreamInvalidError: On non-2xx replies
        ParseError: If the body is not JSON
    """
    try:
        response = client.get(url, params=params)
    except httpx.TimeoutException as e:
        raise NetworkError(f"NASA API timed out: {e}") from e
    except httpx.HTTPError as e:
        raise NetworkError(f"unable to connect to NASA API, {e}") from e

    if response.is_error:
        logger.debug("NASA API replied %s: %s", response.status_code, response.text[:200])
        raise UpstreamInvalidError(
            f"NASA API replied {response.status_code} {response.reason_phrase}, "
            "may be down temporarily"
        )

    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"NASA API returned a malformed body: {e}") from e
