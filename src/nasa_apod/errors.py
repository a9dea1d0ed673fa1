"""Error kinds raised by the NASA client, cache and wallpaper loop.

Fetch errors (``NetworkError``, ``ParseError``, ``UpstreamInvalidError``)
propagate to the immediate caller. The update loop retries them, together
with ``SinkFailureError``, and only reports once its attempts are exhausted.
``ConfigInvalidError`` is fatal at startup.
"""


class NasaError(Exception):
    """Base class for every error raised by this package."""


class NetworkError(NasaError):
    """The upstream API could not be reached or timed out."""


class ParseError(NasaError):
    """The upstream API replied with a malformed body."""


class UpstreamInvalidError(NasaError):
    """The upstream API replied, but the content is unusable."""


class ConfigInvalidError(NasaError):
    """A configuration value is missing or out of range."""


class SinkFailureError(NasaError):
    """A fetched image could not be persisted or applied."""


class RetryExhaustedError(NasaError):
    """An operation kept failing until its attempt budget ran out."""

    def __init__(self, attempts: int, last_error: Exception) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"failed after {attempts} attempts: {last_error}")
