"""Bounded retry policy. Failures are retried immediately, without backoff."""

import logging
from collections.abc import Callable
from typing import TypeVar

from nasa_apod.errors import NasaError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3


def attempt(
    operation: Callable[[], T],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_on: tuple[type[Exception], ...] = (NasaError,),
) -> T:
    """Run ``operation`` until it succeeds or ``max_attempts`` runs are used up.

    Only exceptions listed in ``retry_on`` are retried; anything else
    propagates immediately.

    Returns:
        The first successful result

    Raises:
        RetryExhaustedError: Carrying the attempt count and the last error
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    number = 1
    while True:
        try:
            return operation()
        except retry_on as e:
            logger.debug("Attempt %d/%d failed: %s", number, max_attempts, e)
            if number >= max_attempts:
                raise RetryExhaustedError(max_attempts, e) from e
        number += 1
