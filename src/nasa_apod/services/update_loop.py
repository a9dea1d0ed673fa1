"""Long running loop that periodically feeds random pictures to a sink."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from nasa_apod.entities import Image
from nasa_apod.errors import ConfigInvalidError, RetryExhaustedError
from nasa_apod.protocols import ImageSink
from nasa_apod.services.retry import DEFAULT_MAX_ATTEMPTS, attempt

logger = logging.getLogger(__name__)

MIN_INTERVAL_SECONDS = 1.0


@dataclass(frozen=True)
class TickResult:
    """Outcome of one loop tick.

    Attributes:
        tick: 1-based tick number
        success: Whether an image reached the sink
        attempts: Attempts used, including the successful one
        image: The image handed to the sink on success
        error: The last error when every attempt failed
    """

    tick: int
    success: bool
    attempts: int
    image: Image | None = None
    error: Exception | None = None


@dataclass
class LoopStats:
    """Counters accumulated over a run."""

    ticks: int = 0
    succeeded: int = 0
    failed: int = 0
    last_error: Exception | None = field(default=None, repr=False)

    def record(self, result: TickResult) -> None:
        self.ticks += 1
        if result.success:
            self.succeeded += 1
        else:
            self.failed += 1
            self.last_error = result.error


class UpdateLoop:
    """Samples a picture on every tick and hands it to a sink.

    Each tick retries sampling and sink delivery together up to
    ``max_attempts`` times. A tick that runs out of attempts is logged and
    the loop carries on. The sink is closed on every exit path.

    Example:
        ```python
        loop = UpdateLoop(sampler.sample, WallpaperSink(...), interval=600)
        threading.Thread(target=loop.run, daemon=True).start()
        ...
        loop.stop()
        ```
    """

    def __init__(
        self,
        sample: Callable[[], Image],
        sink: ImageSink,
        interval: float,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        on_tick: Callable[[TickResult], None] | None = None,
    ) -> None:
        """Initialize the update loop.

        Args:
            sample: Produces one image per call, usually ``RandomSampler.sample``.
            sink: Consumer of successfully fetched images.
            interval: Seconds to wait between ticks, at least one second.
            max_attempts: Attempts per tick before reporting a failure.
            on_tick: Optional callback receiving every TickResult.
        """
        self._sample = sample
        self._sink = sink
        self._interval = interval
        self._max_attempts = max_attempts
        self._on_tick = on_tick
        self._stop = threading.Event()
        self.stats = LoopStats()

    @property
    def interval(self) -> float:
        return self._interval

    def validate(self) -> None:
        """Check the loop configuration.

        Raises:
            ConfigInvalidError: If the interval is below one second or the
                attempt budget is not positive
        """
        if self._interval < MIN_INTERVAL_SECONDS:
            raise ConfigInvalidError(
                f"interval {self._interval}s is too low, minimum is {MIN_INTERVAL_SECONDS:g}s"
            )
        if self._max_attempts < 1:
            raise ConfigInvalidError("max_attempts must be at least 1")

    def stop(self) -> None:
        """Ask the loop to exit, interrupting the sleep between ticks."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def tick(self, number: int) -> TickResult:
        """Run a single tick: sample, deliver, retry on failure."""
        used = 0

        def deliver() -> Image:
            nonlocal used
            used += 1
            image = self._sample()
            self._sink.consume(image)
            return image

        try:
            image = attempt(deliver, self._max_attempts)
        except RetryExhaustedError as e:
            logger.warning(
                "Tick %d: unable to update after %d attempts: %s", number, e.attempts, e.last_error
            )
            return TickResult(tick=number, success=False, attempts=used, error=e.last_error)

        logger.info("Tick %d: updated to APOD %s (%s)", number, image.date, image.title)
        return TickResult(tick=number, success=True, attempts=used, image=image)

    def run(self, iterations: int | None = None) -> LoopStats:
        """Run ticks until stopped, or for ``iterations`` ticks when given.

        The first tick runs immediately; later ticks follow every ``interval``
        seconds.

        Raises:
            ConfigInvalidError: If the configuration is invalid
        """
        try:
            self.validate()
            logger.info("Updating every %gs with a random APOD", self._interval)
            number = 0
            while not self._stop.is_set():
                number += 1
                result = self.tick(number)
                self.stats.record(result)
                if self._on_tick is not None:
                    self._on_tick(result)
                if iterations is not None and number >= iterations:
                    break
                if self._stop.wait(self._interval):
                    break
            return self.stats
        finally:
            self._close_sink()

    def _close_sink(self) -> None:
        try:
            self._sink.close()
        except Exception as e:  # noqa: BLE001
            logger.warning("Unable to clean up sink: %s", e)
