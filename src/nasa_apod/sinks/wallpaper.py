"""Wallpaper sink: stage a picture in a scratch file and apply it."""

import logging
import os
import tempfile

import httpx

from nasa_apod.config import get_settings
from nasa_apod.entities import Image
from nasa_apod.errors import SinkFailureError
from nasa_apod.protocols import WallpaperSetter

logger = logging.getLogger(__name__)

# Shortest body accepted as an image, matching the sniffing window
MIN_IMAGE_BYTES = 512

_SIGNATURES = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_image_type(data: bytes) -> str | None:
    """Return the MIME type of a JPEG, PNG or GIF body, None otherwise.

    Bodies shorter than ``MIN_IMAGE_BYTES`` are never considered images.
    """
    if len(data) < MIN_IMAGE_BYTES:
        return None
    for signature, mime in _SIGNATURES:
        if data.startswith(signature):
            return mime
    return None


class WallpaperSink:
    """Downloads a picture and applies it through a WallpaperSetter.

    Satisfies the ImageSink protocol. The scratch file is created up front and
    removed by ``close()``.

    Example:
        ```python
        sink = WallpaperSink(select_wallpaper_setter(command_default="feh"))
        try:
            sink.consume(apod_service.today())
        finally:
            sink.close()
        ```
    """

    def __init__(
        self,
        setter: WallpaperSetter,
        client: httpx.Client | None = None,
        timeout: float | None = None,
        scratch_dir: str | None = None,
    ) -> None:
        """Initialize the wallpaper sink.

        Args:
            setter: Strategy applying the staged file as wallpaper.
            client: HTTP client used to download pictures.
            timeout: Download timeout in seconds. Defaults to settings.
            scratch_dir: Directory for the scratch file, system temp dir if None.
        """
        self._setter = setter
        self._timeout = timeout or get_settings().image_download_timeout
        self._client = client
        fd, self._path = tempfile.mkstemp(prefix="nasa-wallpaper-", suffix=".img", dir=scratch_dir)
        os.close(fd)

    @property
    def path(self) -> str:
        """Location of the scratch file."""
        return self._path

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, follow_redirects=True)
        return self._client

    def download(self, url: str) -> bytes:
        """Download and validate a picture.

        Raises:
            SinkFailureError: On transport errors, non-200 replies or non-image bodies
        """
        try:
            response = self.client.get(url)
        except httpx.HTTPError as e:
            raise SinkFailureError(f"unable to download {url}: {e}") from e
        if response.status_code != httpx.codes.OK:
            raise SinkFailureError(
                f"image download not OK: {response.status_code} {response.reason_phrase}"
            )
        data = response.content
        if sniff_image_type(data) is None:
            raise SinkFailureError("APOD is not a valid image mimetype")
        return data

    def consume(self, image: Image) -> None:
        """Download ``image``, stage it and set it as wallpaper."""
        url = image.best_url
        if not url:
            raise SinkFailureError("APOD has no image url")

        data = self.download(url)
        try:
            with open(self._path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise SinkFailureError(f"unable to update wallpaper file: {e}") from e

        self._setter.apply(self._path)
        logger.debug("Wallpaper set to %s via %s", url, self._setter.name)

    def close(self) -> None:
        """Remove the scratch file and close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None
        if not os.path.exists(self._path):
            return
        try:
            os.remove(self._path)
        except OSError as e:
            logger.warning("Unable to clean up %s: %s", self._path, e)
