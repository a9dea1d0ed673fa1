import os
import re
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

from nasa_apod.errors import ConfigInvalidError

load_dotenv()

DEMO_KEY = "DEMO_KEY"

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: str) -> float:
    """Parse a duration such as ``500ms``, ``10m`` or ``1h30m`` into seconds.

    A bare number is read as seconds.

    Raises:
        ConfigInvalidError: If the value is not a valid duration.
    """
    text = value.strip()
    try:
        return float(text)
    except ValueError:
        pass

    parts = _DURATION_PART.findall(text)
    if not parts or "".join(n + u for n, u in parts) != text:
        raise ConfigInvalidError(f"invalid duration {value!r}, use e.g. 30s, 10m or 1h30m")
    return sum(float(number) * _DURATION_UNITS[unit] for number, unit in parts)


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return parse_duration(raw)
    except ConfigInvalidError as e:
        raise ConfigInvalidError(f"{name}: {e}") from e


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigInvalidError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # NASA API
    nasa_api_key: str = field(
        default_factory=lambda: os.getenv("NASA_API_KEY") or os.getenv("NASAKEY") or DEMO_KEY
    )
    apod_endpoint: str = field(
        default_factory=lambda: os.getenv("APOD_ENDPOINT", "https://api.nasa.gov/planetary/apod")
    )
    neo_endpoint: str = field(
        default_factory=lambda: os.getenv("NEO_ENDPOINT", "https://api.nasa.gov/neo/rest/v1/feed")
    )
    request_timeout: float = field(default_factory=lambda: _env_float("NASA_REQUEST_TIMEOUT", "20"))

    # Wallpaper
    wallpaper_interval: float = field(default_factory=lambda: _env_float("WALLPAPER_INTERVAL", "10m"))
    wallpaper_cmd: str | None = field(default_factory=lambda: os.getenv("WALLPAPER_CMD") or None)
    wallpaper_cmd_default: str = field(
        default_factory=lambda: os.getenv("WALLPAPER_CMD_DEFAULT", "gnome")
    )
    image_download_timeout: float = field(
        default_factory=lambda: _env_float("IMAGE_DOWNLOAD_TIMEOUT", "40")
    )

    # Web
    random_refresh_seconds: float = field(
        default_factory=lambda: _env_float("RANDOM_REFRESH_SECONDS", "1")
    )
    api_host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: _env_int("API_PORT", "8080"))

    @property
    def uses_demo_key(self) -> bool:
        """Check if requests go out with the shared, rate limited demo key."""
        return self.nasa_api_key == DEMO_KEY

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.request_timeout <= 0:
            raise ConfigInvalidError("NASA_REQUEST_TIMEOUT must be positive")
        if self.image_download_timeout <= 0:
            raise ConfigInvalidError("IMAGE_DOWNLOAD_TIMEOUT must be positive")
        if self.random_refresh_seconds < 0:
            raise ConfigInvalidError("RANDOM_REFRESH_SECONDS must not be negative")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
