"""Request DTOs for the HTML pages."""

from pydantic import BaseModel, Field

DEFAULT_RELOAD_INTERVAL = 5 * 60


class DisplayOptions(BaseModel):
    """How a picture page is displayed, built from its query string.

    - ``sd``: any non-empty value shows the standard definition image
    - ``auto`` / ``interval``: either one enables the meta refresh
    - ``interval``: refresh period in seconds, 300 when missing or below 1
    """

    sd: bool = Field(False, description="Show the standard definition image")
    auto_reload: bool = Field(False, description="Reload the page periodically")
    auto_reload_interval: int = Field(
        DEFAULT_RELOAD_INTERVAL,
        description="Seconds between reloads",
        ge=1,
    )

    @classmethod
    def from_query(
        cls,
        sd: str | None = None,
        auto: str | None = None,
        interval: str | None = None,
    ) -> "DisplayOptions":
        seconds = 0
        if interval:
            try:
                seconds = int(interval)
            except ValueError:
                seconds = 0
        return cls(
            sd=bool(sd),
            auto_reload=bool(auto) or bool(interval),
            auto_reload_interval=seconds if seconds >= 1 else DEFAULT_RELOAD_INTERVAL,
        )
