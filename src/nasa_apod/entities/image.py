"""APOD image domain entity."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from nasa_apod.errors import ParseError

DATE_FORMAT = "%Y-%m-%d"


def parse_apod_date(value: str) -> date | None:
    """Parse a ``YYYY-MM-DD`` string, returning None when it is not one."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def _text(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(f"field {key!r} should be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Image:
    """One Astronomy Picture of the Day entry.

    Attributes:
        date: Publication date as ``YYYY-MM-DD``
        title: Picture title
        url: Standard definition image URL
        hd_url: High definition image URL
        explanation: Free text description
        parsed_date: ``date`` parsed as a calendar date, None if unparsable
    """

    date: str
    title: str
    url: str
    hd_url: str
    explanation: str
    parsed_date: date | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Image":
        """Build an Image from the APOD JSON body.

        Raises:
            ParseError: If the body is not a JSON object or a field has the wrong type.
        """
        if not isinstance(payload, dict):
            raise ParseError(f"expected a JSON object, got {type(payload).__name__}")
        apod_date = _text(payload, "date")
        return cls(
            date=apod_date,
            title=_text(payload, "title"),
            url=_text(payload, "url"),
            hd_url=_text(payload, "hdurl"),
            explanation=_text(payload, "explanation"),
            parsed_date=parse_apod_date(apod_date),
        )

    @property
    def is_valid(self) -> bool:
        """An image is usable when it links to at least one picture."""
        return bool(self.url or self.hd_url)

    @property
    def best_url(self) -> str:
        """HD url when available, standard definition otherwise."""
        return self.hd_url or self.url

    def __str__(self) -> str:
        return (
            f"Title: {self.title}\n"
            f"Date: {self.date}\n"
            f"Image: {self.url}\n"
            f"HD Image: {self.hd_url}\n"
            f"About:\n{self.explanation}\n"
        )
