"""Near Earth Object feed domain entities."""

from dataclasses import dataclass, field
from typing import Any

from nasa_apod.errors import ParseError


def _float(value: Any, name: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"field {name!r} is not a number: {value!r}") from e


def _object(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ParseError(f"field {name!r} should be an object, got {type(value).__name__}")
    return value


def _list(value: Any, name: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"field {name!r} should be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class CloseApproach:
    """A single close approach of an asteroid to an orbiting body."""

    date: str
    velocity_km_s: float
    miss_distance_km: float
    orbiting_body: str

    @classmethod
    def from_payload(cls, payload: Any) -> "CloseApproach":
        data = _object(payload, "close_approach_data")
        velocity = _object(data.get("relative_velocity"), "relative_velocity")
        miss = _object(data.get("miss_distance"), "miss_distance")
        return cls(
            date=str(data.get("close_approach_date", "")),
            velocity_km_s=_float(velocity.get("kilometers_per_second"), "kilometers_per_second"),
            miss_distance_km=_float(miss.get("kilometers"), "kilometers"),
            orbiting_body=str(data.get("orbiting_body", "")),
        )


@dataclass(frozen=True)
class Asteroid:
    """An asteroid tracked by the NeoWs feed.

    Attributes:
        id: NASA reference id (``neo_reference_id``)
        name: Designation, e.g. ``465633 (2009 JR5)``
        nasa_jpl_url: Link to the JPL small body database
        absolute_magnitude: Absolute magnitude H
        diameter_min_km: Lower estimate of the diameter in kilometers
        diameter_max_km: Upper estimate of the diameter in kilometers
        is_potentially_hazardous: NASA's hazard flag
        close_approaches: Approaches listed for the requested window
    """

    id: str
    name: str
    nasa_jpl_url: str
    absolute_magnitude: float
    diameter_min_km: float
    diameter_max_km: float
    is_potentially_hazardous: bool
    close_approaches: tuple[CloseApproach, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "Asteroid":
        data = _object(payload, "asteroid")
        diameter = _object(data.get("estimated_diameter"), "estimated_diameter")
        kilometers = _object(diameter.get("kilometers"), "kilometers")
        approaches = _list(data.get("close_approach_data"), "close_approach_data")
        return cls(
            id=str(data.get("neo_reference_id") or data.get("id") or ""),
            name=str(data.get("name", "")),
            nasa_jpl_url=str(data.get("nasa_jpl_url", "")),
            absolute_magnitude=_float(data.get("absolute_magnitude_h"), "absolute_magnitude_h"),
            diameter_min_km=_float(kilometers.get("estimated_diameter_min"), "estimated_diameter_min"),
            diameter_max_km=_float(kilometers.get("estimated_diameter_max"), "estimated_diameter_max"),
            is_potentially_hazardous=bool(data.get("is_potentially_hazardous_asteroid", False)),
            close_approaches=tuple(CloseApproach.from_payload(a) for a in approaches),
        )


@dataclass(frozen=True)
class NeoFeed:
    """Asteroids grouped by closest approach date for a date window."""

    start: str
    end: str
    element_count: int
    near_earth_objects: dict[str, tuple[Asteroid, ...]] = field(default_factory=dict)
    self_link: str = ""

    @classmethod
    def from_payload(cls, payload: Any, start: str, end: str) -> "NeoFeed":
        """Build a feed from the NeoWs ``/feed`` body.

        Raises:
            ParseError: If the body does not have the feed shape.
        """
        if not isinstance(payload, dict):
            raise ParseError(f"expected a JSON object, got {type(payload).__name__}")
        if "near_earth_objects" not in payload:
            raise ParseError("missing 'near_earth_objects' in NEO feed")

        objects = _object(payload["near_earth_objects"], "near_earth_objects")
        links = _object(payload.get("links"), "links")
        try:
            count = int(payload.get("element_count", 0))
        except (TypeError, ValueError) as e:
            raise ParseError(f"invalid element_count: {payload.get('element_count')!r}") from e

        return cls(
            start=start,
            end=end,
            element_count=count,
            near_earth_objects={
                day: tuple(Asteroid.from_payload(a) for a in _list(items, day))
                for day, items in sorted(objects.items())
            },
            self_link=str(links.get("self", "")),
        )

    @property
    def hazardous(self) -> list[Asteroid]:
        """All potentially hazardous asteroids in the window."""
        return [
            asteroid
            for asteroids in self.near_earth_objects.values()
            for asteroid in asteroids
            if asteroid.is_potentially_hazardous
        ]

    def __str__(self) -> str:
        lines = [
            f"Near Earth Objects From: {self.start} to {self.end}",
            f"Number: {self.element_count}",
            f"Link: {self.self_link}",
        ]
        for day, asteroids in self.near_earth_objects.items():
            lines.append(f"{day}: {len(asteroids)} objects")
            lines.append("Objects: " + ",".join(a.name for a in asteroids))
        return "\n".join(lines) + "\n"
