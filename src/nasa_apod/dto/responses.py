"""Response DTOs for the JSON endpoints."""

import datetime as dt

from pydantic import BaseModel, Field

from nasa_apod.entities import Asteroid, Image, NeoFeed


class ImageResponse(BaseModel):
    """A picture of the day."""

    date: str = Field(..., description="Publication date, YYYY-MM-DD")
    title: str = Field(..., description="Picture title")
    url: str = Field("", description="Standard definition image URL")
    hdurl: str = Field("", description="High definition image URL")
    explanation: str = Field("", description="Description of the picture")
    parsed_date: dt.date | None = Field(None, description="Publication date, when parsable")

    @classmethod
    def from_entity(cls, image: Image) -> "ImageResponse":
        return cls(
            date=image.date,
            title=image.title,
            url=image.url,
            hdurl=image.hd_url,
            explanation=image.explanation,
            parsed_date=image.parsed_date,
        )


class AsteroidItem(BaseModel):
    """Single asteroid in a NEO feed."""

    id: str
    name: str
    nasa_jpl_url: str
    absolute_magnitude: float
    diameter_min_km: float = Field(..., ge=0.0)
    diameter_max_km: float = Field(..., ge=0.0)
    is_potentially_hazardous: bool

    @classmethod
    def from_entity(cls, asteroid: Asteroid) -> "AsteroidItem":
        return cls(
            id=asteroid.id,
            name=asteroid.name,
            nasa_jpl_url=asteroid.nasa_jpl_url,
            absolute_magnitude=asteroid.absolute_magnitude,
            diameter_min_km=asteroid.diameter_min_km,
            diameter_max_km=asteroid.diameter_max_km,
            is_potentially_hazardous=asteroid.is_potentially_hazardous,
        )


class NeoFeedResponse(BaseModel):
    """Asteroids grouped by closest approach date."""

    start_date: str
    end_date: str
    element_count: int = Field(..., ge=0)
    near_earth_objects: dict[str, list[AsteroidItem]] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, feed: NeoFeed) -> "NeoFeedResponse":
        return cls(
            start_date=feed.start,
            end_date=feed.end,
            element_count=feed.element_count,
            near_earth_objects={
                day: [AsteroidItem.from_entity(a) for a in asteroids]
                for day, asteroids in feed.near_earth_objects.items()
            },
        )


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Always 'ok' while the process serves requests")
    cached_date: str | None = Field(None, description="Date of the cached picture of the day")
    cache_fresh: bool = Field(..., description="Whether the cached picture is today's")
    demo_key: bool = Field(..., description="Whether the shared DEMO_KEY is in use")
