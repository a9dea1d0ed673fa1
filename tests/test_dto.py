"""
Tests for the JSON response models.
"""

from datetime import date

from nasa_apod.dto import ImageResponse
from nasa_apod.entities import Image


def test_image_response_keeps_date_and_parsed_date():
    image = Image.from_payload(
        {
            "date": "2017-05-11",
            "title": "Stars",
            "url": "https://apod.test/sd.jpg",
            "hdurl": "https://apod.test/hd.jpg",
            "explanation": "E",
        }
    )

    response = ImageResponse.from_entity(image)

    assert response.date == "2017-05-11"
    assert response.parsed_date == date(2017, 5, 11)
    assert response.model_dump(mode="json")["parsed_date"] == "2017-05-11"
    assert response.hdurl == "https://apod.test/hd.jpg"


def test_image_response_unparsable_date():
    image = Image("May 11", "Stars", "https://apod.test/sd.jpg", "", "E")
    assert ImageResponse.from_entity(image).parsed_date is None
