"""
Tests for the random sampler.
"""

import random
from datetime import date, timedelta

import pytest

from nasa_apod.entities import Image
from nasa_apod.services import RandomSampler
from nasa_apod.services.random_sampler import WINDOW_DAYS


class RecordingFetcher:
    def __init__(self):
        self.requested = []

    def fetch(self, when=None):
        self.requested.append(when)
        apod_date = when.date().isoformat()
        return Image(apod_date, "T", f"http://x/{apod_date}.jpg", "", "E")


def test_offsets_stay_in_window():
    sampler = RandomSampler(RecordingFetcher(), rng=random.Random(42))
    offsets = [sampler.pick_offset() for _ in range(5000)]

    assert WINDOW_DAYS == 730
    assert min(offsets) >= 0
    assert max(offsets) < WINDOW_DAYS


def test_offsets_vary():
    sampler = RandomSampler(RecordingFetcher())
    offsets = {sampler.pick_offset() for _ in range(50)}
    assert len(offsets) > 1


def test_sample_delegates_offset_date(clock):
    fetcher = RecordingFetcher()
    rng = random.Random(7)
    expected_offset = random.Random(7).randrange(WINDOW_DAYS)
    sampler = RandomSampler(fetcher, rng=rng, clock=clock)

    image = sampler.sample()

    expected = (clock() - timedelta(days=expected_offset)).date()
    assert fetcher.requested[0].date() == expected
    assert image.date == expected.isoformat()


def test_sample_every_call_fetches(clock):
    fetcher = RecordingFetcher()
    sampler = RandomSampler(fetcher, clock=clock)
    for _ in range(3):
        sampler.sample()
    assert len(fetcher.requested) == 3


def test_sample_through_service_hits_network(apod_service, upstream, clock):
    sampler = RandomSampler(apod_service, rng=random.Random(1), clock=clock)
    image = sampler.sample()

    assert upstream.calls == 1
    oldest = clock().date() - timedelta(days=WINDOW_DAYS - 1)
    assert oldest <= date.fromisoformat(image.date) <= clock().date()


def test_window_must_be_positive():
    with pytest.raises(ValueError):
        RandomSampler(RecordingFetcher(), window_days=0)
