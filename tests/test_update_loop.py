"""
Tests for the wallpaper/cache update loop.
"""

import threading

import pytest

from nasa_apod.entities import Image
from nasa_apod.errors import ConfigInvalidError, NetworkError, SinkFailureError
from nasa_apod.services import RandomApodCache, UpdateLoop

IMAGE = Image("2017-05-11", "T", "http://x/img.jpg", "", "E")


class ScriptedSampler:
    """Fails according to a script of booleans, True meaning failure."""

    def __init__(self, script):
        self.script = list(script)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        fail = self.script.pop(0) if self.script else False
        if fail:
            raise NetworkError("upstream down")
        return IMAGE


class RecordingSink:
    def __init__(self, failures=0):
        self.failures = failures
        self.consumed = []
        self.closed = 0

    def consume(self, image):
        if self.failures:
            self.failures -= 1
            raise SinkFailureError("disk full")
        self.consumed.append(image)

    def close(self):
        self.closed += 1


@pytest.mark.parametrize("k", [0, 1, 2])
def test_tick_succeeds_after_fewer_than_three_failures(k):
    sampler = ScriptedSampler([True] * k)
    sink = RecordingSink()
    ticks = []
    loop = UpdateLoop(sampler, sink, interval=1.0, on_tick=ticks.append)

    stats = loop.run(iterations=1)

    assert stats.succeeded == 1
    assert stats.failed == 0
    assert ticks[0].success
    assert ticks[0].attempts == k + 1
    assert sink.consumed == [IMAGE]


def test_tick_fails_after_three_failures_and_loop_continues():
    sampler = ScriptedSampler([True, True, True, True])
    sink = RecordingSink()
    ticks = []
    loop = UpdateLoop(sampler, sink, interval=1.0, on_tick=ticks.append)

    stats = loop.run(iterations=2)

    assert [t.success for t in ticks] == [False, True]
    assert ticks[0].attempts == 3
    assert isinstance(ticks[0].error, NetworkError)
    assert ticks[1].attempts == 2
    assert stats.ticks == 2
    assert stats.failed == 1
    assert stats.succeeded == 1
    assert sink.closed == 1


def test_sink_failures_are_retried_like_fetch_failures():
    sampler = ScriptedSampler([])
    sink = RecordingSink(failures=2)
    ticks = []
    loop = UpdateLoop(sampler, sink, interval=1.0, on_tick=ticks.append)

    loop.run(iterations=1)

    assert ticks[0].success
    assert ticks[0].attempts == 3
    assert sampler.calls == 3


def test_persistent_sink_failure_is_reported():
    sink = RecordingSink(failures=10)
    loop = UpdateLoop(ScriptedSampler([]), sink, interval=1.0)

    stats = loop.run(iterations=1)

    assert stats.failed == 1
    assert isinstance(stats.last_error, SinkFailureError)


def test_interval_below_one_second_is_config_invalid():
    sink = RecordingSink()
    sampler = ScriptedSampler([])
    loop = UpdateLoop(sampler, sink, interval=0.5)

    with pytest.raises(ConfigInvalidError):
        loop.run(iterations=1)

    assert sampler.calls == 0
    # Cleanup still runs on the configuration error path
    assert sink.closed == 1


def test_zero_attempts_is_config_invalid():
    loop = UpdateLoop(ScriptedSampler([]), RecordingSink(), interval=1.0, max_attempts=0)
    with pytest.raises(ConfigInvalidError):
        loop.validate()


def test_stop_interrupts_sleep():
    sink = RecordingSink()
    started = threading.Event()
    loop = UpdateLoop(
        ScriptedSampler([]), sink, interval=3600.0, on_tick=lambda result: started.set()
    )
    runner = threading.Thread(target=loop.run)
    runner.start()

    assert started.wait(5)
    loop.stop()
    runner.join(5)

    assert not runner.is_alive()
    assert loop.stopped
    assert loop.stats.ticks == 1
    assert sink.closed == 1


def test_unexpected_errors_still_clean_up():
    def broken():
        raise RuntimeError("bug")

    sink = RecordingSink()
    loop = UpdateLoop(broken, sink, interval=1.0)

    with pytest.raises(RuntimeError):
        loop.run(iterations=1)
    assert sink.closed == 1


def test_loop_can_feed_random_cache():
    cache = RandomApodCache(sample=ScriptedSampler([True] * 5), refresh_seconds=3600)
    loop = UpdateLoop(ScriptedSampler([]), cache, interval=1.0)

    loop.run(iterations=1)

    assert cache.image == IMAGE
    assert not cache.is_stale()
