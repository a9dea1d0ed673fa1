"""
Tests for the command line interface.
"""

import signal

import httpx
import pytest

from nasa_apod import cli
from nasa_apod.config import get_settings
from nasa_apod.errors import SinkFailureError
from nasa_apod.services import NeoService


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch):
    installed = {}

    def record(signum, handler):
        installed[signum] = handler

    monkeypatch.setattr(signal, "signal", record)
    return installed


@pytest.fixture
def patched_service(monkeypatch, apod_service):
    monkeypatch.setattr(cli, "_apod_service", lambda: apod_service)
    return apod_service


class RecordingSink:
    instances = []

    def __init__(self, setter):
        self.setter = setter
        self.consumed = []
        self.closed = False
        RecordingSink.instances.append(self)

    def consume(self, image):
        self.consumed.append(image)

    def close(self):
        self.closed = True


@pytest.fixture
def recording_sink(monkeypatch):
    RecordingSink.instances = []
    monkeypatch.setattr(cli, "WallpaperSink", RecordingSink)
    return RecordingSink


def test_default_command_is_apod():
    assert cli._with_default_command([]) == ["apod"]
    assert cli._with_default_command(["-v", "--date", "2017-05-11"]) == [
        "-v", "apod", "--date", "2017-05-11",
    ]
    assert cli._with_default_command(["neo", "--start", "2015-09-07"]) == [
        "neo", "--start", "2015-09-07",
    ]
    assert cli._with_default_command(["--help"]) == ["--help"]


def test_apod_today(patched_service, capsys):
    assert cli.main([]) == 0

    out, err = capsys.readouterr()
    assert "Title: Picture of 2017-05-20" in out
    assert "DEMO_KEY" in err


def test_apod_on_date(patched_service, upstream, capsys):
    assert cli.main(["apod", "--date", "2017-05-11"]) == 0

    out, _ = capsys.readouterr()
    assert "Date: 2017-05-11" in out
    assert "HD Image: https://apod.test/2017-05-11-hd.jpg" in out
    assert upstream.params()["date"] == "2017-05-11"


def test_no_demo_hint_with_own_key(patched_service, monkeypatch, capsys):
    monkeypatch.setenv("NASA_API_KEY", "MY_KEY")
    get_settings.cache_clear()
    cli.main([])
    _, err = capsys.readouterr()
    assert "DEMO_KEY" not in err


def test_apod_failure_exits_1(patched_service, upstream, capsys):
    upstream.status_code = 500
    assert cli.main(["apod"]) == 1

    _, err = capsys.readouterr()
    assert "nasa apod:" in err


def test_invalid_date_is_a_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["apod", "--date", "2017-13-01"])
    assert exc_info.value.code == 2


def test_neo(monkeypatch, neo_repository_factory, clock, capsys):
    feed = {"links": {"self": "https://api.test/neo"}, "element_count": 0, "near_earth_objects": {}}
    service = NeoService(
        neo_repository_factory(lambda request: httpx.Response(200, json=feed)), clock=clock
    )
    monkeypatch.setattr(cli, "_neo_service", lambda: service)

    assert cli.main(["neo", "--start", "2015-09-07", "--end", "2015-09-08"]) == 0
    out, _ = capsys.readouterr()
    assert out.startswith("Near Earth Objects From: 2015-09-07 to 2015-09-08")


def test_neo_window_too_long(monkeypatch, neo_repository_factory, clock, capsys):
    service = NeoService(neo_repository_factory(lambda r: httpx.Response(500)), clock=clock)
    monkeypatch.setattr(cli, "_neo_service", lambda: service)

    assert cli.main(["neo", "--start", "2015-09-01", "--end", "2015-09-20"]) == 1
    _, err = capsys.readouterr()
    assert "limited to 7 days" in err


def test_parse_listen():
    assert cli._parse_listen(":8080") == ("0.0.0.0", 8080)
    assert cli._parse_listen("127.0.0.1:9000") == ("127.0.0.1", 9000)


def test_wallpaper_interval_too_low(patched_service, recording_sink, capsys):
    assert cli.main(["wallpaper", "--interval", "500ms", "--cmd", "feh %s"]) == 1

    _, err = capsys.readouterr()
    assert "too low" in err
    assert recording_sink.instances[0].consumed == []
    assert recording_sink.instances[0].closed


def test_wallpaper_invalid_duration():
    with pytest.raises(SystemExit):
        cli.main(["wallpaper", "--interval", "ten minutes"])


def test_wallpaper_today(patched_service, recording_sink, capsys):
    assert cli.main(["wallpaper", "--today", "--cmd", "feh --bg-fill %s"]) == 0

    sink = recording_sink.instances[0]
    assert sink.setter.template == "feh --bg-fill %s"
    assert [image.date for image in sink.consumed] == ["2017-05-20"]
    assert sink.closed
    out, _ = capsys.readouterr()
    assert "Wallpaper set to Picture of 2017-05-20" in out


def test_wallpaper_loop_iterations(patched_service, recording_sink, no_signal_handlers):
    assert cli.main(["wallpaper", "--iterations", "1", "--cmd-default", "feh"]) == 0

    sink = recording_sink.instances[0]
    assert sink.setter.name == "feh"
    assert len(sink.consumed) == 1
    assert sink.closed
    assert list(no_signal_handlers) == [signal.SIGTERM]


def test_wallpaper_unknown_setup(patched_service, recording_sink, monkeypatch, capsys):
    monkeypatch.setenv("WALLPAPER_CMD_DEFAULT", "amiga")
    get_settings.cache_clear()
    assert cli.main(["wallpaper", "--today"]) == 1
    _, err = capsys.readouterr()
    assert "unknown default wallpaper command" in err


def test_wallpaper_sigterm_after_failed_tick_exits_0(
    patched_service, monkeypatch, no_signal_handlers
):
    class TerminatedSink(RecordingSink):
        def consume(self, image):
            no_signal_handlers[signal.SIGTERM](signal.SIGTERM, None)
            raise SinkFailureError("no desktop")

    RecordingSink.instances = []
    monkeypatch.setattr(cli, "WallpaperSink", TerminatedSink)

    assert cli.main(["wallpaper", "--interval", "1h", "--cmd", "feh %s"]) == 0

    sink = RecordingSink.instances[0]
    assert sink.consumed == []
    assert sink.closed
