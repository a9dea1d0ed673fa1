"""CLI entry point - apod, neo, web and wallpaper commands.

Usage:
    nasa [apod] [--date YYYY-MM-DD]
    nasa neo [--start YYYY-MM-DD] [--end YYYY-MM-DD]
    nasa web [--listen HOST:PORT]
    nasa wallpaper [--interval 10m] [--cmd TEMPLATE | --cmd-default NAME] [--today]
"""

import argparse
import logging
import signal
import sys
import threading
from datetime import date, datetime

from nasa_apod import __version__
from nasa_apod.config import get_settings, parse_duration
from nasa_apod.errors import ConfigInvalidError, NasaError
from nasa_apod.services import ApodService, NeoService, RandomSampler, UpdateLoop, attempt
from nasa_apod.sinks import COMMAND_DEFAULTS, WallpaperSink, select_wallpaper_setter

logger = logging.getLogger(__name__)

COMMANDS = ("apod", "neo", "web", "wallpaper")

DEMO_KEY_HINT = (
    "You are using the demo API Key DEMO_KEY. "
    "Apply for an API key at https://api.nasa.gov/index.html#apply-for-an-api-key"
)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    argv = _with_default_command(list(sys.argv[1:] if argv is None else argv))
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        if get_settings().uses_demo_key:
            print(DEMO_KEY_HINT, file=sys.stderr)
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (NasaError, ValueError) as exc:
        print(f"nasa {args.command}: {exc}", file=sys.stderr)
        return 1


def _with_default_command(argv: list[str]) -> list[str]:
    """Insert ``apod`` when no subcommand is given, after the global flags."""
    if any(arg in COMMANDS for arg in argv) or {"-h", "--help", "--version"} & set(argv):
        return argv
    position = next(
        (i for i, arg in enumerate(argv) if arg not in ("-v", "--verbose")), len(argv)
    )
    return argv[:position] + ["apod"] + argv[position:]


def _date_arg(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, should use format YYYY-MM-DD") from e


def _duration_arg(value: str) -> float:
    try:
        return parse_duration(value)
    except ConfigInvalidError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="nasa",
        description="NASA Astronomy Picture of the Day and Near Earth Objects",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # --- apod ---
    p_apod = subparsers.add_parser("apod", help="Print the Astronomy Picture of the Day")
    p_apod.add_argument(
        "--date", type=_date_arg, default=None,
        help="APOD on a particular date YYYY-MM-DD (default: today)",
    )
    p_apod.set_defaults(func=cmd_apod)

    # --- neo ---
    p_neo = subparsers.add_parser("neo", help="Print Near Earth Objects by approach date")
    p_neo.add_argument("--start", type=_date_arg, default=None, help="NEO start date YYYY-MM-DD")
    p_neo.add_argument("--end", type=_date_arg, default=None, help="NEO end date YYYY-MM-DD")
    p_neo.set_defaults(func=cmd_neo)

    # --- web ---
    p_web = subparsers.add_parser("web", help="Serve APOD pages over HTTP")
    p_web.add_argument(
        "--listen", default=None,
        help="Listening address HOST:PORT (default: API_HOST:API_PORT)",
    )
    p_web.set_defaults(func=cmd_web)

    # --- wallpaper ---
    p_wall = subparsers.add_parser("wallpaper", help="Use APOD pictures as desktop wallpaper")
    p_wall.add_argument(
        "--interval", type=_duration_arg, default=None,
        help="Interval between wallpaper changes, e.g. 30s or 10m (default: WALLPAPER_INTERVAL)",
    )
    p_wall.add_argument(
        "--cmd", default=None,
        help="Command to change the wallpaper, %%s is replaced by the image path",
    )
    p_wall.add_argument(
        "--cmd-default", choices=sorted(COMMAND_DEFAULTS), default=None,
        help="Use a built-in command to set the wallpaper",
    )
    p_wall.add_argument(
        "--today", action="store_true",
        help="Set today's APOD once instead of rotating random pictures",
    )
    p_wall.add_argument(
        "--iterations", type=int, default=None,
        help="Stop after this many updates (default: run forever)",
    )
    p_wall.set_defaults(func=cmd_wallpaper)

    return parser


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def _apod_service() -> ApodService:
    return ApodService.create()


def _neo_service() -> NeoService:
    return NeoService.create()


def cmd_apod(args: argparse.Namespace) -> int:
    """Fetch and print one picture of the day."""
    service = _apod_service()
    image = service.today() if args.date is None else service.fetch(args.date)
    print(image)
    return 0


def cmd_neo(args: argparse.Namespace) -> int:
    """Fetch and print the NEO feed summary."""
    feed = _neo_service().feed(args.start, args.end)
    print(feed)
    return 0


def _parse_listen(listen: str) -> tuple[str, int]:
    host, _, port = listen.rpartition(":")
    try:
        return host or "0.0.0.0", int(port)
    except ValueError as e:
        raise ConfigInvalidError(f"invalid listen address {listen!r}, use HOST:PORT") from e


def cmd_web(args: argparse.Namespace) -> int:
    """Run the HTTP server until interrupted."""
    import uvicorn

    from nasa_apod.api.app import create_app

    settings = get_settings()
    if args.listen:
        host, port = _parse_listen(args.listen)
    else:
        host, port = settings.api_host, settings.api_port

    logger.info("Launching http server at %s:%d", host, port)
    uvicorn.run(create_app(), host=host, port=port)
    return 0


def cmd_wallpaper(args: argparse.Namespace) -> int:
    """Set today's picture once, or rotate random pictures forever."""
    settings = get_settings()
    setter = select_wallpaper_setter(
        command=args.cmd or settings.wallpaper_cmd,
        command_default=args.cmd_default or settings.wallpaper_cmd_default,
    )
    service = _apod_service()
    sink = WallpaperSink(setter)

    if args.today:
        try:
            image = attempt(service.today)
            attempt(lambda: sink.consume(image))
        finally:
            sink.close()
        print(f"Wallpaper set to {image.title} ({image.date})")
        return 0

    interval = args.interval if args.interval is not None else settings.wallpaper_interval
    loop = UpdateLoop(RandomSampler(service).sample, sink, interval=interval)
    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGTERM, lambda signum, frame: loop.stop())

    stats = loop.run(iterations=args.iterations)
    logger.info("Wallpaper loop finished: %d updated, %d failed", stats.succeeded, stats.failed)
    return 0 if stats.succeeded or not stats.ticks or loop.stopped else 1
