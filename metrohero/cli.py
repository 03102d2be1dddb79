"""Command-line interface for the MetroHero API."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from colorama import just_fix_windows_console

from metrohero import __version__
from metrohero.config import AppConfig, LoggingConfig, load_config
from metrohero.data.client import API_KEY_ENV_VAR, MetroHeroClient
from metrohero.data.errors import MetroHeroError
from metrohero.data.stations import resolve_code
from metrohero.rendering import compose_departures, compose_plan, compose_stations

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILE_NAME = "metrohero.log"

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="metrohero", description="Metrorail info from the MetroHero API")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--api-key", help=f"MetroHero API key (default: ${API_KEY_ENV_VAR})")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Get information about a route between two stations")
    plan.add_argument("start_station")
    plan.add_argument("end_station")

    departures = subparsers.add_parser("departures", help="Get upcoming departures from a station")
    departures.add_argument("station")

    subparsers.add_parser("stations", help="Print station names and their codes")
    return parser


def configure_logging(config: LoggingConfig, level: str | None = None) -> None:
    """Send log records to stderr, and to a file when ``log_dir`` is set."""
    level_name = (level or config.level).upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise ValueError(f"Unknown log level: {level_name}")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8"))
    logging.basicConfig(level=level_name, format=LOG_FORMAT, handlers=handlers, force=True)


def _run_command(args: argparse.Namespace, client: MetroHeroClient, config: AppConfig, use_color: bool) -> str:
    display = config.display
    if args.command == "plan":
        start = resolve_code(args.start_station)
        end = resolve_code(args.end_station)
        logger.info(f"Planning trip {start.value} -> {end.value}")
        trip_info = client.get_trip_info(start, end)
        return compose_plan(
            trip_info,
            max_departures=display.max_departures,
            max_next_trains=display.max_next_trains,
            use_color=use_color,
        )

    station = resolve_code(args.station)
    logger.info(f"Fetching departures for {station.value}")
    departures = client.get_station_train_predictions(
        station, include_scheduled=config.metrohero.include_scheduled_predictions
    )
    station_tags = client.get_station_report(station)
    return compose_departures(
        station,
        departures,
        station_tags,
        max_departures=display.max_departures,
        use_color=use_color,
    )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        configure_logging(config.log, args.log_level)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    use_color = not args.no_color and config.display.color and sys.stdout.isatty()
    if use_color:
        just_fix_windows_console()

    if args.command == "stations":
        print(compose_stations(use_color=use_color))
        return 0

    api_key = args.api_key or config.metrohero.api_key
    if not api_key:
        print(f"{API_KEY_ENV_VAR} missing in environment; pass --api-key", file=sys.stderr)
        return 1

    try:
        client = MetroHeroClient(
            api_key,
            base_url=config.metrohero.base_url,
            timeout_seconds=config.metrohero.timeout_seconds,
        )
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    try:
        with client:
            output = _run_command(args, client, config, use_color)
    except MetroHeroError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
