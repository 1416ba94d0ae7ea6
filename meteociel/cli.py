"""CLI entry point for the meteociel.fr forecast scraper."""

import argparse
import logging
import sys

import httpx

from meteociel.config.loader import get_config_value, load_config, set_config_value
from meteociel.ingest.meteociel_client import MeteocielClient, MeteocielClientError
from meteociel.models.forecast import ForecastVariant
from meteociel.models.station import Station
from meteociel.reporting.formatters import (
    format_forecast_json,
    format_forecast_text,
    format_issues,
)

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="meteociel",
        description="Hourly forecasts scraped from meteociel.fr",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # station
    station_p = sub.add_parser("station", help="Look up the station of a city")
    station_p.add_argument("city", help="Exact city name or ZIP code")

    # forecast
    forecast_p = sub.add_parser("forecast", help="Fetch a station forecast")
    forecast_p.add_argument(
        "city", nargs="?", help="Exact city name or ZIP code"
    )
    forecast_p.add_argument(
        "--variant",
        choices=[v.cli_name for v in ForecastVariant],
        help="Forecast model page (default from config)",
    )
    forecast_p.add_argument("--station-id", help="Skip the lookup: station id")
    forecast_p.add_argument("--station-name", help="Skip the lookup: station name")
    forecast_p.add_argument(
        "--format", choices=["text", "json"], default="text", dest="fmt"
    )

    # variants
    sub.add_parser("variants", help="List forecast variants")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Validate and display a config change")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "station":
        return _cmd_station(config, args)
    elif args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "variants":
        return _cmd_variants()
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_station(config, args) -> int:
    client = MeteocielClient.from_config(config)
    try:
        station = client.get_station_for_city(args.city)
    except (MeteocielClientError, httpx.RequestError) as e:
        logger.error("Station lookup failed for %r: %s", args.city, e)
        return 1
    print(f"{station.id} {station.name}")
    return 0


def _cmd_forecast(config, args) -> int:
    client = MeteocielClient.from_config(config)
    variant = (
        ForecastVariant.from_cli_name(args.variant)
        if args.variant else config.default_variant
    )
    try:
        if args.station_id and args.station_name:
            station = Station(id=args.station_id, name=args.station_name)
        elif args.city:
            station = client.get_station_for_city(args.city)
        else:
            print("Error: give a city or both --station-id and --station-name")
            return 1
        parsed = client.get_forecast_page(variant, station)
    except (MeteocielClientError, httpx.RequestError) as e:
        logger.error("Forecast fetch failed: %s", e)
        return 1

    if args.fmt == "json":
        print(format_forecast_json(station, parsed.records))
    else:
        print(format_forecast_text(station, parsed.records))
    if parsed.issues:
        print(format_issues(parsed.issues), file=sys.stderr)
    return 0


def _cmd_variants() -> int:
    for variant in ForecastVariant:
        print(f"{variant.cli_name:<12} {variant.value}")
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
