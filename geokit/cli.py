"""Command line interface.

Usage:
    # Geocode an address through the configured failover chain
    geokit geocode "100 Spear St, San Francisco, CA"

    # Geocode with a single provider
    geokit geocode "4600 Silver Hill Rd, Washington, DC" --provider census

    # Geolocate an IP address
    geokit geocode 12.215.42.19

    # Distance between coordinates, addresses or IP addresses
    geokit distance "32.918593,-96.958444" "32.969527,-96.990159" --units kms

Environment:
    GEOKIT_CONFIG: Path to config file (default: config/geokit.yaml)
    LOG_LEVEL: Logging level (default: WARNING)
"""

import argparse
import logging
import os
import re
import sys
from typing import Any

from geokit.core.errors import GeoKitError
from geokit.core.origin import is_ip_address
from geokit.locator import Locator
from geokit.shell.config_loader import load_config
from geokit.shell.geocoders import GEOCODER_CLASSES, build_geocoder


logger = logging.getLogger(__name__)


COORDINATES_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def parse_origin_arg(value: str) -> Any:
    """Turn a "lat,lng" argument into a pair, leave anything else as text."""
    match = COORDINATES_PATTERN.match(value)
    if match:
        return (float(match.group(1)), float(match.group(2)))
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geokit",
        description="Geocode addresses and measure distances",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    geocode_parser = subparsers.add_parser("geocode", help="Geocode an address or IP address")
    geocode_parser.add_argument("query", help="Address or dotted-quad IP address")
    geocode_parser.add_argument(
        "--provider",
        choices=sorted(GEOCODER_CLASSES),
        help="Use a single provider instead of the failover chain",
    )

    distance_parser = subparsers.add_parser("distance", help="Distance between two origins")
    distance_parser.add_argument("origin", help='"lat,lng", address or IP address')
    distance_parser.add_argument("destination", help='"lat,lng", address or IP address')
    distance_parser.add_argument("--units", help="miles or kms (default from config)")
    distance_parser.add_argument("--formula", help="sphere or flat (default from config)")

    return parser


def _geocode(args: argparse.Namespace, locator: Locator) -> int:
    if args.provider:
        location = build_geocoder(args.provider, locator.config).geocode(args.query)
    elif is_ip_address(args.query):
        location = locator.geocode_ip(args.query)
    else:
        location = locator.geocode(args.query)

    print(location)
    if location.success:
        print(f"Full address: {location.full_address}")
        print(f"Precision: {location.precision}")
        return 0
    return 1


def _distance(args: argparse.Namespace, locator: Locator) -> int:
    units = args.units or locator.config.default_units
    distance = locator.distance(
        parse_origin_arg(args.origin),
        parse_origin_arg(args.destination),
        units=units,
        formula=args.formula,
    )
    print(f"{distance:.2f} {getattr(units, 'value', units)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Returns:
        Process exit status
    """
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = _build_parser().parse_args(argv)
    logger.info("Running %s command", args.command)

    try:
        locator = Locator(load_config(args.config))
        if args.command == "geocode":
            return _geocode(args, locator)
        return _distance(args, locator)
    except GeoKitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
