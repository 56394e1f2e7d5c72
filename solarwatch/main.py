"""
SOLARWATCH Command Line Entry Point

Prints sunrise, sunset and daylight length for the configured site or for
coordinates given on the command line.

Usage:
    solarwatch                              # rise, set and daylight today
    solarwatch rise --lat 39.1371 --lon -88.65 --timezone America/Chicago
    solarwatch set --date 2016-12-25 --zenith civil
    solarwatch all --json

Entry Points:
    - CLI: `solarwatch` command (via pyproject.toml)
    - Direct: `python -m solarwatch.main`
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from typing import Optional, Sequence

from solarwatch import __version__
from solarwatch.config import SolarWatchConfig, load_config
from solarwatch.exceptions import (
    ConfigurationError,
    InvalidZenithError,
    SolarWatchError,
    SunNeverCrossesZenithError,
    TimezoneResolutionError,
)
from solarwatch.logging_config import get_logger, setup_logging

from services.solar import EventOptions, SolarEventCalculator, zenith_degrees

__all__ = ["main", "create_parser", "run"]

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_EVENT = 3

COMMANDS = ("rise", "set", "daylight", "all")


# =============================================================================
# Argument Parser
# =============================================================================


def _parse_date(value: str) -> date:
    if value == "today":
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from None


def _parse_zenith(value: str) -> float | str:
    try:
        zenith: float | str = float(value)
    except ValueError:
        zenith = value
    try:
        zenith_degrees(zenith)
    except InvalidZenithError as e:
        raise argparse.ArgumentTypeError(e.message) from None
    return zenith


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="solarwatch",
        description="Sunrise, sunset and twilight times",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=COMMANDS,
        default="all",
        help="Event to compute (default: all)",
    )

    # Location and options
    parser.add_argument("--lat", type=float, metavar="DEG", help="Latitude, north positive")
    parser.add_argument("--lon", type=float, metavar="DEG", help="Longitude, east positive")
    parser.add_argument(
        "--date",
        type=_parse_date,
        metavar="YYYY-MM-DD",
        help="Local calendar date (default: today)",
    )
    parser.add_argument(
        "--zenith",
        type=_parse_zenith,
        metavar="NAME|DEG",
        help="official, civil, nautical, astronomical or degrees",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        metavar="TZ",
        help="IANA timezone (default: config, then system)",
    )

    # Configuration
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file (default: auto-discover)",
    )

    # Logging
    parser.add_argument(
        "-l",
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (overrides config file)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Path to log file (default: stdout only)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )

    return parser


def build_options(args: argparse.Namespace, config: SolarWatchConfig) -> EventOptions:
    """Merge command line values over the configuration."""
    return EventOptions(
        date=args.date,
        zenith=args.zenith if args.zenith is not None else config.events.zenith,
        timezone=args.timezone or config.site.timezone,
    )


# =============================================================================
# Main Entry Points
# =============================================================================


def run(
    args: argparse.Namespace,
    config: SolarWatchConfig,
    calculator: Optional[SolarEventCalculator] = None,
) -> int:
    """Compute and print the requested events.

    Returns:
        Exit code
    """
    calculator = calculator or SolarEventCalculator()
    location = (
        args.lat if args.lat is not None else config.site.latitude,
        args.lon if args.lon is not None else config.site.longitude,
    )
    options = build_options(args, config)

    try:
        if args.command in ("rise", "set"):
            value = calculator.calculate(args.command, location, options)
            output = {args.command: value.isoformat()}
        else:
            times = calculator.sun_times(location, options)
            output = times.to_dict()
            if args.command == "daylight":
                output = {"daylight": output["daylight"]}
    except SunNeverCrossesZenithError as e:
        logger.info(f"No event: {e}")
        print(f"No {args.command} on this date: {e.message}", file=sys.stderr)
        return EXIT_NO_EVENT
    except TimezoneResolutionError as e:
        logger.error(f"Timezone error: {e}")
        print(f"Timezone error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(output))
    else:
        for key, value in output.items():
            print(f"{key}: {value}")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the SOLARWATCH command.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(log_level=args.log_level or "WARNING", log_file=args.log_file)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    # Apply log level from config if not overridden
    if args.log_level is None:
        setup_logging(log_level=config.log_level, log_file=args.log_file or config.log_file)

    try:
        return run(args, config)
    except SolarWatchError as e:
        logger.error(f"SOLARWATCH error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
