"""Command-line helper for querying GO departures from a terminal."""

import asyncio
import json
import sys
from typing import Any

import aiohttp

from go_departures.adapters.config import AppConfig
from go_departures.adapters.serializers import (
    alert_to_dict,
    departure_to_dict,
    journey_to_dict,
    line_to_dict,
    station_to_dict,
)
from go_departures.application.services import JourneyService
from go_departures.domain.errors import MissingCredentialError, TransitError
from go_departures.domain.models import Departure, JourneyResult
from go_departures.wiring import build_service, configure_logging


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def format_departure(departure: Departure) -> str:
    """Format a departure as one human-readable line."""
    time_part = departure.departure_time[11:16] or departure.departure_time
    status = departure.status.replace("_", " ")
    if departure.delay:
        status += f" ({departure.delay:+d} min)"
    platform = f"  platform {departure.platform}" if departure.platform else ""
    return (
        f"  {time_part}  {departure.line:<16} trip {departure.trip_number:<6} {status}{platform}"
    )


def print_journey(result: JourneyResult, origin: str, destination: str) -> None:
    """Print a journey result as text."""
    if result.is_failed:
        print(f"Journey data temporarily unavailable for {origin} -> {destination}.")
        return

    if not result.departures:
        print(f"No upcoming service from {origin} to {destination}.")
    else:
        print(f"\n{len(result.departures)} departure(s) {origin} -> {destination}:\n")
        for departure in result.departures:
            print(format_departure(departure))

    for alert in result.alerts:
        print(f"\n  [{alert.severity.upper()}] {alert.title}")


async def _handle_journey_command(service: JourneyService, args: Any) -> int:
    result = await service.get_journey(args.origin, args.destination)
    if args.json:
        _print_json(journey_to_dict(result))
    else:
        print_journey(result, args.origin, args.destination)
    return 1 if result.is_failed else 0


async def _handle_departures_command(service: JourneyService, args: Any) -> int:
    departures = await service.get_stop_departures(args.stop, limit=args.limit)
    if args.json:
        _print_json([departure_to_dict(d) for d in departures])
    elif not departures:
        print(f"No upcoming departures at {args.stop}.")
    else:
        for departure in departures:
            print(format_departure(departure))
    return 0


async def _handle_alerts_command(service: JourneyService, args: Any) -> int:
    alerts = await service.get_alerts()
    if args.json:
        _print_json([alert_to_dict(a) for a in alerts])
    else:
        if not alerts:
            print("No active service alerts.")
        for alert in alerts:
            print(f"[{alert.severity.upper()}] {alert.title}")
            if alert.affected_routes:
                print(f"    Affects: {', '.join(alert.affected_routes)}")
    return 0


async def _handle_stations_command(service: JourneyService, args: Any) -> int:
    stations = await service.get_stations()
    if args.json:
        _print_json([station_to_dict(s) for s in stations])
    else:
        for station in stations:
            print(f"  {station.code:<6} {station.name}")
    return 0


def _handle_lines_command(service: JourneyService, args: Any) -> int:
    if args.station:
        lines = service.topology.lines_for_station(args.station)
        if not lines:
            print(f"No lines call at {args.station}", file=sys.stderr)
            return 1
    else:
        lines = service.topology.lines
    if args.json:
        _print_json([line_to_dict(line) for line in lines])
    else:
        for line in lines:
            print(f"{line.id:<4} {line.name}: {' '.join(line.station_codes)}")
    return 0


def _setup_argparse() -> Any:
    """Set up and configure argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description="GO Transit departures helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Departures from Burlington to Union Station with live status
  go-departures journey BU UN

  # Next live departures at a stop
  go-departures departures UN --limit 5

  # Active service alerts
  go-departures alerts

Requires METROLINX_API_KEY in the environment or a .env file (except 'lines').
        """,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    journey_parser = subparsers.add_parser("journey", help="Departures between two stations")
    journey_parser.add_argument("origin", help="Origin station code (e.g., BU)")
    journey_parser.add_argument("destination", help="Destination station code (e.g., UN)")
    journey_parser.add_argument("--json", action="store_true", help="Output as JSON")

    departures_parser = subparsers.add_parser("departures", help="Live departures at a stop")
    departures_parser.add_argument("stop", help="Stop code (e.g., UN)")
    departures_parser.add_argument("--limit", type=int, default=10, help="Maximum departures")
    departures_parser.add_argument("--json", action="store_true", help="Output as JSON")

    alerts_parser = subparsers.add_parser("alerts", help="Active service alerts")
    alerts_parser.add_argument("--json", action="store_true", help="Output as JSON")

    stations_parser = subparsers.add_parser("stations", help="Station directory")
    stations_parser.add_argument("--json", action="store_true", help="Output as JSON")

    lines_parser = subparsers.add_parser("lines", help="Built-in line topology")
    lines_parser.add_argument("--station", help="Only lines calling at this station code")
    lines_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


async def _execute_command(args: Any) -> int:
    """Execute the appropriate command based on args."""
    config = AppConfig()
    async with aiohttp.ClientSession() as session:
        service = build_service(config, session)
        if args.command == "lines":
            return _handle_lines_command(service, args)
        if args.command == "journey":
            return await _handle_journey_command(service, args)
        if args.command == "departures":
            return await _handle_departures_command(service, args)
        if args.command == "alerts":
            return await _handle_alerts_command(service, args)
        return await _handle_stations_command(service, args)


async def main() -> None:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        exit_code = await _execute_command(args)
    except MissingCredentialError:
        print("Error: METROLINX_API_KEY is not configured.", file=sys.stderr)
        sys.exit(2)
    except TransitError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
