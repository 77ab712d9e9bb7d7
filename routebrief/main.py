"""Main application module."""
import argparse
import logging
import sys
from typing import List, Optional

from routebrief.airport_directory import AirportDirectory
from routebrief.config import Config
from routebrief.exceptions import RouteBriefError
from routebrief.models.flight import Flight
from routebrief.notam_client import NoticeApiClient
from routebrief.parser import NoticeRecordParser

logger = logging.getLogger(__name__)


def configure_logging(level: str = Config.LOG_LEVEL):
    """Configure logging from environment."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-20s | %(filename)-15s | %(funcName)-15s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def run_route(args: argparse.Namespace, directory: Optional[AirportDirectory] = None) -> int:
    """Print the great-circle route between two airports."""
    if directory is None:
        directory = AirportDirectory(args.csv)

    flight = Flight(
        directory.lookup(args.departure),
        directory.lookup(args.arrival),
        interval_miles=args.interval,
    )

    logger.info(
        f"{flight.departure_airport} -> {flight.arrival_airport}: "
        f"{flight.distance_miles:.1f} mi, {len(flight.flight_path)} point(s)"
    )
    for point in flight.flight_path:
        print(f"{point.latitude:.6f},{point.longitude:.6f}")
    return 0


def run_notams(args: argparse.Namespace, client: Optional[NoticeApiClient] = None) -> int:
    """Fetch NOTAMs for an ICAO code or a radius and print their summaries."""
    if client is None:
        Config.validate()
        client = NoticeApiClient.from_config()

    if args.icao:
        raw_json = client.fetch_by_icao(args.icao, args.page_size, args.page_num)
    else:
        raw_json = client.fetch_by_location(args.lat, args.lon, args.radius,
                                            args.page_size, args.page_num)

    result = NoticeRecordParser().parse(raw_json)

    for record in result.records:
        print(record.summary())
        print()

    for failure in result.failures:
        logger.warning(f"Item {failure.index} ({failure.notice_id or 'no id'}): {failure.reason}")

    logger.info(f"{len(result.records)} NOTAM(s), {len(result.failures)} failure(s)")
    return 0 if result.records or not result.failures else 1


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Great-circle routes and NOTAM retrieval')
    subparsers = parser.add_subparsers(dest='command', required=True)

    route = subparsers.add_parser('route', help='Interpolate a route between two airports')
    route.add_argument('departure', help='Departure ICAO code')
    route.add_argument('arrival', help='Arrival ICAO code')
    route.add_argument('--interval', type=float, default=Config.ROUTE_INTERVAL_MILES,
                       help='Spacing between points in statute miles')
    route.add_argument('--csv', type=str,
                       help='Path to airports CSV (default: from config)')

    notams = subparsers.add_parser('notams', help='Fetch NOTAMs from the FAA NOTAM API')
    target = notams.add_mutually_exclusive_group(required=True)
    target.add_argument('--icao', type=str, help='ICAO location code')
    target.add_argument('--lat', type=float, help='Latitude (requires --lon and --radius)')
    notams.add_argument('--lon', type=float, help='Longitude')
    notams.add_argument('--radius', type=float, help='Radius in nautical miles')
    notams.add_argument('--page-size', type=int, default=Config.NOTAM_PAGE_SIZE)
    notams.add_argument('--page-num', type=int, default=1)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    configure_logging()
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.command == 'notams' and args.lat is not None and (args.lon is None or args.radius is None):
        parser.error('--lat requires --lon and --radius')

    try:
        if args.command == 'route':
            return run_route(args)
        return run_notams(args)
    except (RouteBriefError, ValueError, FileNotFoundError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
