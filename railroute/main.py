"""
Railway route planner - Main entry point.

Usage:
    python -m railroute.main GSG-001 GSG-007
    python -m railroute.main GSG-001 GSG-007 --via GSG-005
    python -m railroute.main A B --db data/railway.sqlite
    python -m railroute.main --help
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from railroute.network import (
    DecodeError,
    InMemoryNetworkRepository,
    SqliteNetworkRepository,
    load_line_artifact,
    railway_from_artifact,
    seed_repository,
)
from railroute.pathfinding import RoutePlanner

# Default data paths
DATA_DIR = Path(__file__).parent / "data"
DEFAULT_LINE_FILE = DATA_DIR / "guangshengang-line.json"


def build_repository(args: argparse.Namespace):
    """Open the SQLite database, or seed an in-memory network from line artifacts."""
    if args.db:
        repository = SqliteNetworkRepository(args.db)
    else:
        repository = InMemoryNetworkRepository()

    for line_file in args.line:
        artifact = load_line_artifact(line_file)
        railway = railway_from_artifact(artifact, railway_id=args.railway_id)
        seed_repository(repository, artifact, railway)

    return repository


def print_route(planner: RoutePlanner, start: str, end: str, via: list[str]) -> bool:
    """Print distances and path; return whether a route was found."""
    direct = planner.straight_line_distance(start, end)
    if direct is not None:
        print(f"Straight-line Distance: {direct} km")

    outcome = planner.plan(start, end, via)
    if not outcome.found:
        print("No path found.")
        print(f"  ({outcome.error})", file=sys.stderr)
        return False

    route = outcome.route
    print(f"Railway Distance: {round(route.total_distance, 2)} km")
    print("Path:")
    for step in route.path_description:
        print(f" - {step}")
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Find the shortest railway route between two stations"
    )
    parser.add_argument("start", help="Departure station id")
    parser.add_argument("end", help="Arrival station id")
    parser.add_argument(
        "--via",
        action="append",
        default=[],
        help="Station id to pass through (repeatable, in order)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        help="SQLite database with stations and railways",
    )
    parser.add_argument(
        "--line",
        type=Path,
        action="append",
        help=f"Line artifact JSON to load (default: {DEFAULT_LINE_FILE.name} without --db)",
    )
    parser.add_argument(
        "--railway-id",
        help="Railway id for artifacts that do not name their railway",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.line is None:
        args.line = [] if args.db else [DEFAULT_LINE_FILE]

    for line_file in args.line:
        if not line_file.exists():
            print(f"Error: Line file not found: {line_file}", file=sys.stderr)
            return 1

    try:
        repository = build_repository(args)
    except (DecodeError, json.JSONDecodeError) as e:
        print(f"Error: Invalid line file: {e}", file=sys.stderr)
        return 1

    planner = RoutePlanner(repository)
    return 0 if print_route(planner, args.start, args.end, args.via) else 1


if __name__ == "__main__":
    sys.exit(main())
