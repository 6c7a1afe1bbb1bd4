#!/usr/bin/env python3
"""
Crucible Search

Finds the least heat loss path for a crucible across a grid of single digit
costs, where the crucible must move in straight runs of bounded length.
"""

import argparse
import sys
from typing import List, Optional

from src.errors import CrucibleSearchError
from src.grid.cost_grid import CostGrid
from src.grid.direction import Coord
from src.search.config import PRESETS, SearchConfig
from src.search.logger import logger, set_component_level
from src.search.parallel import solve_many
from src.search.solver import SearchResult


def parse_coord(text: str) -> Coord:
    """Parse an "x,y" coordinate."""
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got {text!r}")
    return (x, y)


def build_configs(args: argparse.Namespace) -> List[SearchConfig]:
    if args.min is not None:
        return [SearchConfig(args.min, args.max, args.start, args.dest)]

    names = sorted(PRESETS) if args.preset == "all" else [args.preset]
    return [SearchConfig.preset(name, args.start, args.dest) for name in names]


def print_result(result: SearchResult, show_path: bool) -> None:
    config = result.config
    label = f"straight {config.min_straight}-{config.max_straight}"
    if not result.success:
        print(f"{label}: unreachable ({result.states_expanded} states expanded)")
        return

    print(
        f"{label}: {result.cost} "
        f"({result.states_expanded} states expanded, {result.time_taken_ms:.1f}ms)"
    )
    if show_path:
        print("  " + " -> ".join(f"({x},{y})" for x, y in result.path))


def run(args: argparse.Namespace) -> int:
    cli_log = logger.bind(component="cli")
    if args.verbose:
        set_component_level("solver", "DEBUG")

    try:
        grid = CostGrid.from_file(args.grid_file)
        results = solve_many(grid, build_configs(args), workers=args.workers)
    except CrucibleSearchError as e:
        cli_log.error(str(e))
        return 1
    except OSError as e:
        cli_log.error(f"Could not read {args.grid_file}: {e}")
        return 1

    for result in results:
        print_result(result, args.path)

    return 0 if all(result.success for result in results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Crucible Search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py input.txt                      # Both presets
  python main.py input.txt --preset ultra       # Runs of 4 to 10
  python main.py input.txt --min 2 --max 5      # Custom limits
  python main.py input.txt --start 0,0 --dest 5,5 --path
  python main.py input.txt --workers 2          # Presets in parallel
        """,
    )

    parser.add_argument("grid_file", help="Text file with one row of digits per line")
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS) + ["all"],
        default="all",
        help="Straight-run limits to use",
    )
    parser.add_argument("--min", type=int, default=None, help="Minimum straight run")
    parser.add_argument("--max", type=int, default=None, help="Maximum straight run")
    parser.add_argument(
        "--start", type=parse_coord, default=None, help="Start X,Y (default top left)"
    )
    parser.add_argument(
        "--dest",
        type=parse_coord,
        default=None,
        help="Destination X,Y (default bottom right)",
    )
    parser.add_argument("--path", action="store_true", help="Print the chosen path")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes for running several searches",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show solver debug logging"
    )

    args = parser.parse_args(argv)
    if (args.min is None) != (args.max is None):
        parser.error("--min and --max must be given together")
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
