#!/usr/bin/env python3
"""
Sweep straight-run limits (or start positions) over one grid in parallel.

Writes one CSV row per search and reports the best result.
"""

import argparse
import csv
import sys
from pathlib import Path
from typing import Dict, List

# Add parent directory to path to import src modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.grid.cost_grid import CostGrid
from src.search.config import SearchConfig
from src.search.parallel import best_result, configs_from_origins, solve_many
from src.search.solver import SearchResult


def limit_configs(max_min: int, max_max: int) -> List[SearchConfig]:
    """Every (min, max) pair with 1 <= min <= max <= max_max and min <= max_min."""
    return [
        SearchConfig(min_straight, max_straight)
        for min_straight in range(1, max_min + 1)
        for max_straight in range(min_straight, max_max + 1)
    ]


def result_row(result: SearchResult) -> Dict:
    config = result.config
    return {
        "start": f"{config.start[0]},{config.start[1]}",
        "destination": f"{config.destination[0]},{config.destination[1]}",
        "min_straight": config.min_straight,
        "max_straight": config.max_straight,
        "cost": result.cost if result.success else "",
        "states_expanded": result.states_expanded,
        "time_ms": f"{result.time_taken_ms:.1f}",
    }


def main():
    parser = argparse.ArgumentParser(
        description="Sweep crucible search limits or origins over one grid"
    )
    parser.add_argument("grid_file", help="Text file with one row of digits per line")
    parser.add_argument(
        "--output", type=str, default="sweep.csv", help="Output CSV file"
    )
    parser.add_argument("--workers", type=int, default=4, help="Worker processes")
    parser.add_argument(
        "--max-min", type=int, default=4, help="Largest min_straight to try"
    )
    parser.add_argument(
        "--max-max", type=int, default=10, help="Largest max_straight to try"
    )
    parser.add_argument(
        "--origins",
        action="store_true",
        help="Instead of sweeping limits, search from every cell of the top row",
    )
    parser.add_argument(
        "--prefer",
        choices=["min", "max"],
        default="min",
        help="Which result to report as best",
    )

    args = parser.parse_args()

    grid = CostGrid.from_file(args.grid_file)
    if args.origins:
        configs = configs_from_origins(
            [(x, 0) for x in range(grid.width)], SearchConfig()
        )
    else:
        configs = limit_configs(args.max_min, args.max_max)

    results = solve_many(grid, configs, workers=args.workers, show_progress=True)

    fieldnames = [
        "start",
        "destination",
        "min_straight",
        "max_straight",
        "cost",
        "states_expanded",
        "time_ms",
    ]
    with open(args.output, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for result in results:
            writer.writerow(result_row(result))

    best = best_result(results, prefer=args.prefer)
    print(f"Wrote {len(results)} rows to {args.output}")
    if best is None:
        print("No search reached the destination")
    else:
        print(f"Best ({args.prefer}): {best.cost} with {best.config.describe()}")


if __name__ == "__main__":
    main()
