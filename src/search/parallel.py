"""
Run independent crucible searches on a pool of worker processes.

Searches share nothing: each task builds its own solver tables, so results
only need to be collected and reduced.
"""

import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Iterable, List, Optional, Sequence

from tqdm import tqdm

from ..grid.cost_grid import CostGrid
from ..grid.direction import Coord
from .config import SearchConfig
from .logger import logger
from .solver import CrucibleSolver, SearchResult

log = logger.bind(component="parallel")


def _run_search(grid: CostGrid, config: SearchConfig) -> SearchResult:
    return CrucibleSolver(grid).solve(config)


def solve_many(
    grid: CostGrid,
    configs: Sequence[SearchConfig],
    workers: int = 1,
    show_progress: bool = False,
) -> List[SearchResult]:
    """Solve every config against ``grid``.

    Args:
        grid: Shared cost grid
        configs: One search per config
        workers: Number of worker processes; 1 or fewer runs inline
        show_progress: Show a tqdm progress bar

    Returns:
        Results in the same order as ``configs``

    Raises:
        InvalidConfigError: if any config cannot be run on the grid
    """
    configs = list(configs)
    # Fail fast before any work is scheduled
    for config in configs:
        config.validate(grid)

    start_time = time.time()
    results: List[Optional[SearchResult]] = [None] * len(configs)

    with tqdm(
        total=len(configs),
        desc="Searches",
        unit="search",
        leave=False,
        ncols=100,
        disable=not show_progress,
    ) as pbar:
        if workers <= 1:
            for index, config in enumerate(configs):
                results[index] = _run_search(grid, config)
                pbar.update(1)
        else:
            with ProcessPoolExecutor(max_workers=workers) as pool:
                futures = {
                    pool.submit(_run_search, grid, config): index
                    for index, config in enumerate(configs)
                }
                for future in as_completed(futures):
                    results[futures[future]] = future.result()
                    pbar.update(1)

    log.info(
        f"Ran {len(configs)} searches on {max(workers, 1)} worker(s) "
        f"in {(time.time() - start_time):.2f}s"
    )
    return results


def best_result(
    results: Iterable[SearchResult], prefer: str = "min"
) -> Optional[SearchResult]:
    """Pick the cheapest (or most expensive) successful result.

    The choice does not depend on the order of ``results``: ties on cost are
    broken by the config's sort key.

    Returns:
        The chosen result, or None if no search succeeded
    """
    if prefer not in ("min", "max"):
        raise ValueError(f"prefer must be 'min' or 'max', got {prefer!r}")

    found = [result for result in results if result.success]
    if not found:
        return None

    if prefer == "min":
        return min(found, key=lambda r: (r.cost, r.config.sort_key()))
    return max(
        found,
        key=lambda r: (r.cost, _reversed_key(r.config.sort_key())),
    )


def _reversed_key(key) -> tuple:
    # Flip the tie-break so max() still prefers the smallest config key
    flattened = []
    for part in key:
        if isinstance(part, tuple):
            flattened.extend(-value for value in part)
        else:
            flattened.append(-part)
    return tuple(flattened)


def configs_from_origins(
    origins: Iterable[Coord], template: SearchConfig
) -> List[SearchConfig]:
    """One config per origin, sharing the template's destination and limits."""
    return [
        SearchConfig(
            min_straight=template.min_straight,
            max_straight=template.max_straight,
            start=tuple(origin),
            destination=template.destination,
        )
        for origin in origins
    ]
