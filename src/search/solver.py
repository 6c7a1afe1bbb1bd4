"""
A* solver for the crucible search.

Finds the cheapest path across a cost grid where the crucible must travel
at least ``min_straight`` and at most ``max_straight`` cells in a line
before turning, and may never reverse.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import UnreachableError
from ..grid.cost_grid import CostGrid
from ..grid.direction import Coord
from .config import SearchConfig
from .frontier import Frontier
from .heuristic import ManhattanHeuristic
from .logger import logger
from .state import SearchState, successors


@dataclass
class SearchResult:
    """Result of a crucible search."""

    config: SearchConfig
    success: bool
    cost: Optional[int]
    states: List[SearchState] = field(default_factory=list)
    states_expanded: int = 0
    time_taken_ms: float = 0.0

    @property
    def path(self) -> List[Coord]:
        return [state.position for state in self.states]

    def unwrap(self) -> int:
        """Return the cost, raising ``UnreachableError`` if there is none."""
        if not self.success:
            raise UnreachableError(self.config)
        return self.cost


class CrucibleSolver:
    """A* over (position, arrival direction, run length) states."""

    def __init__(self, grid: CostGrid):
        """Initialize solver.

        Args:
            grid: Cost grid, read only for the lifetime of the solver
        """
        self.grid = grid
        self.logger = logger.bind(component="solver")

    def solve(self, config: Optional[SearchConfig] = None) -> SearchResult:
        """Find the minimum total cost from start to destination.

        Args:
            config: Search configuration; defaults to the "normal" limits
                corner to corner

        Returns:
            SearchResult, with ``success=False`` when no legal path exists

        Raises:
            InvalidConfigError: if the config cannot be run on this grid
        """
        start_time = time.time()
        config = (config or SearchConfig()).validate(self.grid)
        search_log = self.logger.bind(search_id=config.describe())

        if config.start == config.destination and config.min_straight > 0:
            search_log.warning(
                "Start equals destination with min_straight > 0; "
                "the empty path is not accepted, a loop back is required"
            )

        heuristic = ManhattanHeuristic(config.destination, self.grid.min_cost)
        start = SearchState.start(config.start)

        g_score: Dict[SearchState, int] = {start: 0}
        came_from: Dict[SearchState, SearchState] = {}
        frontier = Frontier()
        frontier.push(heuristic(start.position), start)
        expanded = 0

        search_log.debug("Starting search")

        while True:
            entry = frontier.pop_current(g_score, heuristic)
            if entry is None:
                break
            state = entry.state
            current_g = g_score[state]
            expanded += 1

            if state.position == config.destination and state.can_stop(
                config.min_straight
            ):
                elapsed_ms = (time.time() - start_time) * 1000
                search_log.debug(
                    f"Found cost {current_g} after {expanded} expansions "
                    f"({frontier.pushes} pushes) in {elapsed_ms:.1f}ms"
                )
                return SearchResult(
                    config=config,
                    success=True,
                    cost=current_g,
                    states=self._reconstruct(came_from, state),
                    states_expanded=expanded,
                    time_taken_ms=elapsed_ms,
                )

            for _, next_state in successors(
                state, config.min_straight, config.max_straight, self.grid.in_bounds
            ):
                tentative_g = current_g + self.grid.cost(next_state.position)
                if tentative_g < g_score.get(next_state, float("inf")):
                    g_score[next_state] = tentative_g
                    came_from[next_state] = state
                    frontier.push(
                        tentative_g + heuristic(next_state.position), next_state
                    )

        # No path found
        elapsed_ms = (time.time() - start_time) * 1000
        search_log.info(
            f"Destination unreachable after {expanded} expansions "
            f"in {elapsed_ms:.1f}ms"
        )
        return SearchResult(
            config=config,
            success=False,
            cost=None,
            states_expanded=expanded,
            time_taken_ms=elapsed_ms,
        )

    def _reconstruct(
        self, came_from: Dict[SearchState, SearchState], end: SearchState
    ) -> List[SearchState]:
        states = [end]
        while states[-1] in came_from:
            states.append(came_from[states[-1]])
        states.reverse()
        return states


def search(grid: CostGrid, config: Optional[SearchConfig] = None) -> SearchResult:
    """Run one crucible search on ``grid``."""
    return CrucibleSolver(grid).solve(config)
