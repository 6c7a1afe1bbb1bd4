import math

import numpy as np
import pytest

from src.errors import InvalidConfigError, UnreachableError
from src.grid.cost_grid import CostGrid
from src.search.config import SearchConfig
from src.search.heuristic import ManhattanHeuristic
from src.search.solver import CrucibleSolver, search
from src.search.state import SearchState, successors


def random_grid(seed, width=5, height=4, low=1, high=9):
    rng = np.random.default_rng(seed)
    return CostGrid(rng.integers(low, high + 1, size=(height, width)))


def exhaustive_remaining_costs(grid, config):
    """Cheapest remaining cost from every reachable state, by relaxing to a fixed point."""
    config = config.validate(grid)
    start = SearchState.start(config.start)

    reachable = {start}
    edges = {}
    pending = [start]
    while pending:
        state = pending.pop()
        edges[state] = [
            next_state
            for _, next_state in successors(
                state, config.min_straight, config.max_straight, grid.in_bounds
            )
        ]
        for next_state in edges[state]:
            if next_state not in reachable:
                reachable.add(next_state)
                pending.append(next_state)

    remaining = {
        state: (
            0
            if state.position == config.destination
            and state.can_stop(config.min_straight)
            else math.inf
        )
        for state in reachable
    }
    changed = True
    while changed:
        changed = False
        for state in reachable:
            for next_state in edges[state]:
                candidate = grid.cost(next_state.position) + remaining[next_state]
                if candidate < remaining[state]:
                    remaining[state] = candidate
                    changed = True
    return remaining, start


def cost_or_inf(grid, config):
    result = search(grid, config)
    return result.cost if result.success else math.inf


class TestSampleGrid:
    def test_normal_crucible(self, sample_grid):
        result = search(sample_grid, SearchConfig(min_straight=1, max_straight=3))
        assert result.success is True
        assert result.cost == 102

    def test_ultra_crucible(self, sample_grid):
        result = search(sample_grid, SearchConfig(min_straight=4, max_straight=10))
        assert result.success is True
        assert result.cost == 94

    def test_zero_min_straight_matches_one(self, sample_grid):
        assert search(sample_grid, SearchConfig(0, 3)).cost == 102

    def test_ultra_must_finish_on_full_run(self, long_run_grid):
        assert search(long_run_grid, SearchConfig.preset("ultra")).cost == 71

    def test_default_config_is_normal_corner_to_corner(self, sample_grid):
        result = CrucibleSolver(sample_grid).solve()
        assert result.cost == 102
        assert result.config.start == (0, 0)
        assert result.config.destination == (12, 12)

    def test_deterministic(self, sample_grid):
        first = search(sample_grid, SearchConfig(4, 10))
        second = search(sample_grid, SearchConfig(4, 10))
        assert first.states == second.states
        assert first.states_expanded == second.states_expanded


class TestPathReconstruction:
    @pytest.mark.parametrize("limits", [(1, 3), (4, 10), (2, 5)])
    def test_path_cost_matches_reported_cost(self, sample_grid, limits):
        result = search(sample_grid, SearchConfig(*limits))
        assert result.path[0] == (0, 0)
        assert result.path[-1] == (12, 12)
        assert sample_grid.path_cost(result.path) == result.cost

    @pytest.mark.parametrize("limits", [(1, 3), (4, 10)])
    def test_path_respects_run_limits(self, sample_grid, limits):
        min_straight, max_straight = limits
        states = search(sample_grid, SearchConfig(*limits)).states

        assert states[0].is_start
        for prev, state in zip(states, states[1:]):
            assert state == prev.moved(state.direction)
            assert state.run_length <= max_straight
            if not prev.is_start and state.direction != prev.direction:
                assert prev.run_length >= min_straight
                assert state.direction != prev.direction.opposite()
        assert states[-1].run_length >= min_straight


class TestEdgeCases:
    def test_single_cell_trivial(self):
        grid = CostGrid.from_lines(["7"])
        result = search(grid, SearchConfig(min_straight=0, max_straight=3))
        assert result.success is True
        assert result.cost == 0
        assert result.path == [(0, 0)]

    def test_single_cell_zero_limits(self):
        grid = CostGrid.from_lines(["7"])
        assert search(grid, SearchConfig(0, 0)).unwrap() == 0

    def test_grid_too_small_for_min_straight(self):
        grid = CostGrid.from_lines(["11", "11"])
        result = search(grid, SearchConfig(min_straight=5, max_straight=10))
        assert result.success is False
        assert result.cost is None
        assert result.path == []
        assert result.states_expanded > 0

    def test_unwrap_unreachable_raises(self):
        grid = CostGrid.from_lines(["11", "11"])
        result = search(grid, SearchConfig(5, 10))
        with pytest.raises(UnreachableError, match="unreachable"):
            result.unwrap()

    def test_start_equals_destination_requires_loop(self):
        grid = CostGrid.from_lines(["11", "11"])
        config = SearchConfig(1, 3, start=(0, 0), destination=(0, 0))
        result = search(grid, config)
        assert result.cost == 4
        assert result.path[0] == result.path[-1] == (0, 0)

    def test_single_cell_with_min_straight_is_unreachable(self):
        grid = CostGrid.from_lines(["5"])
        assert search(grid, SearchConfig(1, 3)).success is False

    def test_single_row(self):
        grid = CostGrid.from_lines(["12345"])
        assert search(grid, SearchConfig(1, 4)).cost == 14
        assert search(grid, SearchConfig(1, 3)).success is False
        assert search(grid, SearchConfig(4, 4)).cost == 14
        assert search(grid, SearchConfig(5, 5)).success is False

    def test_custom_endpoints(self, sample_grid):
        config = SearchConfig(1, 3, start=(12, 12), destination=(0, 0))
        result = search(sample_grid, config)
        assert result.path[0] == (12, 12)
        assert result.path[-1] == (0, 0)
        assert sample_grid.path_cost(result.path) == result.cost

    def test_invalid_config_raises_before_search(self, sample_grid):
        with pytest.raises(InvalidConfigError):
            search(sample_grid, SearchConfig(4, 3))
        with pytest.raises(InvalidConfigError):
            search(sample_grid, SearchConfig(1, 3, destination=(13, 0)))


class TestOptimality:
    @pytest.mark.parametrize("seed", range(6))
    @pytest.mark.parametrize("limits", [(1, 3), (2, 4), (0, 2)])
    def test_matches_exhaustive_search(self, seed, limits):
        grid = random_grid(seed)
        config = SearchConfig(*limits)
        remaining, start = exhaustive_remaining_costs(grid, config)
        assert cost_or_inf(grid, config) == remaining[start]

    @pytest.mark.parametrize("seed", range(4))
    @pytest.mark.parametrize("limits", [(1, 3), (2, 3)])
    def test_heuristic_is_admissible(self, seed, limits):
        grid = random_grid(seed, low=2, high=6)
        config = SearchConfig(*limits).validate(grid)
        h = ManhattanHeuristic(config.destination, grid.min_cost)
        remaining, _ = exhaustive_remaining_costs(grid, config)

        for state, cost in remaining.items():
            assert h(state.position) <= cost

    @pytest.mark.parametrize("seed", range(4))
    def test_monotonic_in_min_straight(self, seed):
        grid = random_grid(seed, width=6, height=6)
        costs = [cost_or_inf(grid, SearchConfig(m, 5)) for m in range(0, 6)]
        assert costs == sorted(costs)

    @pytest.mark.parametrize("seed", range(4))
    def test_monotonic_in_max_straight(self, seed):
        grid = random_grid(seed, width=6, height=6)
        costs = [cost_or_inf(grid, SearchConfig(2, m)) for m in range(2, 7)]
        assert costs == sorted(costs, reverse=True)

    def test_sample_monotonic_in_min_straight(self, sample_grid):
        costs = [cost_or_inf(sample_grid, SearchConfig(m, 10)) for m in range(1, 6)]
        assert costs == sorted(costs)
        assert costs[3] == 94
