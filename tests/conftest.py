import pytest

from src.grid.cost_grid import CostGrid

SAMPLE = """\
2413432311323
3215453535623
3255245654254
3446585845452
4546657867536
1438598798454
4457876987766
3637877979653
4654967986887
4564679986453
1224686865563
2546548887735
4322674655533
"""

# Ultra crucibles cannot take the cheap top row all the way: they would
# have to turn after fewer than four steps at the corner.
LONG_RUN_SAMPLE = """\
111111111111
999999999991
999999999991
999999999991
999999999991
"""


@pytest.fixture
def sample_grid():
    return CostGrid.from_text(SAMPLE)


@pytest.fixture
def long_run_grid():
    return CostGrid.from_text(LONG_RUN_SAMPLE)


@pytest.fixture
def sample_text():
    return SAMPLE
