from dataclasses import dataclass

from ..grid.direction import Coord


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(frozen=True)
class ManhattanHeuristic:
    """Admissible lower bound on the remaining cost to ``destination``.

    Every remaining step enters a cell costing at least ``min_step_cost``,
    and no path covers the Manhattan distance in fewer steps.
    """

    destination: Coord
    min_step_cost: int = 1

    def __post_init__(self):
        if self.min_step_cost < 0:
            raise ValueError(f"min_step_cost must be >= 0, got {self.min_step_cost}")

    def __call__(self, position: Coord) -> int:
        return manhattan(position, self.destination) * self.min_step_cost
