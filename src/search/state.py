"""
Augmented search state and the straight-run transition rules.

A grid position alone is not enough to search on: whether a move is legal
depends on the direction the crucible arrived from and how many cells it has
already travelled in that direction.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple

from ..grid.direction import Coord, Direction


@dataclass(frozen=True)
class SearchState:
    position: Coord
    direction: Optional[Direction] = None
    run_length: int = 0

    @classmethod
    def start(cls, position: Coord) -> "SearchState":
        return cls(tuple(position), None, 0)

    @property
    def is_start(self) -> bool:
        return self.direction is None

    def sort_key(self) -> Tuple[int, int, int, int]:
        x, y = self.position
        rank = -1 if self.direction is None else self.direction.rank
        return (x, y, rank, self.run_length)

    def can_stop(self, min_straight: int) -> bool:
        """Whether the current run is long enough to end the path here."""
        return self.run_length >= min_straight

    def moved(self, direction: Direction) -> "SearchState":
        if direction == self.direction:
            run_length = self.run_length + 1
        else:
            run_length = 1
        return SearchState(direction.step(self.position), direction, run_length)


def legal_directions(
    state: SearchState, min_straight: int, max_straight: int
) -> Iterator[Direction]:
    """Directions the crucible may leave ``state`` in, ignoring grid bounds."""
    if state.direction is None:
        yield from Direction
        return

    if state.run_length < max_straight:
        yield state.direction
    if state.run_length >= min_straight:
        yield from state.direction.perpendiculars()


def successors(
    state: SearchState,
    min_straight: int,
    max_straight: int,
    in_bounds: Callable[[Coord], bool],
) -> Iterator[Tuple[Direction, SearchState]]:
    """Yield ``(direction, next_state)`` for every legal on-grid move.

    Reversal is never produced: the opposite direction is neither the
    current direction nor one of its perpendiculars.
    """
    for direction in legal_directions(state, min_straight, max_straight):
        next_state = state.moved(direction)
        if in_bounds(next_state.position):
            yield direction, next_state
