from enum import Enum
from typing import Tuple

Coord = Tuple[int, int]


class Direction(Enum):
    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def rank(self) -> int:
        """Stable ordering used for deterministic tie-breaking."""
        return _RANKS[self]

    def opposite(self) -> "Direction":
        opposites = {
            Direction.NORTH: Direction.SOUTH,
            Direction.SOUTH: Direction.NORTH,
            Direction.EAST: Direction.WEST,
            Direction.WEST: Direction.EAST,
        }
        return opposites[self]

    def turn_right(self) -> "Direction":
        right_turns = {
            Direction.NORTH: Direction.EAST,
            Direction.EAST: Direction.SOUTH,
            Direction.SOUTH: Direction.WEST,
            Direction.WEST: Direction.NORTH,
        }
        return right_turns[self]

    def turn_left(self) -> "Direction":
        left_turns = {
            Direction.NORTH: Direction.WEST,
            Direction.WEST: Direction.SOUTH,
            Direction.SOUTH: Direction.EAST,
            Direction.EAST: Direction.NORTH,
        }
        return left_turns[self]

    def perpendiculars(self) -> Tuple["Direction", "Direction"]:
        return self.turn_left(), self.turn_right()

    def step(self, position: Coord) -> Coord:
        x, y = position
        return x + self.dx, y + self.dy


_RANKS = {direction: index for index, direction in enumerate(Direction)}
