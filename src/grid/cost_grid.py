"""
Immutable cost grid for the crucible search.

Costs are stored row-major in a read-only numpy array of shape
``(height, width)``; coordinates are ``(x, y)``.
"""

from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

import numpy as np

from ..errors import GridParseError
from .direction import Coord

MIN_DIGIT_COST = 1
MAX_DIGIT_COST = 9
DIGITS = "123456789"


class CostGrid:
    def __init__(self, costs: Any):
        try:
            raw = np.array(costs)
        except ValueError as e:
            raise GridParseError(f"Cost grid rows must be equal length: {e}") from e

        if raw.ndim != 2 or raw.size == 0:
            raise GridParseError(
                f"Cost grid must be a non-empty 2-D array, got shape {raw.shape}"
            )
        if raw.dtype.kind not in "iuf":
            raise GridParseError(f"Cost grid values must be numbers, got {raw.dtype}")
        if not np.all(np.isfinite(raw)):
            raise GridParseError("Cost grid values must be finite")

        array = raw.astype(int)
        if not np.array_equal(raw, array):
            y, x = np.argwhere(raw != array)[0]
            raise GridParseError(
                f"Cell ({x}, {y}) has cost {raw[y, x]}; costs must be whole numbers"
            )
        if np.any(array < MIN_DIGIT_COST):
            y, x = np.argwhere(array < MIN_DIGIT_COST)[0]
            raise GridParseError(
                f"Cell ({x}, {y}) has cost {array[y, x]}; costs must be positive"
            )

        array.setflags(write=False)
        self._costs = array
        self.height, self.width = array.shape

    @classmethod
    def from_lines(cls, rows: Iterable[str]) -> "CostGrid":
        """Build a grid from rows of digit characters.

        Args:
            rows: One string per row, each character a cost digit 1-9

        Returns:
            CostGrid

        Raises:
            GridParseError: if rows differ in length or contain a bad character
        """
        parsed: List[List[int]] = []
        width = None

        for y, row in enumerate(rows):
            row = row.rstrip("\r\n")
            if width is None:
                width = len(row)
            elif len(row) != width:
                raise GridParseError(
                    f"Row {y} has length {len(row)}, expected {width}"
                )

            values = []
            for x, char in enumerate(row):
                if char not in DIGITS:
                    raise GridParseError(
                        f"Invalid cost character {char!r} at ({x}, {y}); "
                        f"expected a digit {MIN_DIGIT_COST}-{MAX_DIGIT_COST}"
                    )
                values.append(int(char))
            parsed.append(values)

        if not parsed or width == 0:
            raise GridParseError("Cost grid is empty")

        return cls(parsed)

    @classmethod
    def from_text(cls, text: str) -> "CostGrid":
        """Build a grid from newline separated rows, ignoring trailing blank lines."""
        return cls.from_lines(text.rstrip("\r\n").splitlines())

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CostGrid":
        return cls.from_text(Path(path).read_text())

    @property
    def costs(self) -> np.ndarray:
        return self._costs

    @property
    def min_cost(self) -> int:
        """Cheapest single cell on the grid, the floor for any one step."""
        return int(self._costs.min())

    @property
    def top_left(self) -> Coord:
        return (0, 0)

    @property
    def bottom_right(self) -> Coord:
        return (self.width - 1, self.height - 1)

    def in_bounds(self, position: Coord) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def cost(self, position: Coord) -> Optional[int]:
        if not self.in_bounds(position):
            return None
        x, y = position
        return int(self._costs[y, x])

    def path_cost(self, path: Iterable[Coord]) -> int:
        """Sum of entry costs along a path; the first cell is free."""
        cells = list(path)
        return sum(self.cost(position) for position in cells[1:])

    def to_lines(self) -> List[str]:
        return ["".join(str(value) for value in row) for row in self._costs.tolist()]

    def __str__(self) -> str:
        return "\n".join(self.to_lines())

    def __repr__(self) -> str:
        return f"CostGrid(width={self.width}, height={self.height})"
