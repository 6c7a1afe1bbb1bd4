"""
Configuration for a single crucible search.
"""

import numbers
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from ..errors import InvalidConfigError
from ..grid.cost_grid import CostGrid
from ..grid.direction import Coord

# (min_straight, max_straight) for the two known crucible variants
PRESETS: Dict[str, Tuple[int, int]] = {
    "normal": (1, 3),
    "ultra": (4, 10),
}


def _as_coord(value: Any) -> Any:
    return tuple(value) if isinstance(value, (list, tuple)) else value


def _is_coord(value: Any) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) == 2
        and all(
            isinstance(v, numbers.Integral) and not isinstance(v, bool) for v in value
        )
    )


@dataclass(frozen=True)
class SearchConfig:
    """Start, destination and straight-run limits for one search.

    ``start`` and ``destination`` left as None mean the top-left and
    bottom-right corners of whatever grid the config is resolved against.
    """

    min_straight: int = 1
    max_straight: int = 3
    start: Optional[Coord] = None
    destination: Optional[Coord] = None

    @classmethod
    def preset(
        cls,
        name: str,
        start: Optional[Coord] = None,
        destination: Optional[Coord] = None,
    ) -> "SearchConfig":
        if name not in PRESETS:
            raise InvalidConfigError(
                f"Unknown preset {name!r}; choose one of {sorted(PRESETS)}"
            )
        min_straight, max_straight = PRESETS[name]
        return cls(min_straight, max_straight, start, destination)

    @property
    def is_trivial(self) -> bool:
        """Start equals destination and no straight run is required."""
        return (
            self.start is not None
            and self.start == self.destination
            and self.min_straight == 0
        )

    def resolve(self, grid: CostGrid) -> "SearchConfig":
        """Fill in default corners from the grid."""
        return replace(
            self,
            start=grid.top_left if self.start is None else _as_coord(self.start),
            destination=(
                grid.bottom_right
                if self.destination is None
                else _as_coord(self.destination)
            ),
        )

    def validate(self, grid: CostGrid) -> "SearchConfig":
        """Resolve against the grid and check that the search can be run.

        Returns:
            The resolved config

        Raises:
            InvalidConfigError: on bad run limits or off-grid endpoints
        """
        config = self.resolve(grid)

        if config.min_straight < 0:
            raise InvalidConfigError(
                f"min_straight must be >= 0, got {config.min_straight}"
            )
        if config.min_straight > config.max_straight:
            raise InvalidConfigError(
                f"min_straight ({config.min_straight}) exceeds "
                f"max_straight ({config.max_straight})"
            )
        if config.max_straight < 1 and not config.is_trivial:
            raise InvalidConfigError(
                f"max_straight must be >= 1, got {config.max_straight}"
            )
        for label, position in (
            ("start", config.start),
            ("destination", config.destination),
        ):
            if not _is_coord(position):
                raise InvalidConfigError(
                    f"{label} must be an (x, y) pair of integers, got {position!r}"
                )
            if not grid.in_bounds(position):
                raise InvalidConfigError(
                    f"{label} {position} is outside the "
                    f"{grid.width}x{grid.height} grid"
                )

        return config

    def sort_key(self) -> Tuple:
        return (
            self.start or (-1, -1),
            self.destination or (-1, -1),
            self.min_straight,
            self.max_straight,
        )

    def describe(self) -> str:
        return (
            f"{self.start} to {self.destination} "
            f"straight[{self.min_straight},{self.max_straight}]"
        )
