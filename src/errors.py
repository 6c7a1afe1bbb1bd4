"""
Error types shared by the cost grid and the crucible search.
"""


class CrucibleSearchError(Exception):
    """Base class for all grid and search failures."""


class GridParseError(CrucibleSearchError, ValueError):
    """Grid rows of unequal length, or a cell that is not a valid cost."""


class InvalidConfigError(CrucibleSearchError, ValueError):
    """Search configuration that cannot be run against the given grid."""


class UnreachableError(CrucibleSearchError):
    """No path to the destination satisfies the run-length constraints."""

    def __init__(self, config):
        self.config = config
        super().__init__(
            f"Destination {config.destination} is unreachable from {config.start} "
            f"with min_straight={config.min_straight}, "
            f"max_straight={config.max_straight}"
        )
