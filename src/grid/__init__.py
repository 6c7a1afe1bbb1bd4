"""
Cost grid and compass directions for the crucible search.
"""

from .cost_grid import CostGrid
from .direction import Coord, Direction

__all__ = ["CostGrid", "Coord", "Direction"]
