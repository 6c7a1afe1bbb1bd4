"""
Crucible search: A* over a cost grid with straight-run limits.
"""

from .config import PRESETS, SearchConfig
from .parallel import best_result, configs_from_origins, solve_many
from .solver import CrucibleSolver, SearchResult, search
from .state import SearchState, successors

__all__ = [
    "PRESETS",
    "SearchConfig",
    "CrucibleSolver",
    "SearchResult",
    "SearchState",
    "search",
    "successors",
    "solve_many",
    "best_result",
    "configs_from_origins",
]
