"""
Min-priority frontier for the crucible search.
"""

import heapq
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..grid.direction import Coord
from .state import SearchState


@dataclass(order=True)
class FrontierEntry:
    """Heap entry ordered by priority, then by state identity.

    The state itself is excluded from comparison; ``tie_break`` carries its
    orderable key so equal-priority pops are deterministic.
    """

    priority: int
    tie_break: Tuple[int, int, int, int]
    state: SearchState = field(compare=False)

    @classmethod
    def of(cls, priority: int, state: SearchState) -> "FrontierEntry":
        return cls(priority, state.sort_key(), state)


class Frontier:
    """Min-heap of ``FrontierEntry``.

    Superseded entries are left in place and discarded lazily by
    ``pop_current``.
    """

    def __init__(self):
        self._heap: List[FrontierEntry] = []
        self.pushes = 0
        self.stale_discarded = 0

    def push(self, priority: int, state: SearchState) -> None:
        self.pushes += 1
        heapq.heappush(self._heap, FrontierEntry.of(priority, state))

    def pop(self) -> FrontierEntry:
        return heapq.heappop(self._heap)

    def pop_current(
        self,
        g_score: Dict[SearchState, int],
        heuristic: Callable[[Coord], int],
    ) -> Optional[FrontierEntry]:
        """Pop the cheapest entry still matching its state's best known cost.

        An entry is stale when a cheaper path to its state was recorded after
        it was pushed, i.e. its priority exceeds ``g + h`` for that state.

        Returns:
            The entry, or None once the frontier is exhausted
        """
        while self._heap:
            entry = self.pop()
            state = entry.state
            if entry.priority > g_score[state] + heuristic(state.position):
                self.stale_discarded += 1
                continue
            return entry
        return None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
