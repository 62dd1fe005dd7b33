"""Binary min-heap used as the open set of the travel pathfinder.

Entries are ordered by priority, then by insertion order, so values with
equal priority come out first-in first-out. The pathfinder relies on
this for deterministic results between equal-cost routes.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class MinHeap(Generic[T]):
    """Min-heap of opaque values keyed by a numeric priority.

    There is no decrease-key: callers push a value again with its better
    priority and discard stale entries when they pop them.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, T]] = []
        self._counter: Iterator[int] = itertools.count()

    def push(self, value: T, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), value))

    def pop(self) -> Optional[T]:
        """Remove and return the lowest-priority value, or None when empty."""
        entry = self.pop_with_priority()
        return entry[0] if entry is not None else None

    def pop_with_priority(self) -> Optional[Tuple[T, float]]:
        if not self._heap:
            return None
        priority, _, value = heapq.heappop(self._heap)
        return value, priority

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
