"""
Utility functions for path finding operations.
"""

import logging
import time
from heapq import heappop, heappush
from typing import Dict, List, Optional, Tuple

from storenav.core.exceptions import SearchTimeoutError

logger = logging.getLogger(__name__)

# Constants
INFINITY = float("inf")


class PriorityQueue:
    """
    Min-priority queue with decrease-key and stable ordering.

    Entries are ordered by (priority, rank, insertion counter). The counter keeps
    extraction order stable for equal priorities; the rank lets a caller push a
    node behind every other entry of the same priority.
    """

    def __init__(self):
        self._queue: List[Tuple[float, int, int, str]] = []
        self._entry_finder: Dict[str, Tuple[float, int, int]] = {}
        self._counter = 0  # Unique counter to break ties

    def add_or_update(self, item: str, priority: float, rank: int = 0) -> None:
        """Add a new item or lower the priority of an existing item."""
        if item in self._entry_finder:
            old_priority, old_rank, _ = self._entry_finder[item]
            # Only update if new priority is better
            if (priority, rank) >= (old_priority, old_rank):
                return

        # Older entries for the item become stale and are skipped on pop
        entry = (priority, rank, self._counter, item)
        self._entry_finder[item] = (priority, rank, self._counter)
        heappush(self._queue, entry)
        self._counter += 1

    def pop(self) -> Optional[Tuple[float, str]]:
        """Remove and return the item with the lowest priority."""
        while self._queue:
            priority, rank, count, item = heappop(self._queue)
            if self._entry_finder.get(item) == (priority, rank, count):
                del self._entry_finder[item]
                return (priority, item)
        return None

    def empty(self) -> bool:
        """Return True if the queue is empty."""
        return len(self._entry_finder) == 0

    def __len__(self) -> int:
        """Return the number of valid items in the queue."""
        return len(self._entry_finder)


def deadline_after(timeout: Optional[float]) -> Optional[float]:
    """Convert a relative timeout in seconds to an absolute monotonic deadline."""
    if timeout is None:
        return None
    return time.monotonic() + timeout


def check_deadline(deadline: Optional[float], source: str, target: str) -> None:
    """Raise SearchTimeoutError once the deadline has passed."""
    if deadline is not None and time.monotonic() > deadline:
        logger.warning(f"Path search {source} -> {target} exceeded its deadline")
        raise SearchTimeoutError(f"Path finding timeout exceeded for {source} -> {target}")


def reconstruct_path(previous: Dict[str, str], source: str, target: str) -> List[str]:
    """Walk predecessor links from target back to source and reverse them."""
    path = [target]
    current = target
    while current != source:
        current = previous[current]
        path.append(current)
    path.reverse()
    return path
