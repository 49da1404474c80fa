"""
Graph traversal algorithms and path finding functionality.
"""

from .algorithms import (
    AStarPathFinder,
    DijkstraPathFinder,
    create_path_finder,
    finder_class,
)
from .base import PathFinder
from .path_models import FacilityMatch, PathResult
from .utils import PriorityQueue, check_deadline, deadline_after, reconstruct_path

__all__ = [
    "PathFinder",
    "PathResult",
    "FacilityMatch",
    "DijkstraPathFinder",
    "AStarPathFinder",
    "create_path_finder",
    "finder_class",
    "PriorityQueue",
    "deadline_after",
    "check_deadline",
    "reconstruct_path",
]
