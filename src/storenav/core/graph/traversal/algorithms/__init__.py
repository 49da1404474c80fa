"""Shortest path strategy implementations."""

from typing import Dict, Type

from ....enums import Algorithm
from ....exceptions import GraphOperationError
from ...state import GraphSnapshot
from ..base import PathFinder
from .astar import AStarPathFinder
from .dijkstra import DijkstraPathFinder

FINDERS: Dict[Algorithm, Type[PathFinder]] = {
    Algorithm.DIJKSTRA: DijkstraPathFinder,
    Algorithm.A_STAR: AStarPathFinder,
}


def finder_class(algorithm: Algorithm) -> Type[PathFinder]:
    """Map an algorithm to its PathFinder class."""
    try:
        return FINDERS[Algorithm.parse(algorithm)]
    except KeyError as e:
        raise GraphOperationError(f"Unsupported algorithm: {algorithm}") from e


def create_path_finder(algorithm: Algorithm, snapshot: GraphSnapshot) -> PathFinder:
    """Build a fresh finder of the given kind seeded from a snapshot."""
    return finder_class(algorithm).from_snapshot(snapshot)


__all__ = [
    "AStarPathFinder",
    "DijkstraPathFinder",
    "FINDERS",
    "finder_class",
    "create_path_finder",
]
