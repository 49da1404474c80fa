"""
Graph module for the store navigation system.

This module provides:
- GraphStore, the authoritative undirected weighted topology
- Immutable snapshots used to build path finders and query overlays
- Dijkstra and A* path finders behind a common PathFinder interface
- Nearest-facility search through a sink-node overlay
- Runtime switching of the active path finding strategy
"""

from .base import GraphStore
from .facility import NearestFacilityQuery, sink_id_for
from .state import GraphSnapshot
from .switcher import AlgorithmSwitcher
from .traversal import (
    AStarPathFinder,
    DijkstraPathFinder,
    FacilityMatch,
    PathFinder,
    PathResult,
    create_path_finder,
)

__all__ = [
    "GraphStore",
    "GraphSnapshot",
    "NearestFacilityQuery",
    "sink_id_for",
    "AlgorithmSwitcher",
    "PathFinder",
    "PathResult",
    "FacilityMatch",
    "DijkstraPathFinder",
    "AStarPathFinder",
    "create_path_finder",
]
