"""
Runtime substitution of the shortest path strategy.

Switching never patches the active finder: a fresh finder of the requested kind
is built from the GraphStore's snapshot (nodes first, then edges) and only then
replaces the active reference, so a reader sees either the old finder or the
complete new one.
"""

import logging

from ..enums import Algorithm
from .state import GraphSnapshot
from .traversal import PathFinder, create_path_finder

logger = logging.getLogger(__name__)


class AlgorithmSwitcher:
    """
    Holds the active PathFinder and rebuilds it on demand.

    Attributes:
        _algorithm (Algorithm): Strategy of the active finder
        _active (PathFinder): Finder mirroring the GraphStore
    """

    def __init__(self, algorithm: Algorithm = Algorithm.DIJKSTRA, snapshot: GraphSnapshot = None):
        self._algorithm = Algorithm.parse(algorithm)
        self._active = create_path_finder(self._algorithm, snapshot or GraphSnapshot.empty())

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def active(self) -> PathFinder:
        return self._active

    def switch(self, algorithm: Algorithm, snapshot: GraphSnapshot) -> PathFinder:
        """
        Replace the active finder with a fresh one of the given kind.

        Args:
            algorithm: Strategy to activate
            snapshot: Canonical topology to replay into the new finder

        Returns:
            PathFinder: The newly active finder
        """
        algorithm = Algorithm.parse(algorithm)
        finder = create_path_finder(algorithm, snapshot)
        self._active, self._algorithm = finder, algorithm
        logger.info(
            f"Switched path finder to {algorithm.value} "
            f"({snapshot.node_count()} nodes, {snapshot.edge_count()} edges)"
        )
        return finder

    def rebuild(self, snapshot: GraphSnapshot) -> PathFinder:
        """Rebuild the active strategy from a snapshot, e.g. after a graph load."""
        return self.switch(self._algorithm, snapshot)
