"""Dijkstra's shortest path algorithm."""

from ..base import PathFinder


class DijkstraPathFinder(PathFinder):
    """
    Classic single-source shortest path for non-negative weights.

    The frontier is ordered by tentative distance alone, so the first time the
    target is extracted its distance is final.
    """

    def heuristic(self, node: str, target: str) -> float:
        return 0.0
