"""
A* search with a Euclidean heuristic.

The heuristic is the straight-line distance between a node's coordinates and
the target's coordinates. Edge weights are supplied by callers and need not
match geometric distance, so the heuristic is only admissible when every edge
weighs at least the straight-line distance between its endpoints. On graphs
where it overestimates, A* may return a path costlier than Dijkstra's; this is
a known limitation and is not detected at runtime.
"""

from ..base import PathFinder


class AStarPathFinder(PathFinder):
    """A* path finder ordering the frontier by distance plus Euclidean estimate."""

    def heuristic(self, node: str, target: str) -> float:
        """
        Straight-line distance from node to target.

        Returns 0.0 when either node has no recorded coordinates, which makes
        the search behave like Dijkstra around that node.
        """
        if node == target:
            return 0.0
        position = self._coordinates.get(node)
        destination = self._coordinates.get(target)
        if position is None or destination is None:
            return 0.0
        return position.distance_to(destination)
