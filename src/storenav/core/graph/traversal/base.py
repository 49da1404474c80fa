"""Base classes for graph traversal algorithms."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple, Type, TypeVar

from storenav.core.exceptions import EdgeNotFoundError, NodeNotFoundError
from storenav.core.models import Coordinates, validate_identifier, validate_weight
from ..state import GraphSnapshot
from .path_models import PathResult
from .utils import INFINITY, PriorityQueue, check_deadline, reconstruct_path

logger = logging.getLogger(__name__)

P = TypeVar("P", bound="PathFinder")


class PathFinder(ABC):
    """
    Abstract base class for shortest path strategies.

    A finder keeps its own derived copy of the topology: it is fed the same
    node and edge mutations as the GraphStore so it never needs a rebuild on an
    ordinary edit. Subclasses only differ in the heuristic that orders the
    search frontier.
    """

    def __init__(self):
        """Initialize an empty finder."""
        self._coordinates: Dict[str, Optional[Coordinates]] = {}
        self._adjacency: Dict[str, List[Tuple[str, float]]] = {}

    @classmethod
    def from_snapshot(cls: Type[P], snapshot: GraphSnapshot) -> P:
        """Build a finder by replaying every node, then every edge, of a snapshot."""
        finder = cls()
        for node, coordinates in snapshot.nodes.items():
            finder.add_node(node, coordinates.x, coordinates.y)
        for edge in snapshot.edges():
            finder.add_edge(edge.source, edge.target, edge.weight)
        return finder

    @abstractmethod
    def heuristic(self, node: str, target: str) -> float:
        """Estimate the remaining cost from node to target."""

    def add_node(self, node: str, x: Optional[float] = None, y: Optional[float] = None) -> None:
        """Add a node, or overwrite its coordinates. Coordinates may be unknown."""
        validate_identifier("Node id", node)
        self._coordinates[node] = None if x is None or y is None else Coordinates(x, y)
        self._adjacency.setdefault(node, [])

    def remove_node(self, node: str) -> None:
        """Remove a node and every edge touching it."""
        self.validate_nodes(node)
        for neighbor in {target for target, _ in self._adjacency[node]}:
            if neighbor != node:
                self._adjacency[neighbor] = [
                    entry for entry in self._adjacency[neighbor] if entry[0] != node
                ]
        del self._adjacency[node]
        del self._coordinates[node]

    def add_edge(self, from_node: str, to_node: str, weight: float) -> None:
        """Add an undirected edge. Parallel edges are kept."""
        weight = validate_weight(weight)
        self.validate_nodes(from_node, to_node)
        self._adjacency[from_node].append((to_node, weight))
        if from_node != to_node:
            self._adjacency[to_node].append((from_node, weight))

    def remove_edge(self, from_node: str, to_node: str) -> None:
        """Remove every edge joining two nodes."""
        self.validate_nodes(from_node, to_node)
        if not any(target == to_node for target, _ in self._adjacency[from_node]):
            raise EdgeNotFoundError(f"No edge exists between '{from_node}' and '{to_node}'")
        self._adjacency[from_node] = [
            entry for entry in self._adjacency[from_node] if entry[0] != to_node
        ]
        self._adjacency[to_node] = [
            entry for entry in self._adjacency[to_node] if entry[0] != from_node
        ]

    def has_node(self, node: str) -> bool:
        return node in self._adjacency

    def get_nodes(self) -> List[str]:
        return list(self._adjacency)

    def validate_nodes(self, *nodes: str) -> None:
        """Validate that nodes exist in the finder's view."""
        for node in nodes:
            if node not in self._adjacency:
                raise NodeNotFoundError(f"Node does not exist: {node}")

    def shortest_path(
        self,
        source: str,
        target: str,
        deadline: Optional[float] = None,
        prefer_lowest_predecessor: bool = False,
    ) -> PathResult:
        """
        Find the cheapest path from source to target.

        The frontier is ordered by tentative distance plus heuristic. A neighbor
        is relaxed only on a strictly lower tentative distance, so on ties the
        predecessor recorded first is kept. A node whose distance improves after
        it was extracted is queued again, which keeps the search correct for
        admissible heuristics that are not consistent.

        Args:
            source: Starting node id
            target: Destination node id
            deadline: Optional time.monotonic() deadline for the search
            prefer_lowest_predecessor: Hold the target back until every other
                frontier entry of equal priority is settled, and on equal
                distances keep the lexicographically lowest predecessor of the
                target

        Returns:
            PathResult: The path, or an empty result if target is unreachable

        Raises:
            NodeNotFoundError: If source or target is unknown
            SearchTimeoutError: If the deadline passes during the search
        """
        self.validate_nodes(source, target)
        if source == target:
            return PathResult(path=(source,))

        distances: Dict[str, float] = {source: 0.0}
        previous: Dict[str, str] = {}
        frontier = PriorityQueue()
        frontier.add_or_update(source, self.heuristic(source, target))
        nodes_explored = 0

        while not frontier.empty():
            check_deadline(deadline, source, target)
            popped = frontier.pop()
            if popped is None:
                break
            _, current = popped
            nodes_explored += 1
            if current == target:
                break

            current_distance = distances[current]
            for neighbor, weight in self._adjacency[current]:
                candidate = current_distance + weight
                known = distances.get(neighbor, INFINITY)
                if candidate < known:
                    distances[neighbor] = candidate
                    previous[neighbor] = current
                    rank = 1 if prefer_lowest_predecessor and neighbor == target else 0
                    frontier.add_or_update(
                        neighbor, candidate + self.heuristic(neighbor, target), rank
                    )
                elif (
                    prefer_lowest_predecessor
                    and neighbor == target
                    and candidate == known
                    and current < previous[neighbor]
                ):
                    previous[neighbor] = current

        if target not in previous:
            logger.debug(
                f"No path from {source} to {target} after exploring {nodes_explored} nodes"
            )
            return PathResult.empty()

        path = reconstruct_path(previous, source, target)
        logger.debug(
            f"{type(self).__name__} found {source} -> {target} "
            f"(weight {distances[target]}, {nodes_explored} nodes explored)"
        )
        return PathResult(path=tuple(path), total_weight=distances[target])
