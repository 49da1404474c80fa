"""
Authoritative in-memory graph topology.

This module provides the GraphStore class, the single source of truth for node
coordinates and undirected weighted edges. The implementation is pure: it does
no locking, caching or persistence. Serialization of access is the
coordinator's job and write-through is layered on top by the coordinator too.

Every operation validates its inputs before touching any structure, so a
failed call never leaves a partial mutation behind.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from ..exceptions import EdgeNotFoundError, NodeNotFoundError
from ..models import Coordinates, Edge, validate_identifier, validate_weight
from .state import GraphSnapshot

logger = logging.getLogger(__name__)


@dataclass
class GraphStore:
    """
    Undirected weighted graph stored as an adjacency list of directed entries.

    Attributes:
        _nodes (Dict[str, Coordinates]): Node coordinates keyed by node id
        _adjacency (Dict[str, List[Edge]]): Directed entries per node. Every
            undirected edge appears under both endpoints; parallel edges are
            kept as distinct entries.
    """

    _nodes: Dict[str, Coordinates] = field(default_factory=dict)
    _adjacency: Dict[str, List[Edge]] = field(default_factory=dict)

    def add_node(self, node_id: str, x: float, y: float) -> Coordinates:
        """
        Add a node, or overwrite the coordinates of an existing one.

        Args:
            node_id (str): Unique, non-blank node id
            x (float): Horizontal coordinate
            y (float): Vertical coordinate

        Returns:
            Coordinates: The stored coordinates

        Raises:
            ValidationError: If the id is empty or blank, or a coordinate is invalid
        """
        validate_identifier("Node id", node_id)
        coordinates = Coordinates(x, y)
        self._nodes[node_id] = coordinates
        self._adjacency.setdefault(node_id, [])
        return coordinates

    def add_edge(self, from_node: str, to_node: str, weight: float) -> Edge:
        """
        Add an undirected edge between two existing nodes.

        Both directions are inserted together. An edge between a pair that is
        already connected is added as a parallel entry, never merged.

        Returns:
            Edge: The from_node -> to_node entry

        Raises:
            ValidationError: If the weight is negative or not finite
            NodeNotFoundError: If either node is absent
        """
        weight = validate_weight(weight)
        self._require_nodes(from_node, to_node)

        edge = Edge(source=from_node, target=to_node, weight=weight)
        self._adjacency[from_node].append(edge)
        if from_node != to_node:
            self._adjacency[to_node].append(edge.reversed())
        return edge

    def remove_node(self, node_id: str) -> Coordinates:
        """
        Remove a node and every edge entry naming it.

        Returns:
            Coordinates: The coordinates the node had

        Raises:
            NodeNotFoundError: If the node is absent
        """
        self._require_nodes(node_id)

        for neighbor in {edge.target for edge in self._adjacency[node_id]}:
            if neighbor != node_id:
                self._adjacency[neighbor] = [
                    edge for edge in self._adjacency[neighbor] if edge.target != node_id
                ]
        del self._adjacency[node_id]
        return self._nodes.pop(node_id)

    def remove_edge(self, from_node: str, to_node: str) -> List[Edge]:
        """
        Remove every entry joining two nodes, in both directions.

        Parallel duplicates are removed together, whatever their weights.

        Returns:
            List[Edge]: The removed from_node -> to_node entries

        Raises:
            NodeNotFoundError: If either node is absent
            EdgeNotFoundError: If no edge joins the two nodes
        """
        self._require_nodes(from_node, to_node)
        removed = [edge for edge in self._adjacency[from_node] if edge.target == to_node]
        if not removed:
            raise EdgeNotFoundError(f"No edge exists between '{from_node}' and '{to_node}'")

        self._adjacency[from_node] = [
            edge for edge in self._adjacency[from_node] if edge.target != to_node
        ]
        self._adjacency[to_node] = [
            edge for edge in self._adjacency[to_node] if edge.target != from_node
        ]
        return removed

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def has_edge(self, from_node: str, to_node: str) -> bool:
        return any(edge.target == to_node for edge in self._adjacency.get(from_node, ()))

    def get_nodes(self) -> List[str]:
        """Get all node ids in insertion order."""
        return list(self._nodes)

    def get_coordinates(self, node_id: str) -> Coordinates:
        """
        Get the coordinates of a node.

        Raises:
            NodeNotFoundError: If the node is absent
        """
        self._require_nodes(node_id)
        return self._nodes[node_id]

    def get_neighbors(self, node_id: str) -> Set[str]:
        """Get the ids of all nodes sharing an edge with node_id."""
        self._require_nodes(node_id)
        return {edge.target for edge in self._adjacency[node_id]}

    def get_edges_between(self, from_node: str, to_node: str) -> List[Edge]:
        """Get every from_node -> to_node entry, duplicates included."""
        self._require_nodes(from_node, to_node)
        return [edge for edge in self._adjacency[from_node] if edge.target == to_node]

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        """Count undirected edges, parallel duplicates included."""
        return sum(
            1 for entries in self._adjacency.values() for edge in entries if edge.source <= edge.target
        )

    def snapshot(self) -> GraphSnapshot:
        """Return an immutable copy of nodes and adjacency."""
        return GraphSnapshot.build(self._nodes, self._adjacency)

    def clear(self) -> None:
        self._nodes.clear()
        self._adjacency.clear()

    def restore(
        self,
        nodes: Mapping[str, Sequence[float]],
        edges: Mapping[str, Iterable[Tuple[str, float]]],
    ) -> None:
        """
        Replace the graph with persisted data.

        Persisted edges are directed entries. Entries naming an unknown node are
        skipped with a warning. Each unordered pair and weight is restored as
        many times as its better-represented direction appears, which restores
        symmetry if a mirror entry was lost.

        Args:
            nodes: Mapping of node id to an (x, y) pair
            edges: Mapping of node id to (target, weight) entries
        """
        restored = GraphStore()
        for node_id, (x, y) in nodes.items():
            restored.add_node(node_id, x, y)

        directed: Counter = Counter()
        pairs: Dict[Tuple[str, str, float], None] = {}
        for source, entries in edges.items():
            for target, weight in entries:
                if not (restored.has_node(source) and restored.has_node(target)):
                    logger.warning(f"Skipping persisted edge {source}->{target}: unknown node")
                    continue
                weight = validate_weight(weight)
                directed[(source, target, weight)] += 1
                low, high = sorted((source, target))
                pairs.setdefault((low, high, weight), None)

        for low, high, weight in pairs:
            count = max(directed[(low, high, weight)], directed[(high, low, weight)])
            for _ in range(count):
                restored.add_edge(low, high, weight)

        self._nodes = restored._nodes
        self._adjacency = restored._adjacency
        logger.info(
            f"Restored graph with {self.node_count()} nodes and {self.edge_count()} edges"
        )

    def _require_nodes(self, *node_ids: str) -> None:
        for node_id in node_ids:
            if node_id not in self._nodes:
                raise NodeNotFoundError(f"Node does not exist: {node_id}")
