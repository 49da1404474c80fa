"""
Immutable graph snapshots.

A GraphSnapshot is the only form in which topology leaves the GraphStore. Path
finder construction and the nearest-facility overlay both consume snapshots, so
neither can reach the store's mutable structures.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, List, Mapping, Tuple

from ..models import Coordinates, Edge


@dataclass(frozen=True)
class GraphSnapshot:
    """
    Read-only copy of the graph topology.

    Attributes:
        nodes (Mapping[str, Coordinates]): Node coordinates in insertion order
        adjacency (Mapping[str, Tuple[Edge, ...]]): Directed entries per node,
            mirrored for every undirected edge
    """

    nodes: Mapping[str, Coordinates]
    adjacency: Mapping[str, Tuple[Edge, ...]]

    @classmethod
    def build(
        cls, nodes: Mapping[str, Coordinates], adjacency: Mapping[str, List[Edge]]
    ) -> "GraphSnapshot":
        """Copy mutable structures into a snapshot."""
        return cls(
            nodes=MappingProxyType(dict(nodes)),
            adjacency=MappingProxyType(
                {node: tuple(adjacency.get(node, ())) for node in nodes}
            ),
        )

    @classmethod
    def empty(cls) -> "GraphSnapshot":
        return cls.build({}, {})

    def has_node(self, node: str) -> bool:
        return node in self.nodes

    def get_neighbors(self, node: str) -> Tuple[Edge, ...]:
        return self.adjacency.get(node, ())

    def edges(self) -> Iterator[Edge]:
        """
        Yield every undirected edge once.

        Each undirected edge is stored as two mirrored entries; the entry whose
        source sorts first is the canonical one. Self-loops are stored once and
        parallel duplicates are yielded once per duplicate.
        """
        for entries in self.adjacency.values():
            for edge in entries:
                if edge.source <= edge.target:
                    yield edge

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return sum(1 for _ in self.edges())
