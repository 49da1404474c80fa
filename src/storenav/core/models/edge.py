"""
Edge models for the location graph.

The graph is undirected, but it is stored as directed entries: every accepted
edge becomes two mirrored Edge entries (one for a self-loop). Keeping entries
directed makes adjacency iteration and cascade deletes straightforward.
"""

from dataclasses import dataclass

from .base import validate_identifier, validate_weight


@dataclass(frozen=True)
class Edge:
    """
    Directed adjacency entry.

    Attributes:
        source (str): Node the entry is stored under
        target (str): Node the entry leads to
        weight (float): Non-negative traversal cost
    """

    source: str
    target: str
    weight: float

    def __post_init__(self):
        """Validate edge after initialization."""
        validate_identifier("source node", self.source)
        validate_identifier("target node", self.target)
        object.__setattr__(self, "weight", validate_weight(self.weight))

    def reversed(self) -> "Edge":
        """Return the mirror entry."""
        return Edge(source=self.target, target=self.source, weight=self.weight)
