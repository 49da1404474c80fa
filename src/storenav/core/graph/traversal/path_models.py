"""
Data models for graph path finding.

This module provides the result containers produced by the path finders and
the nearest-facility query:
- PathResult: ordered node ids plus the total traversed weight
- FacilityMatch: the facility chosen by a nearest-facility query and its path

Example:
    >>> result = PathResult(path=("A", "B", "C"), total_weight=4.0)
    >>> result.found
    True
    >>> PathResult.empty().path
    ()
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Tuple, TypeVar

F = TypeVar("F")


@dataclass(frozen=True)
class PathResult:
    """
    Container for shortest path results.

    An empty path means the target is unreachable; it is a normal result, not an
    error. The total weight is 0.0 whenever the path has at most one node.

    Attributes:
        path: Node ids from source to target, both inclusive
        total_weight: Sum of the traversed edge weights
    """

    path: Tuple[str, ...]
    total_weight: float = 0.0

    def __post_init__(self):
        """Normalize the path to a tuple and enforce the zero-weight rule."""
        object.__setattr__(self, "path", tuple(self.path))
        if len(self.path) <= 1:
            object.__setattr__(self, "total_weight", 0.0)
        else:
            object.__setattr__(self, "total_weight", float(self.total_weight))

    @classmethod
    def empty(cls) -> "PathResult":
        """Result for an unreachable target."""
        return cls(path=())

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def source(self) -> str:
        return self.path[0]

    @property
    def target(self) -> str:
        return self.path[-1]

    def __len__(self) -> int:
        """Return the number of nodes in the path."""
        return len(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": list(self.path), "total_weight": self.total_weight}


@dataclass(frozen=True)
class FacilityMatch(Generic[F]):
    """
    Answer of a nearest-facility query.

    Attributes:
        facility: The facility bound to the last node of the path
        path: Node ids from the query source to the facility's location
        total_weight: Weight of the path
    """

    facility: F
    path: Tuple[str, ...]
    total_weight: float

    @property
    def location_id(self) -> str:
        return self.path[-1]
