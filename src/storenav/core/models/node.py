"""Node models for the location graph."""

import math
from dataclasses import dataclass

from .base import validate_coordinate


@dataclass(frozen=True)
class Coordinates:
    """
    Planar position of a graph node.

    Attributes:
        x (float): Horizontal coordinate (longitude for stores)
        y (float): Vertical coordinate (latitude for stores)
    """

    x: float
    y: float

    def __post_init__(self):
        """Normalize coordinates to floats."""
        object.__setattr__(self, "x", validate_coordinate("x", self.x))
        object.__setattr__(self, "y", validate_coordinate("y", self.y))

    def distance_to(self, other: "Coordinates") -> float:
        """Euclidean distance to another position."""
        return math.hypot(other.x - self.x, other.y - self.y)
