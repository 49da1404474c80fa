"""Enumerations shared across the store navigation system."""

from enum import Enum

from .exceptions import ConfigurationError


class Algorithm(Enum):
    """Shortest path strategies available to the graph coordinator."""

    DIJKSTRA = "dijkstra"
    A_STAR = "a_star"

    @classmethod
    def parse(cls, value: "str | Algorithm") -> "Algorithm":
        """
        Resolve an algorithm from its enum value or a loose spelling.

        Accepts "dijkstra", "a_star", "astar" and "a*" in any case.

        Raises:
            ConfigurationError: If the name does not match an algorithm
        """
        if isinstance(value, Algorithm):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        if normalized in ("astar", "a*"):
            normalized = cls.A_STAR.value
        try:
            return cls(normalized)
        except ValueError as e:
            raise ConfigurationError(f"Unknown algorithm: {value}") from e
