"""Core graph and path finding functionality."""

from .coordinator import GraphCoordinator
from .enums import Algorithm
from .exceptions import (
    ConfigurationError,
    EdgeNotFoundError,
    GraphOperationError,
    NodeNotFoundError,
    NotFoundError,
    PersistenceWriteError,
    SearchTimeoutError,
    StorageError,
    StoreNavError,
    StoreNotFoundError,
    ValidationError,
)
from .graph import (
    AlgorithmSwitcher,
    AStarPathFinder,
    DijkstraPathFinder,
    FacilityMatch,
    GraphSnapshot,
    GraphStore,
    NearestFacilityQuery,
    PathFinder,
    PathResult,
)
from .models import Coordinates, Edge, Product, Store

__all__ = [
    "Algorithm",
    "AlgorithmSwitcher",
    "AStarPathFinder",
    "ConfigurationError",
    "Coordinates",
    "DijkstraPathFinder",
    "Edge",
    "EdgeNotFoundError",
    "FacilityMatch",
    "GraphCoordinator",
    "GraphOperationError",
    "GraphSnapshot",
    "GraphStore",
    "NearestFacilityQuery",
    "NodeNotFoundError",
    "NotFoundError",
    "PathFinder",
    "PathResult",
    "PersistenceWriteError",
    "Product",
    "SearchTimeoutError",
    "StorageError",
    "Store",
    "StoreNavError",
    "StoreNotFoundError",
    "ValidationError",
]
