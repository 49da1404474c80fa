"""
storenav - Nearest store finder over a weighted location graph

This package answers "which store stocking this product is closest to me" over
an undirected weighted graph of locations. It includes:

- A graph store with Dijkstra and A* shortest path finders
- Nearest-facility search through a sink-node reduction
- A single-owner coordinator serializing all graph work
- JSON persistence for the graph and for store records
- A line-delimited JSON server and a command line interface
"""

__version__ = "0.1.0"

# Version compatibility check
import sys

if sys.version_info < (3, 10):
    raise RuntimeError("storenav requires Python 3.10 or higher")

# Import commonly used components for easier access
from .core.coordinator import GraphCoordinator
from .core.enums import Algorithm
from .core.graph import GraphStore, NearestFacilityQuery, PathResult
from .core.models import Product, Store

__all__ = [
    "Algorithm",
    "GraphCoordinator",
    "GraphStore",
    "NearestFacilityQuery",
    "PathResult",
    "Product",
    "Store",
]
