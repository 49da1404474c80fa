"""
Core domain models package.

This package provides the data structures shared by the graph store, the path
finders and the store service: node coordinates, directed edge entries, stores
and their products.
"""

from .base import validate_coordinate, validate_identifier, validate_price, validate_weight
from .edge import Edge
from .node import Coordinates
from .store import Product, Store

__all__ = [
    # Validation helpers
    "validate_identifier",
    "validate_weight",
    "validate_coordinate",
    "validate_price",
    # Graph models
    "Coordinates",
    "Edge",
    # Store models
    "Product",
    "Store",
]
