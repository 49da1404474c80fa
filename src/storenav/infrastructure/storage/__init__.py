"""
Storage layer.

- JsonGraphStorage: synchronous write-through persistence of the graph
- JsonStoreStorage: asynchronous persistence of store and product records
"""

from .base import BaseStorage
from .graph_storage import GraphPersistence, JsonGraphStorage
from .store_storage import JsonStoreStorage

__all__ = [
    "BaseStorage",
    "GraphPersistence",
    "JsonGraphStorage",
    "JsonStoreStorage",
]
