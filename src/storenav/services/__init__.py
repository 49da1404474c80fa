"""Application services built on the graph coordinator and the storage layer."""

from .store_service import StoreService

__all__ = ["StoreService"]
