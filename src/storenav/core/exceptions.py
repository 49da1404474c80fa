"""
Custom exceptions for the store navigation system.

This module defines the hierarchy of exceptions raised by the graph store, the
path finding engine, the persistence layer and the store service. Every
exception derives from StoreNavError so transport code can translate domain
failures into error responses with a single handler.
"""


class StoreNavError(Exception):
    """Base class for all store navigation errors."""


class ValidationError(StoreNavError):
    """
    Raised when input validation fails.

    Validation happens before any state change, so a caller receiving this
    error can rely on the graph and the active path finder being untouched.

    Examples:
        * Empty or blank node identifiers
        * Negative or non-finite edge weights
        * Malformed transport requests
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class NotFoundError(StoreNavError):
    """
    Raised when an operation references a resource that does not exist.

    Examples:
        * Edge creation between unknown nodes
        * Removal of an absent node or edge
        * Store lookup by unknown id
    """


class NodeNotFoundError(NotFoundError):
    """Raised when a referenced node is absent from the graph."""


class EdgeNotFoundError(NotFoundError):
    """Raised when no edge joins the referenced pair of nodes."""


class StoreNotFoundError(NotFoundError):
    """Raised when a store id does not match any stored record."""


class StorageError(StoreNavError):
    """
    Raised when storage operations fail.

    Examples:
        * File system access errors
        * Corrupt or unreadable data files
    """


class PersistenceWriteError(StorageError):
    """
    Raised when a write-through hook fails after an in-memory mutation.

    The in-memory change is kept (memory is the source of truth for the running
    session); the error reports that the persisted copy is now behind.
    """


class GraphOperationError(StoreNavError):
    """
    Raised when graph operations fail.

    Examples:
        * Path finder used with an unsupported algorithm
        * Coordinator used after shutdown
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class SearchTimeoutError(GraphOperationError):
    """Raised when a shortest path search exceeds its deadline."""


class ConfigurationError(StoreNavError):
    """
    Raised when configuration is invalid.

    Examples:
        * Unknown algorithm name
        * Non-positive port or cache size
    """
