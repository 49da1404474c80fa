"""
Graph persistence.

This module defines the write-through contract the GraphCoordinator relies on
and its JSON file implementation. The coordinator calls one hook per completed
mutation, synchronously, from its owner thread.

File layout (graph.json):
    {
        "nodes": {"A": [0.0, 0.0], ...},
        "edges": {"A": [{"to": "B", "weight": 2.0}, ...], ...}
    }

Edges are stored as directed entries, mirrored for every undirected edge, the
same way the GraphStore keeps them in memory.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from ...core.exceptions import StorageError
from .persistence import backup_file, load_json, save_json_atomic

logger = logging.getLogger(__name__)

NodeRecords = Dict[str, Tuple[float, float]]
EdgeRecords = Dict[str, List[Tuple[str, float]]]


@runtime_checkable
class GraphPersistence(Protocol):
    """Write-through hooks for graph mutations."""

    def load_nodes(self) -> NodeRecords:
        """Return {node id: (x, y)}."""
        ...

    def load_edges(self) -> EdgeRecords:
        """Return {node id: [(target, weight), ...]} with mirrored entries."""
        ...

    def save_node(self, node_id: str, x: float, y: float) -> None:
        ...

    def remove_node(self, node_id: str) -> None:
        ...

    def save_edge(self, from_node: str, to_node: str, weight: float) -> None:
        ...

    def remove_edge(self, from_node: str, to_node: str) -> None:
        ...

    def clear(self) -> None:
        ...


class JsonGraphStorage:
    """
    Graph persistence backed by a single JSON document.

    Every write rewrites the document atomically after copying the previous
    version to a .bak file next to it.

    Attributes:
        storage_dir (str): Directory holding the document
        storage_file (str): Full path to the document
        backup_path (str): Full path to the backup copy
    """

    def __init__(self, storage_dir: str, filename: str = "graph.json"):
        self.storage_dir = storage_dir
        self.storage_file = os.path.join(storage_dir, filename)
        self.backup_path = f"{self.storage_file}.bak"
        self._document: Optional[Dict[str, Any]] = None
        try:
            os.makedirs(storage_dir, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create storage directory {storage_dir}: {str(e)}")

    def load_nodes(self) -> NodeRecords:
        """
        Read persisted nodes from disk.

        Raises:
            StorageError: If the document is unreadable or malformed
        """
        document = self._read()
        try:
            return {
                str(node_id): (float(coords[0]), float(coords[1]))
                for node_id, coords in document["nodes"].items()
            }
        except (TypeError, ValueError, IndexError, AttributeError) as e:
            raise StorageError(f"Malformed nodes in {self.storage_file}: {str(e)}")

    def load_edges(self) -> EdgeRecords:
        """
        Read persisted edge entries from disk.

        Raises:
            StorageError: If the document is unreadable or malformed
        """
        document = self._read()
        try:
            return {
                str(node_id): [(str(entry["to"]), float(entry["weight"])) for entry in entries]
                for node_id, entries in document["edges"].items()
            }
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            raise StorageError(f"Malformed edges in {self.storage_file}: {str(e)}")

    def save_node(self, node_id: str, x: float, y: float) -> None:
        document = self._current()
        document["nodes"][node_id] = [x, y]
        document["edges"].setdefault(node_id, [])
        self._write(document)

    def remove_node(self, node_id: str) -> None:
        """Remove a node together with every entry naming it."""
        document = self._current()
        document["nodes"].pop(node_id, None)
        document["edges"].pop(node_id, None)
        for source, entries in document["edges"].items():
            document["edges"][source] = [entry for entry in entries if entry["to"] != node_id]
        self._write(document)

    def save_edge(self, from_node: str, to_node: str, weight: float) -> None:
        """Store both directions of an undirected edge."""
        document = self._current()
        document["edges"].setdefault(from_node, []).append({"to": to_node, "weight": weight})
        if from_node != to_node:
            document["edges"].setdefault(to_node, []).append({"to": from_node, "weight": weight})
        self._write(document)

    def remove_edge(self, from_node: str, to_node: str) -> None:
        """Remove every entry joining two nodes, in both directions."""
        document = self._current()
        edges = document["edges"]
        if from_node in edges:
            edges[from_node] = [entry for entry in edges[from_node] if entry["to"] != to_node]
        if to_node in edges:
            edges[to_node] = [entry for entry in edges[to_node] if entry["to"] != from_node]
        self._write(document)

    def clear(self) -> None:
        self._write({"nodes": {}, "edges": {}})

    def _read(self) -> Dict[str, Any]:
        document = load_json(self.storage_file)
        document.setdefault("nodes", {})
        document.setdefault("edges", {})
        if not isinstance(document["nodes"], dict) or not isinstance(document["edges"], dict):
            raise StorageError(f"Malformed graph document: {self.storage_file}")
        self._document = document
        logger.debug(
            f"Read {len(document['nodes'])} nodes from {self.storage_file}"
        )
        return document

    def _current(self) -> Dict[str, Any]:
        if self._document is None:
            return self._read()
        return self._document

    def _write(self, document: Dict[str, Any]) -> None:
        try:
            backup_file(self.storage_file, self.backup_path)
            save_json_atomic(self.storage_file, document)
        except StorageError:
            # Re-read from disk on the next write
            self._document = None
            raise
        self._document = document
