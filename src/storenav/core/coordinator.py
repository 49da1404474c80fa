"""
Single-owner coordination of all graph work.

The GraphCoordinator owns the GraphStore, the AlgorithmSwitcher, the optional
persistence hook and the shortest path cache. Every public call is handed to a
one-thread executor and waited on, so mutations and queries are applied one at
a time in submission order and no caller ever sees a half-applied mutation.
Calls issued from the owner thread itself run inline.

Example:
    >>> graph = GraphCoordinator()
    >>> for node, x in (("A", 0), ("B", 2)):
    ...     _ = graph.add_node(node, x, 0)
    >>> _ = graph.add_edge("A", "B", 2)
    >>> graph.shortest_path("A", "B").path
    ('A', 'B')
    >>> graph.close()
"""

import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from ..infrastructure.cache import LRUCache
from .enums import Algorithm
from .exceptions import GraphOperationError, NodeNotFoundError, PersistenceWriteError
from .graph import AlgorithmSwitcher, GraphSnapshot, GraphStore, NearestFacilityQuery
from .graph.traversal import FacilityMatch, PathResult, deadline_after
from .models import Coordinates, Edge

logger = logging.getLogger(__name__)

F = TypeVar("F")
R = TypeVar("R")


class GraphCoordinator:
    """
    Serializes access to the graph, its path finder and its persistence.

    Attributes:
        _store (GraphStore): Authoritative topology
        _switcher (AlgorithmSwitcher): Holder of the active path finder
        _persistence: Optional write-through hook (see GraphPersistence)
        _cache (LRUCache): Shortest path answers keyed by algorithm and endpoints
        default_timeout (Optional[float]): Timeout applied when a query gives none
    """

    def __init__(
        self,
        persistence: Optional[Any] = None,
        algorithm: Algorithm = Algorithm.DIJKSTRA,
        cache_size: int = 256,
        cache_ttl: float = 300.0,
        default_timeout: Optional[float] = None,
    ):
        self._store = GraphStore()
        self._switcher = AlgorithmSwitcher(algorithm)
        self._persistence = persistence
        self._cache: LRUCache[PathResult] = LRUCache(max_size=cache_size, ttl=cache_ttl)
        self.default_timeout = default_timeout
        self._owner: Optional[threading.Thread] = None
        self._closed = False
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="graph-owner", initializer=self._bind_owner
        )

    def _bind_owner(self) -> None:
        self._owner = threading.current_thread()

    def _submit(self, fn: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Run fn on the owner thread and wait for its result."""
        if self._closed:
            raise GraphOperationError("Graph coordinator is closed")
        if threading.current_thread() is self._owner:
            return fn(*args, **kwargs)
        return self._executor.submit(fn, *args, **kwargs).result()

    async def run_async(self, fn: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """
        Await a coordinator call from asyncio code without blocking the loop.

        Args:
            fn: A public coordinator method, e.g. coordinator.add_node
            *args: Positional arguments for fn
            **kwargs: Keyword arguments for fn
        """
        if self._closed:
            raise GraphOperationError("Graph coordinator is closed")
        future = self._executor.submit(partial(fn, *args, **kwargs))
        return await asyncio.wrap_future(future)

    @property
    def algorithm(self) -> Algorithm:
        return self._switcher.algorithm

    @property
    def closed(self) -> bool:
        return self._closed

    # Mutations

    def add_node(self, node_id: str, x: float, y: float) -> Coordinates:
        """
        Add a node or overwrite its coordinates.

        Raises:
            ValidationError: If the id is blank or a coordinate is invalid
            PersistenceWriteError: If the write-through hook fails
        """
        return self._submit(self._add_node, node_id, x, y)

    def _add_node(self, node_id: str, x: float, y: float) -> Coordinates:
        coordinates = self._store.add_node(node_id, x, y)
        self._switcher.active.add_node(node_id, coordinates.x, coordinates.y)
        self._cache.clear()
        logger.info(f"Added node {node_id} at ({coordinates.x}, {coordinates.y})")
        self._write_through("save_node", node_id, coordinates.x, coordinates.y)
        return coordinates

    def add_edge(self, from_node: str, to_node: str, weight: float) -> Edge:
        """
        Add an undirected edge between two existing nodes.

        Raises:
            ValidationError: If the weight is negative
            NodeNotFoundError: If either node is absent
            PersistenceWriteError: If the write-through hook fails
        """
        return self._submit(self._add_edge, from_node, to_node, weight)

    def _add_edge(self, from_node: str, to_node: str, weight: float) -> Edge:
        edge = self._store.add_edge(from_node, to_node, weight)
        self._switcher.active.add_edge(from_node, to_node, edge.weight)
        self._cache.clear()
        logger.info(f"Added edge {from_node} <-> {to_node} (weight {edge.weight})")
        self._write_through("save_edge", from_node, to_node, edge.weight)
        return edge

    def remove_node(self, node_id: str) -> Coordinates:
        """
        Remove a node and all its edges.

        Raises:
            NodeNotFoundError: If the node is absent
            PersistenceWriteError: If the write-through hook fails
        """
        return self._submit(self._remove_node, node_id)

    def _remove_node(self, node_id: str) -> Coordinates:
        coordinates = self._store.remove_node(node_id)
        self._switcher.active.remove_node(node_id)
        self._cache.clear()
        logger.info(f"Removed node {node_id}")
        self._write_through("remove_node", node_id)
        return coordinates

    def remove_edge(self, from_node: str, to_node: str) -> List[Edge]:
        """
        Remove every edge joining two nodes.

        Raises:
            NodeNotFoundError: If either node is absent
            EdgeNotFoundError: If no edge joins the nodes
            PersistenceWriteError: If the write-through hook fails
        """
        return self._submit(self._remove_edge, from_node, to_node)

    def _remove_edge(self, from_node: str, to_node: str) -> List[Edge]:
        removed = self._store.remove_edge(from_node, to_node)
        self._switcher.active.remove_edge(from_node, to_node)
        self._cache.clear()
        logger.info(f"Removed {len(removed)} edge(s) between {from_node} and {to_node}")
        self._write_through("remove_edge", from_node, to_node)
        return removed

    def switch_algorithm(self, algorithm: Algorithm) -> Algorithm:
        """
        Replace the active path finder with a fresh one of another kind.

        Raises:
            ConfigurationError: If the algorithm name is unknown
        """
        return self._submit(self._switch_algorithm, algorithm)

    def _switch_algorithm(self, algorithm: Algorithm) -> Algorithm:
        self._switcher.switch(algorithm, self._store.snapshot())
        self._cache.clear()
        return self._switcher.algorithm

    def load(self) -> None:
        """
        Replace the in-memory graph with the persisted one.

        Raises:
            StorageError: If the persisted data cannot be read
        """
        self._submit(self._load)

    def _load(self) -> None:
        if self._persistence is None:
            logger.debug("No graph persistence configured, nothing to load")
            return
        nodes = self._persistence.load_nodes()
        edges = self._persistence.load_edges()
        self._store.restore(nodes, edges)
        self._switcher.rebuild(self._store.snapshot())
        self._cache.clear()

    def clear(self) -> None:
        """Remove every node and edge."""
        self._submit(self._clear)

    def _clear(self) -> None:
        self._store.clear()
        self._switcher.rebuild(self._store.snapshot())
        self._cache.clear()
        logger.info("Cleared graph")
        self._write_through("clear")

    # Queries

    def shortest_path(
        self, source: str, target: str, timeout: Optional[float] = None
    ) -> PathResult:
        """
        Find the cheapest path between two nodes with the active algorithm.

        Args:
            source: Starting node id
            target: Destination node id
            timeout: Seconds allowed for the call, default_timeout if None

        Returns:
            PathResult: Empty when target is unreachable

        Raises:
            NodeNotFoundError: If either node is absent
            SearchTimeoutError: If the search runs past its deadline
        """
        deadline = deadline_after(timeout if timeout is not None else self.default_timeout)
        return self._submit(self._shortest_path, source, target, deadline)

    async def shortest_path_async(
        self, source: str, target: str, timeout: Optional[float] = None
    ) -> PathResult:
        """Awaitable shortest_path. Time spent queued behind other work counts toward timeout."""
        deadline = deadline_after(timeout if timeout is not None else self.default_timeout)
        return await self.run_async(self._shortest_path, source, target, deadline)

    def _shortest_path(self, source: str, target: str, deadline: Optional[float]) -> PathResult:
        key = (self._switcher.algorithm, source, target)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for path {source} -> {target}")
            return cached

        result = self._switcher.active.shortest_path(source, target, deadline=deadline)
        self._cache.put(key, result)
        return result

    def nearest_facility(
        self,
        source: str,
        facilities: Mapping[str, F],
        qualifies: Callable[[F], bool],
        timeout: Optional[float] = None,
    ) -> Optional[FacilityMatch[F]]:
        """
        Find the nearest qualifying facility from a node.

        Args:
            source: Node id the search starts from
            facilities: Facility bound to each location id
            qualifies: Predicate selecting acceptable facilities
            timeout: Seconds allowed for the call, default_timeout if None

        Returns:
            FacilityMatch or None when no qualifying facility is reachable

        Raises:
            NodeNotFoundError: If source is absent
            SearchTimeoutError: If the search runs past its deadline
        """
        deadline = deadline_after(timeout if timeout is not None else self.default_timeout)
        return self._submit(self._nearest_facility, source, facilities, qualifies, deadline)

    async def nearest_facility_async(
        self,
        source: str,
        facilities: Mapping[str, F],
        qualifies: Callable[[F], bool],
        timeout: Optional[float] = None,
    ) -> Optional[FacilityMatch[F]]:
        """Awaitable nearest_facility. Time spent queued behind other work counts toward timeout."""
        deadline = deadline_after(timeout if timeout is not None else self.default_timeout)
        return await self.run_async(
            self._nearest_facility, source, facilities, qualifies, deadline
        )

    def _nearest_facility(
        self,
        source: str,
        facilities: Mapping[str, F],
        qualifies: Callable[[F], bool],
        deadline: Optional[float],
    ) -> Optional[FacilityMatch[F]]:
        query = NearestFacilityQuery(self._store.snapshot(), self._switcher.algorithm)
        return query.run(source, facilities, qualifies, deadline=deadline)

    def snapshot(self) -> GraphSnapshot:
        return self._submit(self._store.snapshot)

    def has_node(self, node_id: str) -> bool:
        return self._submit(self._store.has_node, node_id)

    def get_coordinates(self, node_id: str) -> Coordinates:
        """
        Raises:
            NodeNotFoundError: If the node is absent
        """
        return self._submit(self._store.get_coordinates, node_id)

    def get_nodes(self) -> Dict[str, Coordinates]:
        """Get every node with its coordinates, in insertion order."""
        return dict(self.snapshot().nodes)

    def get_edges(self, node_id: Optional[str] = None) -> List[Edge]:
        """
        Get every undirected edge once, or the entries leaving one node.

        Raises:
            NodeNotFoundError: If node_id is given and absent
        """
        snapshot = self.snapshot()
        if node_id is None:
            return list(snapshot.edges())
        if not snapshot.has_node(node_id):
            raise NodeNotFoundError(f"Node does not exist: {node_id}")
        return list(snapshot.get_neighbors(node_id))

    def cache_metrics(self) -> Dict[str, float]:
        return self._cache.get_metrics()

    # Persistence

    def _write_through(self, operation: str, *args: Any) -> None:
        """Forward a completed mutation to the persistence hook."""
        if self._persistence is None:
            return
        try:
            getattr(self._persistence, operation)(*args)
        except Exception as e:
            logger.error(f"Write-through {operation}{args} failed: {str(e)}")
            raise PersistenceWriteError(
                f"Graph changed in memory but {operation} was not persisted: {str(e)}"
            ) from e

    # Lifecycle

    def close(self) -> None:
        """Stop the owner thread once pending calls have finished."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=threading.current_thread() is not self._owner)
        logger.debug("Graph coordinator closed")

    def __enter__(self) -> "GraphCoordinator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
