"""
Store service.

This module provides the facade the transport layer and the CLI talk to. It
combines the graph coordinator with the store record storage and offers:
- Graph mutation and shortest path queries
- Store and product management
- Nearest store stocking a product, by path weight
- Cheapest store stocking a product, by price

Graph calls are awaited through GraphCoordinator.run_async, so the event loop
never blocks on a path search. Queries use the coordinator's async query
methods, which start the timeout before the call is queued.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.coordinator import GraphCoordinator
from ..core.enums import Algorithm
from ..core.exceptions import NodeNotFoundError, ValidationError
from ..core.graph.traversal import FacilityMatch, PathResult
from ..core.models import Coordinates, Edge, Product, Store, validate_identifier
from ..infrastructure.storage import JsonGraphStorage, JsonStoreStorage

logger = logging.getLogger(__name__)


def _require_store_id(store_id: int) -> int:
    if isinstance(store_id, bool) or not isinstance(store_id, int) or store_id < 1:
        raise ValidationError(f"Store id must be a positive integer, got {store_id!r}")
    return store_id


class StoreService:
    """
    Facade over the graph coordinator and the store records.

    Attributes:
        graph (GraphCoordinator): Owner of the location graph
        stores (JsonStoreStorage): Store and product records
    """

    def __init__(self, graph: GraphCoordinator, stores: JsonStoreStorage):
        self.graph = graph
        self.stores = stores

    @classmethod
    def create(
        cls,
        storage_dir: str,
        algorithm: Algorithm = Algorithm.DIJKSTRA,
        cache_size: int = 256,
        cache_ttl: float = 300.0,
        query_timeout: Optional[float] = None,
    ) -> "StoreService":
        """Build a service persisting to JSON files in storage_dir."""
        graph = GraphCoordinator(
            persistence=JsonGraphStorage(storage_dir),
            algorithm=algorithm,
            cache_size=cache_size,
            cache_ttl=cache_ttl,
            default_timeout=query_timeout,
        )
        return cls(graph, JsonStoreStorage(storage_dir))

    async def initialize(self) -> None:
        """
        Load the persisted graph and store records.

        Raises:
            StorageError: If persisted data cannot be read
        """
        await self.graph.run_async(self.graph.load)
        await self.stores.initialize()
        logger.info("Store service initialized")

    def close(self) -> None:
        self.graph.close()

    # Graph operations

    async def add_node(self, node_id: str, x: float, y: float) -> Coordinates:
        return await self.graph.run_async(self.graph.add_node, node_id, x, y)

    async def add_edge(self, from_node: str, to_node: str, weight: float) -> Edge:
        return await self.graph.run_async(self.graph.add_edge, from_node, to_node, weight)

    async def remove_node(self, node_id: str) -> Coordinates:
        """
        Remove a location. Stores located there are kept and become unreachable.
        """
        return await self.graph.run_async(self.graph.remove_node, node_id)

    async def remove_edge(self, from_node: str, to_node: str) -> List[Edge]:
        return await self.graph.run_async(self.graph.remove_edge, from_node, to_node)

    async def get_nodes(self) -> Dict[str, Coordinates]:
        return await self.graph.run_async(self.graph.get_nodes)

    async def get_edges(self) -> List[Edge]:
        return await self.graph.run_async(self.graph.get_edges)

    async def shortest_path(
        self, from_node: str, to_node: str, timeout: Optional[float] = None
    ) -> PathResult:
        return await self.graph.shortest_path_async(from_node, to_node, timeout=timeout)

    async def use_algorithm(self, algorithm: str) -> Algorithm:
        """
        Switch the shortest path strategy.

        Raises:
            ConfigurationError: If the algorithm name is unknown
        """
        return await self.graph.run_async(self.graph.switch_algorithm, Algorithm.parse(algorithm))

    # Store operations

    async def add_store(
        self, name: str, location_id: str, products: Optional[Iterable[Product]] = None
    ) -> Store:
        """
        Register a store at a graph location.

        The store takes the coordinates of its location node.

        Raises:
            ValidationError: If the name is blank or the store already exists there
            NodeNotFoundError: If the location is not a graph node
        """
        validate_identifier("store name", name)
        coordinates = await self._location(location_id)
        store = Store(
            name=name,
            location_id=location_id,
            x=coordinates.x,
            y=coordinates.y,
            products=list(products or []),
        )
        return await self.stores.add_store(store)

    async def get_store(self, store_id: int) -> Store:
        return await self.stores.get_store(_require_store_id(store_id))

    async def list_stores(self) -> List[Store]:
        return await self.stores.list_stores()

    async def update_store(
        self, store_id: int, name: Optional[str] = None, location_id: Optional[str] = None
    ) -> Store:
        """
        Rename or relocate a store.

        Raises:
            StoreNotFoundError: If no store has this id
            NodeNotFoundError: If the new location is not a graph node
        """
        _require_store_id(store_id)
        if location_id is None:
            return await self.stores.update_store(store_id, name=name)
        coordinates = await self._location(location_id)
        return await self.stores.update_store(
            store_id, name=name, location_id=location_id, x=coordinates.x, y=coordinates.y
        )

    async def delete_store(self, store_id: int) -> Store:
        return await self.stores.delete_store(_require_store_id(store_id))

    # Product operations

    async def add_product(self, store_id: int, name: str, price: float) -> Product:
        return await self.stores.add_product(_require_store_id(store_id), name, price)

    async def remove_product(self, store_id: int, product_name: str) -> int:
        validate_identifier("product name", product_name)
        return await self.stores.remove_product(_require_store_id(store_id), product_name)

    async def get_products(self, store_id: int) -> List[Product]:
        return await self.stores.get_products(_require_store_id(store_id))

    async def update_product(
        self,
        store_id: int,
        product_id: int,
        name: Optional[str] = None,
        price: Optional[float] = None,
    ) -> Product:
        return await self.stores.update_product(
            _require_store_id(store_id), product_id, name=name, price=price
        )

    # Queries

    async def find_nearest_store(
        self, location_id: str, product_name: str, timeout: Optional[float] = None
    ) -> Optional[FacilityMatch[Store]]:
        """
        Find the store stocking a product with the cheapest path from a location.

        When several stocking stores share a location, the lowest store id wins.

        Returns:
            FacilityMatch with the store, the path and its weight, or None

        Raises:
            ValidationError: If the product name is blank
            NodeNotFoundError: If the location is not a graph node
            SearchTimeoutError: If the search runs past its timeout
        """
        validate_identifier("product name", product_name)
        facilities: Dict[str, Store] = {}
        for store in await self.stores.list_stores():
            if store.stocks(product_name):
                facilities.setdefault(store.location_id, store)

        match = await self.graph.nearest_facility_async(
            location_id,
            facilities,
            lambda store: store.stocks(product_name),
            timeout=timeout,
        )
        if match is None:
            logger.info(f"No store with '{product_name}' reachable from {location_id}")
        return match

    async def find_cheapest_store(self, product_name: str) -> Optional[Tuple[Store, Product]]:
        """Find the store selling a product at the lowest price, or None."""
        validate_identifier("product name", product_name)
        return await self.stores.find_cheapest_with_product(product_name)

    async def clear_all(self) -> None:
        """Remove every node, edge and store."""
        await self.graph.run_async(self.graph.clear)
        await self.stores.clear()

    async def _location(self, location_id: str) -> Coordinates:
        validate_identifier("location id", location_id)
        if not await self.graph.run_async(self.graph.has_node, location_id):
            raise NodeNotFoundError(f"Location is not a graph node: {location_id}")
        return await self.graph.run_async(self.graph.get_coordinates, location_id)
