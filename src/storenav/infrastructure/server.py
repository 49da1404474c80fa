"""
Navigator server for store and graph operations.

This module implements a TCP server speaking line-delimited JSON. Each line a
client sends is one request; the server answers each with one response line.

Request:
    {"headers": {"action": "store/findNearest"}, "body": {"location": "A", "productName": "Mouse"}}

Response:
    {"success": true, "message": "Nearest store found", "body": {...}}

The server provides:
- Store and product management
- Graph mutation and shortest path queries
- Nearest and cheapest store lookups
- Runtime switching of the path finding algorithm
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from ..core.exceptions import StoreNavError
from ..core.models import Product
from ..core.serialization import dumps, to_jsonable
from ..services.store_service import StoreService
from ..utils.validation import RequestValidator

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


def make_response(success: bool, message: str, body: Any = None) -> Dict[str, Any]:
    """Build a response envelope with a JSON-compatible body."""
    return {"success": success, "message": message, "body": to_jsonable(body)}


class NavigatorServer:
    """
    Line-delimited JSON server in front of a StoreService.

    Attributes:
        service (StoreService): Service every action is delegated to
        host (str): Interface to bind
        port (int): Port to bind; 0 picks a free port, updated by start()
    """

    def __init__(
        self,
        service: StoreService,
        host: str = "127.0.0.1",
        port: int = 5000,
        validator: Optional[RequestValidator] = None,
    ):
        self.service = service
        self.host = host
        self.port = port
        self.validator = validator or RequestValidator()
        self._server: Optional[asyncio.AbstractServer] = None
        self._handlers: Dict[str, Handler] = {
            "store/add": self._add_store,
            "store/get": self._get_store,
            "store/getAll": self._get_all_stores,
            "store/update": self._update_store,
            "store/delete": self._delete_store,
            "store/addProduct": self._add_product,
            "store/removeProduct": self._remove_product,
            "store/getProducts": self._get_products,
            "store/updateProduct": self._update_product,
            "store/findNearest": self._find_nearest,
            "store/findCheapest": self._find_cheapest,
            "graph/addNode": self._add_node,
            "graph/addEdge": self._add_edge,
            "graph/removeNode": self._remove_node,
            "graph/removeEdge": self._remove_edge,
            "graph/getNodes": self._get_nodes,
            "graph/getEdges": self._get_edges,
            "graph/shortestPath": self._shortest_path,
            "graph/useAlgorithm": self._use_algorithm,
            "graph/clearAllData": self._clear_all,
        }

    async def handle_request(self, request: Any) -> Dict[str, Any]:
        """
        Validate and execute one decoded request.

        Domain errors become failure responses carrying the error text.
        """
        try:
            action, body = self.validator.validate(request)
            handler = self._handlers.get(action)
            if handler is None:
                return make_response(False, f"Unknown action: {action}")
            return await handler(body)
        except StoreNavError as e:
            logger.info(f"Request failed: {str(e)}")
            return make_response(False, str(e))
        except Exception as e:
            logger.exception(f"Unexpected error while handling request: {str(e)}")
            return make_response(False, f"Internal server error: {str(e)}")

    async def _handle_connection(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        peer = writer.get_extra_info("peername")
        logger.debug(f"Client connected: {peer}")
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                if not line.strip():
                    continue
                try:
                    request = json.loads(line)
                except json.JSONDecodeError as e:
                    response = make_response(False, f"Invalid JSON: {e.msg}")
                else:
                    response = await self.handle_request(request)
                writer.write((dumps(response) + "\n").encode("utf-8"))
                await writer.drain()
        except ConnectionError as e:
            logger.warning(f"Connection to {peer} lost: {str(e)}")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass
            logger.debug(f"Client disconnected: {peer}")

    async def start(self) -> None:
        """Bind the listening socket."""
        self._server = await asyncio.start_server(self._handle_connection, self.host, self.port)
        self.port = self._server.sockets[0].getsockname()[1]
        logger.info(f"Navigator server listening on {self.host}:{self.port}")

    async def serve_forever(self) -> None:
        if self._server is None:
            await self.start()
        async with self._server:
            await self._server.serve_forever()

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None
            logger.info("Navigator server stopped")

    # Store operations

    async def _add_store(self, body: Dict[str, Any]) -> Dict[str, Any]:
        products = [Product(name=p["name"], price=p["price"]) for p in body.get("products", [])]
        store = await self.service.add_store(body["name"], body["location_id"], products)
        return make_response(True, "Store added", store)

    async def _get_store(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return make_response(True, "Store found", await self.service.get_store(body["id"]))

    async def _get_all_stores(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return make_response(True, "All stores retrieved", await self.service.list_stores())

    async def _update_store(self, body: Dict[str, Any]) -> Dict[str, Any]:
        store = await self.service.update_store(
            body["id"], name=body.get("name"), location_id=body.get("location_id")
        )
        return make_response(True, "Store updated", store)

    async def _delete_store(self, body: Dict[str, Any]) -> Dict[str, Any]:
        await self.service.delete_store(body["id"])
        return make_response(True, "Store deleted")

    async def _add_product(self, body: Dict[str, Any]) -> Dict[str, Any]:
        product = body["product"]
        created = await self.service.add_product(body["storeId"], product["name"], product["price"])
        return make_response(True, "Product added to store", created)

    async def _remove_product(self, body: Dict[str, Any]) -> Dict[str, Any]:
        await self.service.remove_product(body["storeId"], body["productName"])
        return make_response(True, "Product removed from store")

    async def _get_products(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return make_response(True, "Products retrieved", await self.service.get_products(body["storeId"]))

    async def _update_product(self, body: Dict[str, Any]) -> Dict[str, Any]:
        product = body["product"]
        updated = await self.service.update_product(
            body["storeId"], product["id"], name=product.get("name"), price=product.get("price")
        )
        return make_response(True, "Product updated", updated)

    async def _find_nearest(self, body: Dict[str, Any]) -> Dict[str, Any]:
        match = await self.service.find_nearest_store(
            body["location"], body["productName"], body.get("timeout")
        )
        if match is None:
            return make_response(True, f"No store with {body['productName']} is reachable")
        return make_response(
            True,
            "Nearest store found",
            {"store": match.facility, "path": match.path, "total_weight": match.total_weight},
        )

    async def _find_cheapest(self, body: Dict[str, Any]) -> Dict[str, Any]:
        found = await self.service.find_cheapest_store(body["productName"])
        if found is None:
            return make_response(True, f"No store sells {body['productName']}")
        store, product = found
        return make_response(True, "Cheapest store found", {"store": store, "product": product})

    # Graph operations

    async def _add_node(self, body: Dict[str, Any]) -> Dict[str, Any]:
        await self.service.add_node(body["nodeName"], body["x"], body["y"])
        return make_response(True, "Node added successfully")

    async def _add_edge(self, body: Dict[str, Any]) -> Dict[str, Any]:
        await self.service.add_edge(body["from"], body["to"], body["weight"])
        return make_response(True, "Edge added successfully")

    async def _remove_node(self, body: Dict[str, Any]) -> Dict[str, Any]:
        await self.service.remove_node(body["nodeName"])
        return make_response(True, "Node removed successfully")

    async def _remove_edge(self, body: Dict[str, Any]) -> Dict[str, Any]:
        await self.service.remove_edge(body["from"], body["to"])
        return make_response(True, "Edge removed successfully")

    async def _get_nodes(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return make_response(True, "Nodes retrieved successfully", await self.service.get_nodes())

    async def _get_edges(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return make_response(True, "Edges retrieved successfully", await self.service.get_edges())

    async def _shortest_path(self, body: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.service.shortest_path(body["from"], body["to"], body.get("timeout"))
        message = "Shortest path found" if result.found else "No path found"
        return make_response(True, message, result)

    async def _use_algorithm(self, body: Dict[str, Any]) -> Dict[str, Any]:
        algorithm = await self.service.use_algorithm(body["algorithm"])
        return make_response(True, f"Using {algorithm.value}", {"algorithm": algorithm})

    async def _clear_all(self, body: Dict[str, Any]) -> Dict[str, Any]:
        await self.service.clear_all()
        return make_response(True, "All data cleared successfully")
