"""Command Line Interface for the store navigator.

This module provides a CLI operating directly on the configured data
directory, without a running server. It supports building the location graph,
registering stores and products, and running path and store queries.

The CLI supports the following commands:
    - add-node / remove-node: Manage graph locations
    - add-edge / remove-edge: Manage undirected weighted roads
    - shortest-path: Cheapest path between two locations
    - list: Display all locations, roads and stores
    - add-store / add-product: Manage store records
    - nearest: Nearest store stocking a product
    - cheapest: Store selling a product at the lowest price

Example Usage:
    python -m storenav cli add-node A 0 0
    python -m storenav cli add-edge A B 2
    python -m storenav cli --algorithm a_star nearest A Mouse
    python -m storenav serve --port 5000
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings, configure_logging, load_settings
from .core.exceptions import StoreNavError
from .infrastructure.server import NavigatorServer
from .services.store_service import StoreService

logger = logging.getLogger(__name__)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data-dir", help="Directory holding graph.json and stores.json")
    parser.add_argument("--algorithm", help="Path finding algorithm: dijkstra or a_star")
    parser.add_argument("--log-level", help="Logging level")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="storenav cli", description="Store navigator CLI")
    add_common_arguments(parser)
    parser.add_argument("--timeout", type=float, help="Query timeout in seconds")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    add_node = subparsers.add_parser("add-node", help="Add a location or move an existing one")
    add_node.add_argument("node")
    add_node.add_argument("x", type=float)
    add_node.add_argument("y", type=float)

    remove_node = subparsers.add_parser("remove-node", help="Remove a location and its roads")
    remove_node.add_argument("node")

    add_edge = subparsers.add_parser("add-edge", help="Add a road between two locations")
    add_edge.add_argument("from_node")
    add_edge.add_argument("to_node")
    add_edge.add_argument("weight", type=float)

    remove_edge = subparsers.add_parser("remove-edge", help="Remove every road between two locations")
    remove_edge.add_argument("from_node")
    remove_edge.add_argument("to_node")

    shortest = subparsers.add_parser("shortest-path", help="Find the cheapest path")
    shortest.add_argument("from_node")
    shortest.add_argument("to_node")

    subparsers.add_parser("list", help="List locations, roads and stores")

    add_store = subparsers.add_parser("add-store", help="Register a store at a location")
    add_store.add_argument("name")
    add_store.add_argument("location")

    add_product = subparsers.add_parser("add-product", help="Add a product to a store")
    add_product.add_argument("store_id", type=int)
    add_product.add_argument("name")
    add_product.add_argument("price", type=float)

    nearest = subparsers.add_parser("nearest", help="Nearest store stocking a product")
    nearest.add_argument("location")
    nearest.add_argument("product")

    cheapest = subparsers.add_parser("cheapest", help="Cheapest store selling a product")
    cheapest.add_argument("product")

    return parser


def create_service(settings: Settings) -> StoreService:
    return StoreService.create(
        str(settings.data_dir),
        algorithm=settings.algorithm,
        cache_size=settings.cache_size,
        cache_ttl=settings.cache_ttl,
        query_timeout=settings.query_timeout,
    )


async def list_all(service: StoreService) -> None:
    """Display all locations, roads and stores."""
    print("\nLocations:")
    for node, coordinates in (await service.get_nodes()).items():
        print(f"- {node} ({coordinates.x}, {coordinates.y})")

    print("\nRoads:")
    for edge in await service.get_edges():
        print(f"- {edge.source} <-> {edge.target} (weight {edge.weight})")

    print("\nStores:")
    for store in await service.list_stores():
        products = ", ".join(f"{p.name} {p.price:.2f}" for p in store.products) or "no products"
        print(f"- [{store.id}] {store.name} at {store.location_id}: {products}")


async def run_command(service: StoreService, args: argparse.Namespace) -> None:
    if args.command == "add-node":
        await service.add_node(args.node, args.x, args.y)
        print(f"Added location {args.node} ({args.x}, {args.y})")

    elif args.command == "remove-node":
        await service.remove_node(args.node)
        print(f"Removed location {args.node}")

    elif args.command == "add-edge":
        await service.add_edge(args.from_node, args.to_node, args.weight)
        print(f"Added road {args.from_node} <-> {args.to_node} (weight {args.weight})")

    elif args.command == "remove-edge":
        removed = await service.remove_edge(args.from_node, args.to_node)
        print(f"Removed {len(removed)} road(s) between {args.from_node} and {args.to_node}")

    elif args.command == "shortest-path":
        result = await service.shortest_path(args.from_node, args.to_node, args.timeout)
        if result.found:
            print(f"Path: {' -> '.join(result.path)} (weight {result.total_weight})")
        else:
            print(f"No path from {args.from_node} to {args.to_node}")

    elif args.command == "list":
        await list_all(service)

    elif args.command == "add-store":
        store = await service.add_store(args.name, args.location)
        print(f"Added store [{store.id}] {store.name} at {store.location_id}")

    elif args.command == "add-product":
        product = await service.add_product(args.store_id, args.name, args.price)
        print(f"Added product [{product.id}] {product.name} ({product.price:.2f}) to store {args.store_id}")

    elif args.command == "nearest":
        match = await service.find_nearest_store(args.location, args.product, args.timeout)
        if match is None:
            print(f"No store with {args.product} is reachable from {args.location}")
        else:
            store = match.facility
            print(f"Nearest store: [{store.id}] {store.name} at {store.location_id}")
            print(f"Path: {' -> '.join(match.path)} (distance {match.total_weight})")

    elif args.command == "cheapest":
        found = await service.find_cheapest_store(args.product)
        if found is None:
            print(f"No store sells {args.product}")
        else:
            store, product = found
            print(f"Cheapest: [{store.id}] {store.name} at {store.location_id} ({product.price:.2f})")


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application.

    Returns:
        int: Process exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = load_settings(
            data_dir=args.data_dir, algorithm=args.algorithm, log_level=args.log_level
        )
    except StoreNavError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(settings)

    service = create_service(settings)
    try:
        await service.initialize()
        await run_command(service, args)
    except StoreNavError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        service.close()
    return 0


def create_serve_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storenav serve", description="Run the navigator server")
    add_common_arguments(parser)
    parser.add_argument("--host", help="Interface to bind")
    parser.add_argument("--port", type=int, help="Port to bind")
    return parser


async def serve(argv: Optional[List[str]] = None) -> int:
    """Run the navigator server until interrupted."""
    args = create_serve_parser().parse_args(argv)
    try:
        settings = load_settings(
            data_dir=args.data_dir,
            algorithm=args.algorithm,
            log_level=args.log_level,
            host=args.host,
            port=args.port,
        )
    except StoreNavError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(settings)

    service = create_service(settings)
    server = NavigatorServer(service, host=settings.host, port=settings.port)
    try:
        await service.initialize()
        await server.serve_forever()
    except StoreNavError as e:
        logger.error(f"Server failed: {str(e)}")
        return 1
    finally:
        await server.stop()
        service.close()
    return 0
