"""Shared test fixtures."""

from typing import Dict, Iterator

import pytest

from storenav.core.coordinator import GraphCoordinator
from storenav.core.graph import GraphStore
from storenav.core.models import Product, Store

# Demo town: a road along the x axis with a detour to X
DEMO_NODES = {
    "A": (0.0, 0.0),
    "B": (2.0, 0.0),
    "C": (4.0, 0.0),
    "D": (6.0, 0.0),
    "X": (4.0, 2.0),
    "Z": (8.0, 0.0),
}

DEMO_EDGES = [
    ("A", "B", 2.0),
    ("B", "C", 2.0),
    ("C", "D", 2.0),
    ("B", "X", 3.0),
    ("D", "Z", 2.0),
]

# Products stocked per store location, in store id order
DEMO_STOCK = {
    "C": [("Mouse", 59.9)],
    "X": [("Mouse", 99.9), ("Keyboard", 45.0)],
    "Z": [("Mouse", 49.9)],
    "A": [("screen", 120.0)],
}


def build_demo_store() -> GraphStore:
    graph = GraphStore()
    for node, (x, y) in DEMO_NODES.items():
        graph.add_node(node, x, y)
    for from_node, to_node, weight in DEMO_EDGES:
        graph.add_edge(from_node, to_node, weight)
    return graph


def populate(coordinator: GraphCoordinator) -> None:
    for node, (x, y) in DEMO_NODES.items():
        coordinator.add_node(node, x, y)
    for from_node, to_node, weight in DEMO_EDGES:
        coordinator.add_edge(from_node, to_node, weight)


@pytest.fixture
def demo_graph() -> GraphStore:
    """Fixture providing the demo graph."""
    return build_demo_store()


@pytest.fixture
def demo_stores() -> Dict[str, Store]:
    """Fixture providing one store per stocked location, keyed by location."""
    stores = {}
    product_id = 0
    for store_id, (location, stock) in enumerate(DEMO_STOCK.items(), start=1):
        products = []
        for name, price in stock:
            product_id += 1
            products.append(Product(name=name, price=price, id=product_id))
        x, y = DEMO_NODES[location]
        stores[location] = Store(
            name=f"Store {location}", location_id=location, id=store_id, x=x, y=y, products=products
        )
    return stores


@pytest.fixture
def populate_demo():
    """Fixture providing a function loading the demo graph into a coordinator."""
    return populate


@pytest.fixture
def coordinator() -> Iterator[GraphCoordinator]:
    """Fixture providing a coordinator holding the demo graph."""
    graph = GraphCoordinator()
    populate(graph)
    yield graph
    graph.close()
