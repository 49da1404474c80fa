"""Tests for the store service facade."""

import asyncio

import pytest

from storenav.core.enums import Algorithm
from storenav.core.exceptions import NodeNotFoundError, StoreNotFoundError, ValidationError
from storenav.core.models import Product
from storenav.services import StoreService


MOUSE_PRICES = {"C": 59.9, "X": 99.9, "Z": 49.9}


@pytest.fixture
def run_demo(tmp_path, populate_demo):
    """Fixture running a scenario against a service holding the demo town.

    Stores 1, 2 and 3 sell mice at C, X and Z.
    """

    def runner(scenario, algorithm=Algorithm.DIJKSTRA):
        async def main():
            service = StoreService.create(str(tmp_path), algorithm=algorithm)
            await service.initialize()
            try:
                populate_demo(service.graph)
                for location, price in sorted(MOUSE_PRICES.items()):
                    await service.add_store(f"Store {location}", location, [Product("Mouse", price)])
                return await scenario(service)
            finally:
                service.close()

        return asyncio.run(main())

    return runner


@pytest.mark.parametrize("algorithm", list(Algorithm))
def test_nearest_store_follows_road_closure(run_demo, algorithm):
    async def scenario(service):
        before = await service.find_nearest_store("A", "Mouse")
        await service.remove_edge("B", "C")
        after = await service.find_nearest_store("A", "mouse")
        return before, after

    before, after = run_demo(scenario, algorithm)

    assert before.facility.name == "Store C"
    assert before.path == ("A", "B", "C")
    assert before.total_weight == pytest.approx(4.0)
    assert after.facility.name == "Store X"
    assert after.path == ("A", "B", "X")
    assert after.total_weight == pytest.approx(5.0)


def test_cheapest_store(run_demo):
    async def scenario(service):
        return await service.find_cheapest_store("Mouse")

    store, product = run_demo(scenario)

    assert store.location_id == "Z"
    assert product.price == pytest.approx(49.9)


def test_no_store_with_product(run_demo):
    async def scenario(service):
        return (
            await service.find_nearest_store("A", "Monitor"),
            await service.find_cheapest_store("Monitor"),
        )

    assert run_demo(scenario) == (None, None)


def test_store_takes_location_coordinates(run_demo):
    async def scenario(service):
        return await service.get_store(2)

    store = run_demo(scenario)

    assert store.location_id == "X"
    assert (store.x, store.y) == (4.0, 2.0)


def test_store_at_unknown_location_rejected(run_demo):
    async def scenario(service):
        with pytest.raises(NodeNotFoundError, match="not a graph node"):
            await service.add_store("Nowhere", "Q")
        with pytest.raises(NodeNotFoundError):
            await service.update_store(1, location_id="Q")
        return await service.list_stores()

    assert len(run_demo(scenario)) == 3


def test_store_ids_are_validated(run_demo):
    async def scenario(service):
        for bad in (0, -1, "1", True):
            with pytest.raises(ValidationError):
                await service.get_store(bad)
        with pytest.raises(StoreNotFoundError):
            await service.get_store(99)

    run_demo(scenario)


def test_lowest_store_id_wins_at_shared_location(run_demo):
    async def scenario(service):
        await service.add_store("Corner", "C", [Product("Mouse", 10)])
        return await service.find_nearest_store("A", "Mouse")

    match = run_demo(scenario)

    assert match.facility.name == "Store C"
    assert match.facility.id == 1


def test_store_at_removed_location_is_skipped(run_demo):
    async def scenario(service):
        await service.remove_node("C")
        return await service.find_nearest_store("A", "Mouse")

    assert run_demo(scenario).facility.name == "Store X"


def test_unknown_search_location(run_demo):
    async def scenario(service):
        with pytest.raises(NodeNotFoundError):
            await service.find_nearest_store("Q", "Mouse")

    run_demo(scenario)


def test_relocating_store_changes_answer(run_demo):
    async def scenario(service):
        await service.update_store(3, location_id="B")
        return await service.find_nearest_store("A", "Mouse")

    match = run_demo(scenario)

    assert match.facility.name == "Store Z"
    assert match.path == ("A", "B")
    assert (match.facility.x, match.facility.y) == (2.0, 0.0)


def test_product_changes_affect_queries(run_demo):
    async def scenario(service):
        await service.remove_product(1, "Mouse")
        nearest = await service.find_nearest_store("A", "Mouse")
        product = await service.add_product(2, "Keyboard", 25)
        await service.update_product(2, product.id, price=15)
        products = await service.get_products(2)
        return nearest, products

    nearest, products = run_demo(scenario)

    assert nearest.facility.name == "Store X"
    assert [(p.name, p.price) for p in products] == [("Mouse", 99.9), ("Keyboard", 15.0)]


def test_use_algorithm(run_demo):
    async def scenario(service):
        algorithm = await service.use_algorithm("astar")
        result = await service.shortest_path("A", "Z")
        return algorithm, result

    algorithm, result = run_demo(scenario)

    assert algorithm is Algorithm.A_STAR
    assert result.total_weight == pytest.approx(8.0)


def test_state_survives_restart(run_demo, tmp_path):
    async def scenario(service):
        await service.remove_edge("B", "C")

    run_demo(scenario)

    async def restart():
        service = StoreService.create(str(tmp_path))
        await service.initialize()
        try:
            return await service.find_nearest_store("A", "Mouse"), await service.list_stores()
        finally:
            service.close()

    match, stores = asyncio.run(restart())

    assert match.facility.name == "Store X"
    assert len(stores) == 3


def test_clear_all(run_demo):
    async def scenario(service):
        await service.clear_all()
        return await service.get_nodes(), await service.get_edges(), await service.list_stores()

    assert run_demo(scenario) == ({}, [], [])
