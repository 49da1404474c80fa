"""Tests for the line-delimited JSON navigator server."""

import asyncio
import json

import pytest

from storenav.infrastructure.client import NavigatorClient
from storenav.infrastructure.server import NavigatorServer, make_response
from storenav.services import StoreService

DEMO_REQUESTS = [
    ("graph/addNode", {"nodeName": "A", "x": 0, "y": 0}),
    ("graph/addNode", {"nodeName": "B", "x": 2, "y": 0}),
    ("graph/addNode", {"nodeName": "C", "x": 4, "y": 0}),
    ("graph/addNode", {"nodeName": "D", "x": 6, "y": 0}),
    ("graph/addNode", {"nodeName": "X", "x": 4, "y": 2}),
    ("graph/addNode", {"nodeName": "Z", "x": 8, "y": 0}),
    ("graph/addEdge", {"from": "A", "to": "B", "weight": 2}),
    ("graph/addEdge", {"from": "B", "to": "C", "weight": 2}),
    ("graph/addEdge", {"from": "C", "to": "D", "weight": 2}),
    ("graph/addEdge", {"from": "B", "to": "X", "weight": 3}),
    ("graph/addEdge", {"from": "D", "to": "Z", "weight": 2}),
    ("store/add", {"name": "Tech", "location_id": "C", "products": [{"name": "Mouse", "price": 59.9}]}),
    ("store/add", {"name": "Mall", "location_id": "X", "products": [{"name": "Mouse", "price": 99.9}]}),
    ("store/add", {"name": "Outlet", "location_id": "Z", "products": [{"name": "Mouse", "price": 49.9}]}),
]


def request(action, body=None):
    return {"headers": {"action": action}, "body": body}


@pytest.fixture
def run_server(tmp_path):
    """Fixture running a scenario against a server holding the demo town."""

    def runner(scenario):
        async def main():
            service = StoreService.create(str(tmp_path))
            await service.initialize()
            server = NavigatorServer(service, port=0)
            try:
                for action, body in DEMO_REQUESTS:
                    response = await server.handle_request(request(action, body))
                    assert response["success"], response["message"]
                return await scenario(server)
            finally:
                await server.stop()
                service.close()

        return asyncio.run(main())

    return runner


def test_make_response_serializes_body():
    response = make_response(True, "ok", {"path": ("A", "B")})
    assert response == {"success": True, "message": "ok", "body": {"path": ["A", "B"]}}


def test_find_nearest_follows_road_closure(run_server):
    async def scenario(server):
        query = request("store/findNearest", {"location": "A", "productName": "Mouse"})
        before = await server.handle_request(query)
        closed = await server.handle_request(request("graph/removeEdge", {"from": "B", "to": "C"}))
        after = await server.handle_request(query)
        return before, closed, after

    before, closed, after = run_server(scenario)

    assert before["message"] == "Nearest store found"
    assert before["body"]["store"]["name"] == "Tech"
    assert before["body"]["path"] == ["A", "B", "C"]
    assert before["body"]["total_weight"] == pytest.approx(4.0)
    assert closed == {"success": True, "message": "Edge removed successfully", "body": None}
    assert after["body"]["store"]["name"] == "Mall"
    assert after["body"]["path"] == ["A", "B", "X"]


def test_find_nearest_passes_timeout(run_server):
    async def scenario(server):
        seen = []
        find_nearest_store = server.service.find_nearest_store

        async def recording(location_id, product_name, timeout=None):
            seen.append(timeout)
            return await find_nearest_store(location_id, product_name, timeout)

        server.service.find_nearest_store = recording
        body = {"location": "A", "productName": "Mouse"}
        default = await server.handle_request(request("store/findNearest", body))
        bounded = await server.handle_request(request("store/findNearest", {**body, "timeout": 5}))
        return seen, default, bounded

    seen, default, bounded = run_server(scenario)

    assert seen == [None, 5]
    assert default["body"]["path"] == bounded["body"]["path"] == ["A", "B", "C"]


def test_find_cheapest(run_server):
    async def scenario(server):
        return await server.handle_request(request("store/findCheapest", {"productName": "mouse"}))

    response = run_server(scenario)

    assert response["message"] == "Cheapest store found"
    assert response["body"]["store"]["location_id"] == "Z"
    assert response["body"]["product"] == {"id": 3, "name": "Mouse", "price": 49.9}


def test_no_store_found_is_not_an_error(run_server):
    async def scenario(server):
        return (
            await server.handle_request(
                request("store/findNearest", {"location": "A", "productName": "Monitor"})
            ),
            await server.handle_request(request("store/findCheapest", {"productName": "Monitor"})),
        )

    nearest, cheapest = run_server(scenario)

    assert nearest["success"] and nearest["body"] is None
    assert cheapest["success"] and cheapest["body"] is None


def test_shortest_path_and_algorithm_switch(run_server):
    async def scenario(server):
        switched = await server.handle_request(request("graph/useAlgorithm", {"algorithm": "astar"}))
        path = await server.handle_request(request("graph/shortestPath", {"from": "A", "to": "Z"}))
        await server.handle_request(request("graph/addNode", {"nodeName": "Q", "x": 50, "y": 50}))
        unreachable = await server.handle_request(
            request("graph/shortestPath", {"from": "A", "to": "Q"})
        )
        return switched, path, unreachable

    switched, path, unreachable = run_server(scenario)

    assert switched["message"] == "Using a_star"
    assert switched["body"] == {"algorithm": "a_star"}
    assert path["body"] == {"path": ["A", "B", "C", "D", "Z"], "total_weight": 8.0}
    assert unreachable["success"]
    assert unreachable["message"] == "No path found"
    assert unreachable["body"] == {"path": [], "total_weight": 0.0}


def test_nodes_and_edges(run_server):
    async def scenario(server):
        return (
            await server.handle_request(request("graph/getNodes")),
            await server.handle_request(request("graph/getEdges", {})),
        )

    nodes, edges = run_server(scenario)

    assert nodes["body"]["X"] == {"x": 4.0, "y": 2.0}
    assert len(edges["body"]) == 5
    assert {"source": "A", "target": "B", "weight": 2.0} in edges["body"]


def test_store_and_product_actions(run_server):
    async def scenario(server):
        responses = {}
        responses["get"] = await server.handle_request(request("store/get", {"id": 1}))
        responses["update"] = await server.handle_request(
            request("store/update", {"id": 1, "name": "Tech Plus", "location_id": "D"})
        )
        responses["add_product"] = await server.handle_request(
            request("store/addProduct", {"storeId": 1, "product": {"name": "Cable", "price": 5}})
        )
        responses["update_product"] = await server.handle_request(
            request("store/updateProduct", {"storeId": 1, "product": {"id": 1, "price": 39.9}})
        )
        responses["remove_product"] = await server.handle_request(
            request("store/removeProduct", {"storeId": 1, "productName": "Cable"})
        )
        responses["products"] = await server.handle_request(
            request("store/getProducts", {"storeId": 1})
        )
        responses["delete"] = await server.handle_request(request("store/delete", {"id": 2}))
        responses["all"] = await server.handle_request(request("store/getAll"))
        return responses

    responses = run_server(scenario)

    assert responses["get"]["body"]["name"] == "Tech"
    assert responses["update"]["body"]["location_id"] == "D"
    assert responses["update"]["body"]["x"] == 6.0
    assert responses["add_product"]["body"] == {"id": 4, "name": "Cable", "price": 5.0}
    assert responses["update_product"]["body"]["price"] == 39.9
    assert responses["remove_product"]["message"] == "Product removed from store"
    assert responses["products"]["body"] == [{"id": 1, "name": "Mouse", "price": 39.9}]
    assert responses["delete"]["message"] == "Store deleted"
    assert [store["id"] for store in responses["all"]["body"]] == [1, 3]


@pytest.mark.parametrize(
    "payload,message",
    [
        (request("graph/teleport", {}), "Unknown action: graph/teleport"),
        (request("graph/addEdge", {"from": "A", "to": "B"}), "Invalid body for graph/addEdge"),
        (request("store/get", {"id": "1"}), "Invalid body for store/get"),
        ({"body": {}}, "Malformed request"),
        ([1, 2, 3], "Malformed request"),
    ],
)
def test_rejected_requests(run_server, payload, message):
    async def scenario(server):
        return await server.handle_request(payload)

    response = run_server(scenario)

    assert response["success"] is False
    assert message in response["message"]
    assert response["body"] is None


def test_domain_errors_become_failure_responses(run_server):
    async def scenario(server):
        return (
            await server.handle_request(request("graph/addEdge", {"from": "A", "to": "B", "weight": -1})),
            await server.handle_request(request("graph/removeEdge", {"from": "A", "to": "Z"})),
            await server.handle_request(request("store/get", {"id": 42})),
            await server.handle_request(request("store/add", {"name": "Tech", "location_id": "C"})),
            await server.handle_request(request("graph/useAlgorithm", {"algorithm": "floyd"})),
        )

    responses = run_server(scenario)

    assert all(response["success"] is False for response in responses)
    negative, missing_edge, missing_store, duplicate, algorithm = responses
    assert "negative" in negative["message"]
    assert "No edge exists" in missing_edge["message"]
    assert "42" in missing_store["message"]
    assert "already exists" in duplicate["message"]
    assert "floyd" in algorithm["message"]


def test_clear_all_data(run_server):
    async def scenario(server):
        cleared = await server.handle_request(request("graph/clearAllData"))
        nodes = await server.handle_request(request("graph/getNodes"))
        stores = await server.handle_request(request("store/getAll"))
        return cleared, nodes, stores

    cleared, nodes, stores = run_server(scenario)

    assert cleared["message"] == "All data cleared successfully"
    assert nodes["body"] == {}
    assert stores["body"] == []


@pytest.mark.timeout(30)
def test_tcp_round_trip(run_server):
    async def scenario(server):
        await server.start()
        async with NavigatorClient("127.0.0.1", server.port) as client:
            nearest = await client.request(
                "store/findNearest", {"location": "A", "productName": "Mouse"}
            )
            unknown = await client.request("graph/teleport")

        reader, writer = await asyncio.open_connection("127.0.0.1", server.port)
        writer.write(b"not json\n")
        await writer.drain()
        invalid = json.loads(await reader.readline())
        writer.close()
        await writer.wait_closed()
        return nearest, unknown, invalid

    nearest, unknown, invalid = run_server(scenario)

    assert nearest["success"]
    assert nearest["body"]["path"] == ["A", "B", "C"]
    assert unknown["success"] is False
    assert invalid["success"] is False
    assert invalid["message"].startswith("Invalid JSON")
