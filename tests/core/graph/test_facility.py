"""
Tests for the nearest-facility sink-node query.
"""

import time

import pytest

from storenav.core.enums import Algorithm
from storenav.core.exceptions import NodeNotFoundError, SearchTimeoutError
from storenav.core.graph import GraphStore, NearestFacilityQuery, sink_id_for
from storenav.core.graph.facility import SINK_NODE


def stocks_mouse(store):
    return store.stocks("Mouse")


@pytest.fixture(params=[Algorithm.DIJKSTRA, Algorithm.A_STAR], ids=["dijkstra", "a_star"])
def algorithm(request):
    return request.param


def test_nearest_store_with_product(demo_graph, demo_stores, algorithm):
    query = NearestFacilityQuery(demo_graph.snapshot(), algorithm)

    match = query.run("A", demo_stores, stocks_mouse)

    assert match.facility.location_id == "C"
    assert match.location_id == "C"
    assert match.path == ("A", "B", "C")
    assert match.total_weight == pytest.approx(4.0)


def test_nearest_store_after_road_closure(demo_graph, demo_stores, algorithm):
    demo_graph.remove_edge("B", "C")
    query = NearestFacilityQuery(demo_graph.snapshot(), algorithm)

    match = query.run("A", demo_stores, stocks_mouse)

    assert match.facility.location_id == "X"
    assert match.path == ("A", "B", "X")
    assert match.total_weight == pytest.approx(5.0)


def test_store_at_source_short_circuits(demo_graph, demo_stores, monkeypatch):
    def no_search(algorithm):
        raise AssertionError("a qualifying facility at the source must not start a search")

    monkeypatch.setattr("storenav.core.graph.facility.finder_class", no_search)

    match = NearestFacilityQuery(demo_graph.snapshot()).run("Z", demo_stores, stocks_mouse)

    assert match.facility.location_id == "Z"
    assert match.path == ("Z",)
    assert match.total_weight == 0.0

    with pytest.raises(AssertionError, match="must not start a search"):
        NearestFacilityQuery(demo_graph.snapshot()).run("A", demo_stores, stocks_mouse)


def test_store_at_source_without_product_is_skipped(demo_graph, demo_stores):
    """Store A sells screens only, so the search continues to C."""
    match = NearestFacilityQuery(demo_graph.snapshot()).run("A", demo_stores, stocks_mouse)
    assert match.location_id == "C"


def test_no_qualifying_store(demo_graph, demo_stores):
    query = NearestFacilityQuery(demo_graph.snapshot())
    assert query.run("A", demo_stores, lambda store: store.stocks("Monitor")) is None


def test_qualifying_store_unreachable(demo_graph, demo_stores):
    demo_graph.add_node("Island", 100, 100)
    query = NearestFacilityQuery(demo_graph.snapshot())

    assert query.run("Island", demo_stores, stocks_mouse) is None


def test_unknown_source(demo_graph, demo_stores):
    with pytest.raises(NodeNotFoundError):
        NearestFacilityQuery(demo_graph.snapshot()).run("Q", demo_stores, stocks_mouse)


def test_facility_at_removed_location_is_ignored(demo_graph, demo_stores):
    demo_graph.remove_node("C")
    match = NearestFacilityQuery(demo_graph.snapshot()).run("A", demo_stores, stocks_mouse)
    assert match.location_id == "X"


def test_equidistant_facilities_resolve_to_lowest_location(algorithm):
    graph = GraphStore()
    for node in ("S", "Q", "P"):
        graph.add_node(node, 0, 0)
    # Q is connected first so it is discovered first
    graph.add_edge("S", "Q", 1)
    graph.add_edge("S", "P", 1)
    facilities = {"Q": "shop-q", "P": "shop-p"}

    match = NearestFacilityQuery(graph.snapshot(), algorithm).run(
        "S", facilities, lambda facility: True
    )

    assert match.facility == "shop-p"
    assert match.path == ("S", "P")


def test_equidistant_facilities_at_different_depths():
    graph = GraphStore()
    for node in ("S", "M", "R", "L"):
        graph.add_node(node, 0, 0)
    graph.add_edge("S", "M", 1)
    graph.add_edge("M", "R", 1)
    graph.add_edge("S", "L", 2)

    match = NearestFacilityQuery(graph.snapshot()).run(
        "S", {"R": "r", "L": "l"}, lambda facility: True
    )

    assert match.facility == "l"
    assert match.total_weight == pytest.approx(2.0)


def test_query_does_not_modify_graph(demo_graph, demo_stores):
    snapshot = demo_graph.snapshot()
    NearestFacilityQuery(snapshot).run("A", demo_stores, stocks_mouse)

    assert not snapshot.has_node(SINK_NODE)
    assert not demo_graph.has_node(SINK_NODE)
    assert demo_graph.edge_count() == 5


def test_sink_id_avoids_real_nodes(demo_graph, demo_stores):
    demo_graph.add_node(SINK_NODE, 1, 0)
    demo_graph.add_edge("A", SINK_NODE, 0.5)
    snapshot = demo_graph.snapshot()

    assert sink_id_for(snapshot) != SINK_NODE
    assert not snapshot.has_node(sink_id_for(snapshot))

    match = NearestFacilityQuery(snapshot).run("A", demo_stores, stocks_mouse)
    assert match.location_id == "C"
    assert match.path == ("A", "B", "C")


def test_expired_deadline(demo_graph, demo_stores):
    query = NearestFacilityQuery(demo_graph.snapshot())
    with pytest.raises(SearchTimeoutError):
        query.run("A", demo_stores, stocks_mouse, deadline=time.monotonic() - 1)
