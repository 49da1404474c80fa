"""
Nearest-facility search through a sink-node reduction.

The query "which qualifying facility is closest to this node" is turned into a
single shortest path search: every qualifying facility location is joined by a
zero-weight edge to one synthetic sink node, and the path from the source to
the sink passes through the nearest facility. The sink and its edges live on a
private overlay finder built from a snapshot, so the live graph and the active
path finder are never touched and concurrent queries need no coordination.
"""

import logging
from typing import Callable, Generic, Mapping, Optional, TypeVar

from ..enums import Algorithm
from ..exceptions import NodeNotFoundError
from .state import GraphSnapshot
from .traversal import FacilityMatch, PathFinder, finder_class

logger = logging.getLogger(__name__)

F = TypeVar("F")

SINK_NODE = "__sink__"


def sink_id_for(snapshot: GraphSnapshot) -> str:
    """Pick a sink node id that no real node uses."""
    sink = SINK_NODE
    while snapshot.has_node(sink):
        sink = f"_{sink}_"
    return sink


class NearestFacilityQuery(Generic[F]):
    """
    Find the nearest facility satisfying a predicate.

    Attributes:
        snapshot (GraphSnapshot): Topology the query runs against
        algorithm (Algorithm): Strategy used for the overlay search
    """

    def __init__(self, snapshot: GraphSnapshot, algorithm: Algorithm = Algorithm.DIJKSTRA):
        self.snapshot = snapshot
        self.algorithm = algorithm

    def run(
        self,
        source: str,
        facilities: Mapping[str, F],
        qualifies: Callable[[F], bool],
        deadline: Optional[float] = None,
    ) -> Optional[FacilityMatch[F]]:
        """
        Find the qualifying facility closest to source.

        Args:
            source: Node id the search starts from
            facilities: Facility bound to each location id
            qualifies: Predicate selecting acceptable facilities
            deadline: Optional time.monotonic() deadline for the search

        Returns:
            FacilityMatch or None when no qualifying facility is reachable.
            Equidistant facilities resolve to the lowest location id.

        Raises:
            NodeNotFoundError: If source is not a graph node
            SearchTimeoutError: If the deadline passes during the search
        """
        if not self.snapshot.has_node(source):
            raise NodeNotFoundError(f"Node does not exist: {source}")

        local = facilities.get(source)
        if local is not None and qualifies(local):
            logger.debug(f"Facility at {source} qualifies, no search needed")
            return FacilityMatch(facility=local, path=(source,), total_weight=0.0)

        candidates = sorted(
            location
            for location, facility in facilities.items()
            if location != source and self.snapshot.has_node(location) and qualifies(facility)
        )
        if not candidates:
            logger.debug(f"No qualifying facility besides {source}")
            return None

        sink = sink_id_for(self.snapshot)
        overlay = self._build_overlay(sink, candidates)
        result = overlay.shortest_path(
            source, sink, deadline=deadline, prefer_lowest_predecessor=True
        )
        if not result.found:
            logger.debug(f"No qualifying facility reachable from {source}")
            return None

        path = result.path[:-1]
        location = path[-1]
        logger.info(
            f"Nearest facility from {source} is at {location} (weight {result.total_weight})"
        )
        return FacilityMatch(
            facility=facilities[location], path=path, total_weight=result.total_weight
        )

    def _build_overlay(self, sink: str, candidates: list) -> PathFinder:
        """Copy the snapshot into a fresh finder and attach the sink node."""
        overlay = finder_class(self.algorithm).from_snapshot(self.snapshot)
        overlay.add_node(sink)
        for location in candidates:
            overlay.add_edge(location, sink, 0.0)
        return overlay
