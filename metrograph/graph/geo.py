"""Geographic queries over graphs whose payloads carry coordinates."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..domain.errors import NodeNotFoundError
from ..domain.models import GeoLocation
from .graph import Graph

Locator = Callable[[Any], GeoLocation]


def payload_location(payload: Any) -> GeoLocation:
    """Default locator: the payload's ``location`` attribute (e.g. a Station)."""
    return payload.location


def haversine_km(a: GeoLocation, b: GeoLocation) -> float:
    return a.distance_km(b)


def nearest_node(
    graph: Graph[Any],
    longitude: float,
    latitude: float,
    locate: Optional[Locator] = None,
) -> int:
    """Return the node closest to a point, by great-circle distance.

    A linear scan over every node; on ties the first node in id order wins.

    Args:
        graph: Graph to scan.
        longitude: Longitude of the point, in degrees.
        latitude: Latitude of the point, in degrees.
        locate: Maps a payload to its coordinates; defaults to
            :func:`payload_location`.

    Raises:
        NodeNotFoundError: If the graph has no nodes.
    """
    locate = locate or payload_location
    target = GeoLocation(latitude=latitude, longitude=longitude)
    best: Optional[int] = None
    best_distance = float("inf")

    for node_id in graph.node_ids:
        distance = locate(graph.payload(node_id)).distance_km(target)
        if distance < best_distance:
            best = node_id
            best_distance = distance

    if best is None:
        raise NodeNotFoundError("Cannot locate a nearest node in an empty graph")
    return best
