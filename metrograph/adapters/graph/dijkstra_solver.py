"""Dijkstra route solver adapter.

This adapter runs the engine's Dijkstra search over the station graph
and turns the result into a :class:`~metrograph.domain.models.RouteResult`
with station details, typed errors and logging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.errors import NoRouteFoundError, StationNotFoundError
from ...domain.models import RouteResult, Station
from ...graph.graph import NO_EDGE, Graph
from ...graph.shortest_path import shortest_route


@dataclass
class DijkstraRouteSolver:
    """Route solver using Dijkstra's shortest path algorithm.

    This adapter implements RouteSolverPort. Travel times are never
    negative, which keeps Dijkstra within its contract.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def solve(
        self,
        graph: Graph[Station],
        departure: int,
        arrival: int,
    ) -> RouteResult:
        """Find the shortest route between two stations.

        Args:
            graph: The station graph.
            departure: Departure station id.
            arrival: Arrival station id.

        Returns:
            RouteResult with path, travel time, and station details.

        Raises:
            StationNotFoundError: If departure or arrival not in graph.
            NoRouteFoundError: If no path exists.
        """
        self._logger.debug(
            "Solving route",
            extra={"departure": departure, "arrival": arrival},
        )

        if departure not in graph:
            raise StationNotFoundError(
                f"Departure station not in graph: {departure}",
                station_id=departure,
            )
        if arrival not in graph:
            raise StationNotFoundError(
                f"Arrival station not in graph: {arrival}",
                station_id=arrival,
            )

        path, minutes = shortest_route(graph, departure, arrival)

        if not path:
            self._logger.warning(
                "No route found",
                extra={"departure": departure, "arrival": arrival},
            )
            raise NoRouteFoundError(
                f"No path from {departure} to {arrival}",
                departure=departure,
                arrival=arrival,
            )

        stations = tuple(graph.payload(node_id) for node_id in path)

        self._logger.info(
            "Route found",
            extra={
                "departure": departure,
                "arrival": arrival,
                "stops": len(path),
                "minutes": minutes,
            },
        )

        return RouteResult(
            path=tuple(path),
            total_minutes=minutes,
            stations=stations,
        )

    def solve_safe(
        self,
        graph: Graph[Station],
        departure: int,
        arrival: int,
    ) -> RouteResult:
        """Find the shortest route, returning an empty result on failure."""
        try:
            return self.solve(graph, departure, arrival)
        except (StationNotFoundError, NoRouteFoundError):
            return RouteResult(path=(), total_minutes=NO_EDGE)
