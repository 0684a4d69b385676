"""Graph ports - Abstractions for network loading and routing.

These protocols define the contracts for graph operations, including
loading the station network and computing shortest routes over it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import RouteResult, Station
    from ..graph.graph import Graph


class StationRepositoryPort(Protocol):
    """Port for loading the station network.

    Implementation: adapters/graph/csv_repository.py

    The repository builds the transit graph once, keyed by the
    pre-assigned station ids, with travel minutes as edge weights.
    """

    def load(self) -> Graph[Station]:
        """Load the station graph.

        Returns:
            The immutable graph whose payloads are stations.
        """
        ...

    def get_station(self, station_id: int) -> Optional[Station]:
        """Get station details by id.

        Args:
            station_id: The station id to look up.

        Returns:
            The station, or None if not found.
        """
        ...

    def list_stations(self) -> Sequence[Station]:
        """List all stations in id order."""
        ...


class RouteSolverPort(Protocol):
    """Port for route computation.

    Implementation: adapters/graph/dijkstra_solver.py
    """

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
        """
        ...
