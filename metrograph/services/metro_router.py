"""Metro router service - Main orchestrator.

Turns two addresses into a metro route:
1. Geocode each address
2. Locate the nearest station to each point
3. Compute the shortest route over the station graph
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..config import RoutingConfig, get_config
from ..domain.errors import (
    ConfigurationError,
    GeocodingError,
    NodeNotFoundError,
    NoRouteFoundError,
    StationNotFoundError,
)
from ..domain.models import GeoLocation, RouteResult
from ..graph.geo import nearest_node
from ..graph.shortest_path import AllPairsPaths, floyd_warshall
from ..ports.geocoding import GeocoderPort
from ..ports.graph import RouteSolverPort, StationRepositoryPort

NO_ROUTE_MESSAGE = "No route available"


@dataclass
class MetroRouterService:
    """Main service for routing between addresses on the metro network.

    The station graph is loaded once by the repository and only read
    afterwards, so one service instance can serve concurrent requests.

    Attributes:
        station_repository: Loads the station graph
        geocoder: Turns addresses into coordinates
        route_solver: Computes shortest routes
        routing: Routing limits
    """

    station_repository: StationRepositoryPort
    geocoder: GeocoderPort
    route_solver: RouteSolverPort
    routing: RoutingConfig = field(default_factory=lambda: get_config().routing)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def locate(self, address: str) -> GeoLocation:
        """Geocode an address.

        Raises:
            GeocodingError: If the address cannot be found or the service fails.
        """
        location = self.geocoder.geocode(address)
        if location is None:
            raise GeocodingError(f"Address not found: {address!r}", query=address)
        return location

    def nearest_station_to(self, location: GeoLocation) -> int:
        """Return the id of the station closest to ``location``."""
        graph = self.station_repository.load()
        return nearest_node(graph, location.longitude, location.latitude)

    def nearest_station(self, address: str) -> int:
        """Return the id of the station closest to an address.

        Raises:
            GeocodingError: If the address cannot be geocoded.
        """
        location = self.locate(address)
        station_id = self.nearest_station_to(location)
        self._logger.debug(
            "Nearest station located",
            extra={"address": address, "station_id": station_id},
        )
        return station_id

    def route_between_stations(self, departure: int, arrival: int) -> RouteResult:
        """Compute the shortest route between two station ids.

        Raises:
            StationNotFoundError: If a station id is unknown.
            NoRouteFoundError: If the stations are not connected.
        """
        graph = self.station_repository.load()
        return self.route_solver.solve(graph, departure, arrival)

    def route_between_addresses(self, origin: str, destination: str) -> RouteResult:
        """Compute the metro route between two free-text addresses.

        Raises:
            GeocodingError: If an address cannot be geocoded.
            NoRouteFoundError: If the nearest stations are not connected.
        """
        self._logger.info(
            "Starting route resolution",
            extra={"origin": origin, "destination": destination},
        )

        departure = self.nearest_station(origin)
        arrival = self.nearest_station(destination)
        route = self.route_between_stations(departure, arrival)

        self._logger.info(
            "Route computed",
            extra={"stops": route.num_stops, "minutes": route.total_minutes},
        )
        return route

    def resolve_safe(
        self, origin: str, destination: str
    ) -> Tuple[Optional[RouteResult], Optional[str]]:
        """Resolve a route, returning an error message instead of raising.

        Lookup failures are turned into user-facing messages; anything
        else (e.g. unreadable network data) still propagates.

        Returns:
            Tuple of (RouteResult or None, error message or None).
        """
        try:
            return self.route_between_addresses(origin, destination), None
        except GeocodingError as e:
            if e.is_rate_limited:
                return None, "Geocoding service busy, try again later"
            return None, f"Address not found: {e.query}"
        except (NodeNotFoundError, StationNotFoundError, NoRouteFoundError) as e:
            self._logger.info("No route available", extra={"reason": str(e)})
            return None, NO_ROUTE_MESSAGE

    def travel_time_matrix(self) -> AllPairsPaths:
        """All-pairs travel times and routes over the whole network.

        Raises:
            ConfigurationError: If the network exceeds
                ``routing.max_all_pairs_order`` stations.
        """
        graph = self.station_repository.load()
        limit = self.routing.max_all_pairs_order
        if graph.order > limit:
            raise ConfigurationError(
                f"Network has {graph.order} stations, above the all-pairs limit of {limit}",
                setting_name="max_all_pairs_order",
                value=limit,
            )
        return floyd_warshall(graph)
