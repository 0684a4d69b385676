"""Typed errors for the metro graph engine and router.

Engine errors (registry, construction, traversal, path finding) and
service errors (loading, geocoding, routing) share a single root so
callers can catch everything raised by the package in one place.

All errors can optionally wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class MetroGraphError(Exception):
    """Base error for the metrograph package.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class DuplicatePayloadError(MetroGraphError):
    """A payload equal to an already registered one was registered again.

    Attributes:
        existing_id: Id of the node already holding an equal payload
    """

    existing_id: int = -1


@dataclass
class NodeNotFoundError(MetroGraphError):
    """No node matches the requested id or payload.

    Attributes:
        node_id: The id that was looked up, if any
    """

    node_id: Optional[int] = None


@dataclass
class InvalidStartError(NodeNotFoundError):
    """A traversal or path search was given a node absent from the graph."""


@dataclass
class RegistryFrozenError(MetroGraphError):
    """Registration attempted on a registry frozen by graph construction."""


@dataclass
class NotSquareError(MetroGraphError):
    """An adjacency matrix does not have as many columns as rows.

    Attributes:
        rows: Number of rows in the matrix
        columns: Length of the offending row
    """

    rows: int = 0
    columns: int = 0


@dataclass
class NegativeCycleError(MetroGraphError):
    """Bellman-Ford still relaxed an edge after ``order`` passes.

    Attributes:
        start: Node id the search started from
    """

    start: Optional[int] = None


@dataclass
class GraphError(MetroGraphError):
    """Graph loading or data integrity error.

    Attributes:
        file_path: Path to the graph data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class StationNotFoundError(MetroGraphError):
    """Station id not found in the network.

    Attributes:
        station_id: The station id that was not found
    """

    station_id: Optional[int] = None


@dataclass
class NoRouteFoundError(MetroGraphError):
    """No path exists between the requested stations.

    Attributes:
        departure: Departure station id
        arrival: Arrival station id
    """

    departure: Optional[int] = None
    arrival: Optional[int] = None


@dataclass
class GeocodingError(MetroGraphError):
    """Failed to turn an address into coordinates.

    Attributes:
        query: The address that failed
        is_rate_limited: Whether the failure was due to rate limiting
    """

    query: str = ""
    is_rate_limited: bool = False


@dataclass
class ConfigurationError(MetroGraphError):
    """Invalid configuration, or a request exceeding a configured bound.

    Attributes:
        setting_name: Name of the problematic setting
        value: The offending value, if any
    """

    setting_name: str = ""
    value: Optional[Any] = None
