"""metrograph - weighted graph engine and metro-network router.

The :mod:`metrograph.graph` subpackage holds the engine (registry,
graph construction, traversal, shortest paths, cycles, components);
the remaining packages wire it into a router that maps addresses to
stations and computes travel-time-optimal routes.
"""

__version__ = "0.1.0"

from .domain import GeoLocation, RouteResult, RouteStep, Station
from .graph import Graph, NodeRegistry

__all__ = [
    "Graph",
    "NodeRegistry",
    "GeoLocation",
    "Station",
    "RouteStep",
    "RouteResult",
    "__version__",
]
