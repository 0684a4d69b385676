"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the routing core and external
adapters. They enable dependency injection and make the system testable.
"""

from .cache import CachePort
from .geocoding import GeocoderPort
from .graph import RouteSolverPort, StationRepositoryPort

__all__ = [
    # Graph
    "StationRepositoryPort",
    "RouteSolverPort",
    # Geocoding
    "GeocoderPort",
    # Cache
    "CachePort",
]
