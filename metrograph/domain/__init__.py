"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DuplicatePayloadError,
    GeocodingError,
    GraphError,
    InvalidStartError,
    MetroGraphError,
    NegativeCycleError,
    NodeNotFoundError,
    NoRouteFoundError,
    NotSquareError,
    RegistryFrozenError,
    StationNotFoundError,
)
from .models import GeoLocation, RouteResult, RouteStep, Station

__all__ = [
    # Models
    "GeoLocation",
    "Station",
    "RouteStep",
    "RouteResult",
    # Errors
    "MetroGraphError",
    "DuplicatePayloadError",
    "NodeNotFoundError",
    "InvalidStartError",
    "RegistryFrozenError",
    "NotSquareError",
    "NegativeCycleError",
    "GraphError",
    "StationNotFoundError",
    "NoRouteFoundError",
    "GeocodingError",
    "ConfigurationError",
]
