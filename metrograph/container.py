"""Dependency injection container.

Wires the router's ports to their adapters. Registration is explicit
and adapters are built on first resolve, so tests can swap any port
for a fake before the service is created.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TypeVar

from .config import AppConfig, get_config
from .observability import configure_logging

T = TypeVar("T")


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        router = container.resolve(MetroRouterService)

        # Testing
        container = Container()
        container.register(GeocoderPort, lambda: FakeGeocoder())
        geocoder = container.resolve(GeocoderPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Registering a type again replaces its factory and drops any
        instance already built from the previous one.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons."""
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.geocoding import NominatimGeocoderAdapter
        from .adapters.graph import CSVStationRepository, DijkstraRouteSolver
        from .ports.cache import CachePort
        from .ports.geocoding import GeocoderPort
        from .ports.graph import RouteSolverPort, StationRepositoryPort
        from .services import MetroRouterService

        config = config or get_config()
        container = cls(config=config)

        # Cache (shared across adapters)
        cache: InMemoryCache[Any] = InMemoryCache(name="global")
        container.register(CachePort, lambda: cache)

        container.register(
            GeocoderPort,
            lambda: NominatimGeocoderAdapter(
                config.geocoding, container.resolve(CachePort)
            ),
        )
        container.register(
            StationRepositoryPort,
            lambda: CSVStationRepository(config.graph),
        )
        container.register(RouteSolverPort, lambda: DijkstraRouteSolver())

        def create_router() -> MetroRouterService:
            return MetroRouterService(
                station_repository=container.resolve(StationRepositoryPort),
                geocoder=container.resolve(GeocoderPort),
                route_solver=container.resolve(RouteSolverPort),
                routing=config.routing,
            )

        container.register(MetroRouterService, create_router)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container, creating it if needed.

    Creating the default container also applies the logging settings
    from ``config.observability``. Applications building their own
    :class:`Container` call :func:`~metrograph.observability.configure_logging`
    themselves.
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                container = Container.create_default()
                configure_logging(container.config.observability)
                _default_container = container
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
