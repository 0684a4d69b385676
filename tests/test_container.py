"""Tests for the dependency injection container."""

from unittest.mock import patch

import pytest

from metrograph.adapters.geocoding import NominatimGeocoderAdapter
from metrograph.adapters.graph import CSVStationRepository, DijkstraRouteSolver
from metrograph.config import AppConfig, GraphConfig
from metrograph.container import Container, get_container, reset_container
from metrograph.domain.models import GeoLocation
from metrograph.ports import CachePort, GeocoderPort, RouteSolverPort, StationRepositoryPort
from metrograph.services import MetroRouterService


class FakeGeocoder:
    def geocode(self, address):
        return GeoLocation(latitude=48.8531, longitude=2.3690)


@pytest.fixture
def config(network_dir):
    return AppConfig(graph=GraphConfig(data_dir=network_dir))


def test_default_bindings(config):
    container = Container.create_default(config)

    assert isinstance(container.resolve(StationRepositoryPort), CSVStationRepository)
    assert isinstance(container.resolve(RouteSolverPort), DijkstraRouteSolver)
    geocoder = container.resolve(GeocoderPort)
    assert isinstance(geocoder, NominatimGeocoderAdapter)
    assert geocoder.cache is container.resolve(CachePort)


def test_singletons(config):
    container = Container.create_default(config)

    assert container.resolve(MetroRouterService) is container.resolve(MetroRouterService)


def test_non_singleton_factory():
    container = Container(config=AppConfig())
    container.register(list, lambda: [], singleton=False)

    assert container.resolve(list) is not container.resolve(list)


def test_override_before_resolve(config):
    container = Container.create_default(config)
    container.register(GeocoderPort, FakeGeocoder)

    router = container.resolve(MetroRouterService)

    assert isinstance(router.geocoder, FakeGeocoder)
    assert router.nearest_station("anywhere") == 3


def test_unregistered_type():
    container = Container(config=AppConfig())

    assert not container.is_registered(MetroRouterService)
    with pytest.raises(KeyError):
        container.resolve(MetroRouterService)


def test_clear_all(config):
    container = Container.create_default(config)
    container.clear_all()

    assert not container.is_registered(GeocoderPort)


def test_global_container():
    reset_container()
    try:
        with patch("metrograph.container.configure_logging") as mock_configure:
            assert get_container() is get_container()
            assert get_container().is_registered(MetroRouterService)
    finally:
        reset_container()

    mock_configure.assert_called_once()


def test_global_container_applies_logging_settings():
    reset_container()
    try:
        with patch("metrograph.container.configure_logging") as mock_configure:
            container = get_container()
    finally:
        reset_container()

    mock_configure.assert_called_once_with(container.config.observability)
