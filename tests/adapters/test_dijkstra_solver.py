"""Tests for the Dijkstra route solver."""

import math

import pytest

from metrograph.adapters.graph import CSVStationRepository, DijkstraRouteSolver
from metrograph.config import GraphConfig
from metrograph.domain.errors import NoRouteFoundError, StationNotFoundError


@pytest.fixture
def network(graph_config):
    return CSVStationRepository(graph_config).load()


def test_route_through_transfer(network):
    route = DijkstraRouteSolver().solve(network, 0, 4)

    assert route.path == (0, 1, 5, 4)
    assert [s.name for s in route.stations] == [
        "Louvre - Rivoli",
        "Châtelet",
        "Châtelet",
        "Pyramides",
    ]
    assert route.total_minutes == pytest.approx(
        network.weight(0, 1) + 4.0 + network.weight(5, 4)
    )


def test_route_to_self(network):
    route = DijkstraRouteSolver().solve(network, 2, 2)

    assert route.path == (2,)
    assert route.total_minutes == 0.0


def test_unknown_station(network):
    with pytest.raises(StationNotFoundError) as excinfo:
        DijkstraRouteSolver().solve(network, 0, 99)

    assert excinfo.value.station_id == 99


def test_no_route(network_dir):
    (network_dir / "transfers.csv").unlink()
    network = CSVStationRepository(GraphConfig(data_dir=network_dir)).load()

    with pytest.raises(NoRouteFoundError) as excinfo:
        DijkstraRouteSolver().solve(network, 0, 4)

    assert (excinfo.value.departure, excinfo.value.arrival) == (0, 4)


def test_solve_safe_returns_empty_route(network):
    route = DijkstraRouteSolver().solve_safe(network, 0, 99)

    assert route.is_empty
    assert math.isinf(route.total_minutes)
