import pytest

from metrograph.domain.errors import NodeNotFoundError
from metrograph.domain.models import GeoLocation, Station
from metrograph.graph import Graph, nearest_node
from metrograph.graph.geo import haversine_km


def _station(name, longitude, latitude, line="1"):
    return Station(line=line, name=name, location=GeoLocation(latitude, longitude))


@pytest.fixture
def line_one():
    louvre = _station("Louvre - Rivoli", 2.340917, 48.860855)
    chatelet = _station("Châtelet", 2.347420, 48.858420)
    bastille = _station("Bastille", 2.369164, 48.853202)
    return Graph.from_payloads(
        {
            louvre: {chatelet: 1.0},
            chatelet: {louvre: 1.0, bastille: 3.0},
            bastille: {chatelet: 3.0},
        }
    )


def test_nearest_node(line_one):
    # Place de la Bastille
    assert line_one.payload(nearest_node(line_one, 2.3690, 48.8531)).name == "Bastille"
    # Rue de Rivoli near the Louvre
    assert nearest_node(line_one, 2.3400, 48.8610) == 0


def test_nearest_node_ties_go_to_lowest_id():
    a = _station("A", 2.0, 48.0)
    b = _station("B", 2.0, 48.0, line="2")
    graph = Graph.from_payloads({a: {b: 1.0}, b: {a: 1.0}})

    assert nearest_node(graph, 2.0, 48.0) == 0


def test_nearest_node_custom_locator():
    graph = Graph.from_payloads({(2.0, 48.0): {(3.0, 49.0): 1.0}})

    def locate(payload):
        return GeoLocation(latitude=payload[1], longitude=payload[0])

    assert nearest_node(graph, 2.9, 48.9, locate=locate) == 1


def test_nearest_node_empty_graph():
    with pytest.raises(NodeNotFoundError):
        nearest_node(Graph.from_adjacency_list({}), 2.35, 48.85)


def test_haversine_paris_to_lyon():
    paris = GeoLocation(latitude=48.8566, longitude=2.3522)
    lyon = GeoLocation(latitude=45.7640, longitude=4.8357)

    assert haversine_km(paris, lyon) == pytest.approx(392, abs=5)
    assert haversine_km(paris, paris) == 0.0
