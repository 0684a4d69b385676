import math

import pytest

from metrograph.domain.errors import (
    InvalidStartError,
    NodeNotFoundError,
    NotSquareError,
)
from metrograph.graph import NO_EDGE, Edge, Graph, NodeStyle
from metrograph.graph.edge import DEFAULT_EDGE_COLOR
from metrograph.graph.registry import ByPayload


def test_derived_properties(abcd):
    assert abcd.order == 4
    assert abcd.size == 4
    assert abcd.arc_count == 8
    assert abcd.density == pytest.approx(4 * 2 / (4 * 3))
    assert not abcd.is_directed
    assert abcd.is_weighted
    assert abcd.is_connected


def test_undirected_edges_listed_once(abcd):
    assert [(e.source, e.target, e.weight) for e in abcd.edges] == [
        (0, 1, 1.0),
        (0, 2, 4.0),
        (1, 2, 2.0),
        (2, 3, 1.0),
    ]
    assert not any(e.directed for e in abcd.edges)


def test_payloads_registered_in_key_order(abcd):
    assert [abcd.payload(n) for n in abcd.node_ids] == ["A", "B", "C", "D"]
    assert abcd.registry.is_frozen


def test_adjacency_matrix(abcd):
    matrix = abcd.adjacency_matrix()

    assert matrix[0] == (0.0, 1.0, 4.0, NO_EDGE)
    assert matrix[3] == (NO_EDGE, NO_EDGE, 1.0, 0.0)


def test_from_matrix_symmetric_is_undirected():
    graph = Graph.from_adjacency_matrix(
        [
            [0.0, 1.0, NO_EDGE],
            [1.0, 0.0, NO_EDGE],
            [NO_EDGE, NO_EDGE, 0.0],
        ]
    )

    assert graph.order == 3
    assert graph.size == 1
    assert not graph.is_directed
    assert not graph.is_weighted
    assert not graph.is_connected


def test_from_matrix_asymmetric_is_directed():
    graph = Graph.from_adjacency_matrix([[0.0, 2.0], [NO_EDGE, 0.0]])

    assert graph.is_directed
    assert graph.edges == (Edge(0, 1, 2.0, directed=True),)
    assert graph.density == pytest.approx(0.5)
    assert graph.has_edge(0, 1)
    assert not graph.has_edge(1, 0)


def test_different_weights_per_direction_make_two_directed_edges():
    graph = Graph.from_adjacency_list({0: {1: 2.0}, 1: {0: 3.0}})

    assert graph.is_directed
    assert graph.size == 2
    assert graph.arc_count == 2


def test_from_matrix_not_square():
    with pytest.raises(NotSquareError) as excinfo:
        Graph.from_adjacency_matrix([[0.0, 1.0], [1.0]])

    assert excinfo.value.rows == 2
    assert excinfo.value.columns == 1


def test_self_loops_are_dropped():
    graph = Graph.from_adjacency_list({0: {0: 5.0, 1: 1.0}, 1: {0: 1.0}})

    assert graph.size == 1
    assert graph.weight(0, 0) == NO_EDGE


def test_invalid_weight_rejected():
    with pytest.raises(ValueError):
        Graph.from_adjacency_list({0: {1: math.nan}})


def test_unweighted_adjacency():
    graph = Graph.from_unweighted_adjacency({0: [1], 1: [0, 2], 2: [1]})

    assert not graph.is_weighted
    assert graph.weight(1, 2) == 1.0
    assert graph.is_connected


def test_unknown_id_in_registry_raises():
    graph = Graph.from_payloads({"A": {"B": 1.0}})

    with pytest.raises(NodeNotFoundError):
        Graph.from_adjacency_list({0: {7: 1.0}}, graph.registry)


def test_node_ids_only_cover_listed_nodes():
    graph = Graph.from_adjacency_list({0: {2: 1.0}, 2: {0: 1.0}})

    assert graph.node_ids == (0, 2)
    assert 1 not in graph
    assert len(graph.registry) == 3


def test_empty_graph():
    graph = Graph.from_adjacency_list({})

    assert graph.order == 0
    assert graph.size == 0
    assert graph.density == 0.0
    assert graph.is_connected


def test_predecessors_and_neighbors_are_read_only(two_cycles):
    assert dict(two_cycles.neighbors(2)) == {0: 1.0, 3: 1.0}
    assert dict(two_cycles.predecessors(3)) == {2: 1.0, 4: 1.0}
    with pytest.raises(TypeError):
        two_cycles.neighbors(2)[5] = 1.0


def test_path_weight(abcd):
    assert abcd.path_weight([0, 1, 2, 3]) == 4.0
    assert abcd.path_weight([0, 3]) == NO_EDGE
    assert abcd.path_weight([2]) == 0.0


def test_resolve(abcd):
    assert abcd.resolve("C") == 2
    assert abcd.resolve(ByPayload("D")) == 3
    assert abcd.node(1).payload == "B"

    with pytest.raises(InvalidStartError):
        abcd.resolve("Z")
    with pytest.raises(NodeNotFoundError):
        abcd.resolve(42)


def test_subgraph_shares_registry(abcd):
    sub = abcd.subgraph([0, 1, 2])

    assert sub.registry is abcd.registry
    assert sub.node_ids == (0, 1, 2)
    assert sub.size == 3
    assert sub.payload(2) == "C"
    with pytest.raises(InvalidStartError):
        sub.resolve("D")


def test_subgraph_rejects_foreign_ids(abcd):
    with pytest.raises(NodeNotFoundError):
        abcd.subgraph([0, 9])


def test_styles_color_same_line_edges():
    styles = {
        0: NodeStyle("Louvre", "#FFCE00"),
        1: NodeStyle("Châtelet", "#FFCE00"),
        2: NodeStyle("Châtelet", "#662483"),
    }
    graph = Graph.from_adjacency_list(
        {0: {1: 1.0}, 1: {0: 1.0, 2: 4.0}, 2: {1: 4.0}}, styles=styles
    )

    colors = {(e.source, e.target): e.color for e in graph.edges}
    assert colors[(0, 1)] == "#FFCE00"
    assert colors[(1, 2)] == DEFAULT_EDGE_COLOR
    assert graph.style(2) == styles[2]
