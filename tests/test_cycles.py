from metrograph.graph import Graph, find_any_cycle
from metrograph.graph.cycles import has_cycle


def test_triangle_reports_back_edge_when_not_simple(triangle):
    cycle = find_any_cycle(triangle, simple=False)

    assert [triangle.payload(n) for n in cycle] == ["A", "B"]


def test_triangle_reports_three_node_cycle_when_simple(triangle):
    cycle = find_any_cycle(triangle, simple=True)

    assert [triangle.payload(n) for n in cycle] == ["A", "B", "C"]


def test_directed_cycle():
    graph = Graph.from_adjacency_list({0: {1: 1.0}, 1: {2: 1.0}, 2: {0: 1.0}})

    assert find_any_cycle(graph) == [0, 1, 2]


def test_directed_cycle_not_through_root():
    # 0 -> 1 -> 2 -> 3 -> 1
    graph = Graph.from_adjacency_list({0: {1: 1.0}, 1: {2: 1.0}, 2: {3: 1.0}, 3: {1: 1.0}})

    assert find_any_cycle(graph) == [1, 2, 3]


def test_directed_acyclic_graph():
    # Diamond: two paths into 3 do not form a cycle
    graph = Graph.from_adjacency_list({0: {1: 1.0, 2: 1.0}, 1: {3: 1.0}, 2: {3: 1.0}})

    assert graph.is_directed
    assert find_any_cycle(graph) is None
    assert not has_cycle(graph)


def test_undirected_tree_has_no_simple_cycle():
    graph = Graph.from_unweighted_adjacency({0: [1, 2], 1: [0], 2: [0]})

    assert find_any_cycle(graph, simple=True) is None
    assert find_any_cycle(graph, simple=False) == [0, 1]


def test_cycle_in_second_component():
    graph = Graph.from_unweighted_adjacency(
        {0: [1], 1: [0], 2: [3, 4], 3: [2, 4], 4: [2, 3]}
    )

    assert find_any_cycle(graph, simple=True) == [2, 3, 4]


def test_empty_graph_has_no_cycle():
    assert find_any_cycle(Graph.from_adjacency_list({})) is None


def test_deep_cycle_does_not_exhaust_the_stack():
    length = 5000
    adjacency = {i: {i + 1: 1.0} for i in range(length - 1)}
    adjacency[length - 1] = {0: 1.0}
    graph = Graph.from_adjacency_list(adjacency)

    assert find_any_cycle(graph) == list(range(length))
