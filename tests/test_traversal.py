import pytest

from metrograph.domain.errors import InvalidStartError
from metrograph.graph import Graph, bfs, dfs
from metrograph.graph.registry import ById, ByPayload


@pytest.fixture
def tree():
    #     0
    #    / \
    #   1   2
    #   |
    #   3
    return Graph.from_unweighted_adjacency({0: [1, 2], 1: [0, 3], 2: [0], 3: [1]})


def test_bfs_visits_level_by_level(tree):
    assert bfs(tree, 0) == [0, 1, 2, 3]


def test_dfs_goes_deep_first(tree):
    assert dfs(tree, 0) == [0, 1, 3, 2]


def test_dfs_iterative_matches_recursive(tree, two_cycles, abcd):
    for graph in (tree, two_cycles, abcd):
        for start in graph.node_ids:
            assert dfs(graph, start, iterative=True) == dfs(graph, start)
            assert dfs(graph, start, inverted=True, iterative=True) == dfs(
                graph, start, inverted=True
            )


def test_dfs_inverted_follows_predecessors(two_cycles):
    assert dfs(two_cycles, 0) == [0, 1, 2, 3, 4]
    assert dfs(two_cycles, 0, inverted=True) == [0, 2, 1]
    assert dfs(two_cycles, 3, inverted=True) == [3, 2, 1, 0, 4]


def test_traversal_accepts_payloads_and_selectors(abcd):
    assert bfs(abcd, "A") == bfs(abcd, ById(0)) == bfs(abcd, ByPayload("A"))
    assert dfs(abcd, abcd.node("D")) == [3, 2, 0, 1]


def test_bfs_only_reaches_connected_part():
    graph = Graph.from_unweighted_adjacency({0: [1], 1: [0], 2: [3], 3: [2]})

    assert bfs(graph, 2) == [2, 3]


def test_invalid_start(abcd):
    with pytest.raises(InvalidStartError):
        bfs(abcd, "Z")
    with pytest.raises(InvalidStartError):
        dfs(abcd, 17)


def test_iterative_dfs_handles_deep_chains():
    length = 5000
    graph = Graph.from_adjacency_list({i: {i + 1: 1.0} for i in range(length - 1)})

    assert dfs(graph, 0, iterative=True) == list(range(length))
