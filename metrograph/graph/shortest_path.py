"""Shortest-path algorithms.

Single-source searches (Dijkstra, Bellman-Ford) return a :class:`PathTree`,
the predecessor map from which the path to any node is rebuilt. The
all-pairs search (Floyd-Warshall) returns an :class:`AllPairsPaths`
holding the path matrix.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..domain.errors import NegativeCycleError, NodeNotFoundError
from .graph import NO_EDGE, Graph, is_no_edge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathTree:
    """Distances and predecessors from a single start node.

    Attributes:
        start: Id of the start node
        distances: Tentative-then-final distance of every node (``NO_EDGE``
            when unreachable)
        predecessors: Previous node on the best known path, None for the
            start and unreachable nodes
    """

    start: int
    distances: Mapping[int, float]
    predecessors: Mapping[int, Optional[int]]

    def distance_to(self, node_id: int) -> float:
        """Return the distance from the start to ``node_id``.

        Raises:
            NodeNotFoundError: If ``node_id`` was not part of the search.
        """
        try:
            return self.distances[node_id]
        except KeyError:
            raise NodeNotFoundError(
                f"Node {node_id} is not part of this path tree", node_id=node_id
            ) from None

    def is_reachable(self, node_id: int) -> bool:
        return not is_no_edge(self.distance_to(node_id))

    def path_to(self, node_id: int) -> List[int]:
        """Return the node ids from the start to ``node_id``, empty if unreachable."""
        if not self.is_reachable(node_id):
            return []
        path: List[int] = []
        current: Optional[int] = node_id
        while current is not None:
            path.append(current)
            current = self.predecessors[current]
        path.reverse()
        return path

    def paths(self) -> Dict[int, List[int]]:
        """Return the path from the start to every node of the search."""
        return {node_id: self.path_to(node_id) for node_id in self.distances}

    def reachable(self) -> List[int]:
        """Return the ids of every node reachable from the start."""
        return [n for n, d in self.distances.items() if not is_no_edge(d)]


@dataclass(frozen=True)
class AllPairsPaths:
    """Result of an all-pairs search.

    ``paths[i][j]`` and ``distances[i][j]`` are indexed by position in
    ``node_ids``; use :meth:`path` and :meth:`distance` to index by node id.
    """

    node_ids: Tuple[int, ...]
    distances: List[List[float]]
    paths: List[List[List[int]]]

    def _position(self, node_id: int) -> int:
        try:
            return self.node_ids.index(node_id)
        except ValueError:
            raise NodeNotFoundError(
                f"Node {node_id} is not part of this result", node_id=node_id
            ) from None

    def path(self, source: int, target: int) -> List[int]:
        return list(self.paths[self._position(source)][self._position(target)])

    def distance(self, source: int, target: int) -> float:
        return self.distances[self._position(source)][self._position(target)]


def _initial_state(graph: Graph[Any], start: int) -> Tuple[Dict[int, float], Dict[int, Optional[int]]]:
    distances: Dict[int, float] = {node_id: NO_EDGE for node_id in graph.node_ids}
    predecessors: Dict[int, Optional[int]] = {node_id: None for node_id in graph.node_ids}
    distances[start] = 0.0
    return distances, predecessors


def dijkstra(graph: Graph[Any], start: Any) -> PathTree:
    """Single-source shortest paths for non-negative weights.

    Negative weights are outside the contract of this algorithm; use
    :func:`bellman_ford` for them.

    Args:
        graph: Graph to search.
        start: Node id, node reference, payload or selector.

    Returns:
        The path tree rooted at ``start``.

    Raises:
        InvalidStartError: If ``start`` is not part of the graph.
    """
    start_id = graph.resolve(start)
    distances, predecessors = _initial_state(graph, start_id)

    heap: List[Tuple[float, int]] = [(0.0, start_id)]
    visited: set[int] = set()

    while heap:
        current_distance, u = heapq.heappop(heap)

        if u in visited:
            continue

        visited.add(u)

        for v, weight in graph.neighbors(u).items():
            if v in visited:
                continue
            new_distance = current_distance + weight
            if new_distance < distances[v]:
                distances[v] = new_distance
                predecessors[v] = u
                heapq.heappush(heap, (new_distance, v))

    return PathTree(start_id, distances, predecessors)


def bellman_ford(graph: Graph[Any], start: Any) -> PathTree:
    """Single-source shortest paths allowing negative weights.

    Every edge is relaxed (both directions for undirected edges) for up
    to ``order`` passes. A relaxation during the last pass means a
    negative cycle is reachable from ``start``.

    Raises:
        InvalidStartError: If ``start`` is not part of the graph.
        NegativeCycleError: If a negative-weight cycle is reachable.
    """
    start_id = graph.resolve(start)
    distances, predecessors = _initial_state(graph, start_id)

    relaxed = False
    for _ in range(graph.order):
        relaxed = False
        for edge in graph.edges:
            for source, target, weight in edge.arcs():
                if is_no_edge(distances[source]):
                    continue
                candidate = distances[source] + weight
                if candidate < distances[target]:
                    distances[target] = candidate
                    predecessors[target] = source
                    relaxed = True
        if not relaxed:
            break

    if relaxed:
        logger.warning("Negative cycle detected", extra={"start": start_id})
        raise NegativeCycleError(
            "Graph contains a negative-weight cycle", start=start_id
        )

    return PathTree(start_id, distances, predecessors)


def floyd_warshall(graph: Graph[Any]) -> AllPairsPaths:
    """All-pairs shortest paths with path reconstruction.

    ``paths[i][j]`` is rebuilt as ``paths[i][k]`` followed by ``paths[k][j]``
    (junction node once) whenever routing through ``k`` is shorter.
    ``paths[i][i]`` is ``[i]`` and unreachable pairs keep ``[]``. Pairs
    whose sub-paths do not exist are skipped, so no infinite sums are
    ever computed.
    """
    node_ids = graph.node_ids
    n = graph.order
    distances = [list(row) for row in graph.adjacency_matrix()]
    paths: List[List[List[int]]] = [[[] for _ in range(n)] for _ in range(n)]

    for i in range(n):
        for j in range(n):
            if i == j:
                paths[i][j] = [node_ids[i]]
            elif not is_no_edge(distances[i][j]):
                paths[i][j] = [node_ids[i], node_ids[j]]

    for k in range(n):
        row_k = distances[k]
        for i in range(n):
            if i == k or is_no_edge(distances[i][k]):
                continue
            row_i = distances[i]
            for j in range(n):
                if j == i or j == k or is_no_edge(row_k[j]):
                    continue
                via_k = row_i[k] + row_k[j]
                if via_k < row_i[j]:
                    row_i[j] = via_k
                    paths[i][j] = paths[i][k][:-1] + paths[k][j]

    return AllPairsPaths(node_ids, distances, paths)


def shortest_route(graph: Graph[Any], source: Any, target: Any) -> Tuple[List[int], float]:
    """Return the shortest path and its cost between two nodes.

    Returns:
        ``(path, cost)``; ``([], NO_EDGE)`` when ``target`` is unreachable.

    Raises:
        InvalidStartError: If either node is not part of the graph.
    """
    tree = dijkstra(graph, source)
    target_id = graph.resolve(target)
    path = tree.path_to(target_id)
    if not path:
        return [], NO_EDGE
    return path, tree.distance_to(target_id)


def distance_between(graph: Graph[Any], source: Any, target: Any) -> float:
    """Return the shortest distance between two nodes, ``NO_EDGE`` if unreachable."""
    return shortest_route(graph, source, target)[1]


def path_tree_graph(graph: Graph[Any], tree: PathTree) -> Graph[Any]:
    """Return the predecessor tree of a search as a new graph.

    The tree spans every node of ``graph``; each reachable node other
    than the start is linked from its predecessor with the original weight.
    """
    adjacency: Dict[int, Dict[int, float]] = {node_id: {} for node_id in graph.node_ids}
    for node_id, predecessor in tree.predecessors.items():
        if predecessor is not None:
            adjacency[predecessor][node_id] = graph.weight(predecessor, node_id)
    return Graph(graph.registry, adjacency, graph.styles)
