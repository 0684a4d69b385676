"""Breadth-first and depth-first traversals.

Neighbors are visited in ascending node id order, which is the
iteration order of the graph's adjacency map.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, List, Mapping, Set

from .graph import Graph


def bfs(graph: Graph[Any], start: Any) -> List[int]:
    """Breadth-first traversal from ``start``.

    Args:
        graph: Graph to traverse.
        start: Node id, node reference, payload or selector.

    Returns:
        Node ids in discovery order.

    Raises:
        InvalidStartError: If ``start`` is not part of the graph.
    """
    start_id = graph.resolve(start)
    order: List[int] = []
    visited = {start_id}
    queue = deque([start_id])

    while queue:
        current = queue.popleft()
        order.append(current)
        for neighbor in graph.neighbors(current):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    return order


def dfs(
    graph: Graph[Any],
    start: Any,
    inverted: bool = False,
    *,
    iterative: bool = False,
) -> List[int]:
    """Depth-first pre-order traversal from ``start``.

    Args:
        graph: Graph to traverse.
        start: Node id, node reference, payload or selector.
        inverted: Follow edges backwards (predecessors instead of successors).
        iterative: Use an explicit stack instead of recursion. Both variants
            return the same order; the iterative one is safe on deep graphs.

    Returns:
        Node ids in visiting order.

    Raises:
        InvalidStartError: If ``start`` is not part of the graph.
    """
    start_id = graph.resolve(start)
    step = graph.predecessors if inverted else graph.neighbors
    if iterative:
        return _dfs_stack(step, start_id)

    order: List[int] = []
    visited: Set[int] = set()
    _dfs_visit(step, start_id, visited, order)
    return order


def _dfs_visit(
    step: Callable[[int], Mapping[int, float]],
    node: int,
    visited: Set[int],
    order: List[int],
) -> None:
    visited.add(node)
    order.append(node)
    for neighbor in step(node):
        if neighbor not in visited:
            _dfs_visit(step, neighbor, visited, order)


def _dfs_stack(step: Callable[[int], Mapping[int, float]], start: int) -> List[int]:
    order: List[int] = []
    visited: Set[int] = set()
    stack = [start]

    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        order.append(node)
        # Reversed so the smallest neighbor is popped first, as in recursion.
        stack.extend(n for n in reversed(list(step(node))) if n not in visited)

    return order
