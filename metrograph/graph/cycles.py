"""Cycle detection.

Both searches run depth-first over an explicit frame stack, visiting
nodes in the same order a recursive search would, so they are safe on
graphs deeper than the interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from .graph import Graph


def find_any_cycle(graph: Graph[Any], simple: bool = False) -> Optional[List[int]]:
    """Return the first cycle found, or None.

    Directed graphs use a recursion-stack set: an edge into a node still
    on the stack closes a cycle. Undirected graphs report any edge into an
    already visited node; with ``simple=True`` the edge back to the
    immediate parent is ignored, otherwise walking an edge back reports a
    two-node cycle.

    Args:
        graph: Graph to inspect.
        simple: Ignore the edge back to the DFS parent (undirected graphs).

    Returns:
        Node ids along the cycle, starting at the node where it closes.
    """
    visited: Set[int] = set()
    parent: Dict[int, int] = {}

    for root in graph.node_ids:
        if root in visited:
            continue
        if graph.is_directed:
            cycle = _directed_cycle(graph, root, visited, parent)
        else:
            cycle = _undirected_cycle(graph, root, visited, parent, simple)
        if cycle is not None:
            return cycle

    return None


def has_cycle(graph: Graph[Any], simple: bool = False) -> bool:
    return find_any_cycle(graph, simple) is not None


def _directed_cycle(
    graph: Graph[Any],
    root: int,
    visited: Set[int],
    parent: Dict[int, int],
) -> Optional[List[int]]:
    on_stack = {root}
    visited.add(root)
    frames: List[Tuple[int, Iterator[int]]] = [(root, iter(graph.neighbors(root)))]

    while frames:
        node, neighbors = frames[-1]
        for neighbor in neighbors:
            if neighbor not in visited:
                parent[neighbor] = node
                visited.add(neighbor)
                on_stack.add(neighbor)
                frames.append((neighbor, iter(graph.neighbors(neighbor))))
                break
            if neighbor in on_stack:
                return _reconstruct(node, neighbor, parent)
        else:
            on_stack.discard(node)
            frames.pop()

    return None


def _undirected_cycle(
    graph: Graph[Any],
    root: int,
    visited: Set[int],
    parent: Dict[int, int],
    simple: bool,
) -> Optional[List[int]]:
    visited.add(root)
    frames: List[Tuple[int, Optional[int], Iterator[int]]] = [
        (root, None, iter(graph.neighbors(root)))
    ]

    while frames:
        node, came_from, neighbors = frames[-1]
        for neighbor in neighbors:
            if simple and neighbor == came_from:
                continue
            if neighbor not in visited:
                parent[neighbor] = node
                visited.add(neighbor)
                frames.append((neighbor, node, iter(graph.neighbors(neighbor))))
                break
            return _reconstruct(node, neighbor, parent)
        else:
            frames.pop()

    return None


def _reconstruct(current: int, closing: int, parent: Dict[int, int]) -> List[int]:
    cycle = [current]
    node = current
    while node != closing:
        node = parent[node]
        cycle.append(node)
    cycle.reverse()
    return cycle
