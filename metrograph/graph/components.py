"""Strongly connected component decomposition."""

from __future__ import annotations

import logging
from typing import Any, List, Set

from .graph import Graph
from .traversal import dfs

logger = logging.getLogger(__name__)


def decompose_scc(graph: Graph[Any]) -> List[Graph[Any]]:
    """Split a graph into its strongly connected components.

    The lowest unassigned node is taken repeatedly; the nodes both
    reachable from it and reaching it form one component, built as an
    induced subgraph keeping every edge inside the component. Each node
    ends up in exactly one component.

    Returns:
        One new graph per component, ordered by their lowest node id.
    """
    components: List[Graph[Any]] = []
    assigned: Set[int] = set()

    for start in graph.node_ids:
        if start in assigned:
            continue
        forward = dfs(graph, start, iterative=True)
        backward = set(dfs(graph, start, inverted=True, iterative=True))
        members = [node_id for node_id in forward if node_id in backward]
        assigned.update(members)
        components.append(graph.subgraph(members))

    logger.debug(
        "Strongly connected components computed",
        extra={"order": graph.order, "components": len(components)},
    )
    return components


def component_of(components: List[Graph[Any]], node_id: int) -> Graph[Any]:
    """Return the component containing ``node_id``.

    Raises:
        KeyError: If no component contains the node.
    """
    for component in components:
        if node_id in component:
            return component
    raise KeyError(node_id)
