"""Greedy graph coloring (Welsh-Powell)."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Set

from .graph import Graph, NodeStyle

PALETTE = (
    "#FFCE00",
    "#0064B0",
    "#9F9825",
    "#C04191",
    "#F28E42",
    "#83C491",
    "#F3A4BA",
    "#CEADD2",
    "#D5C900",
    "#E3B32A",
    "#8D5E2A",
    "#00814F",
    "#98D4E2",
    "#662483",
)
FALLBACK_COLOR = "#000000"


def degree(graph: Graph[Any], node_id: int) -> int:
    """Number of edges of the edge list touching ``node_id``."""
    return sum(1 for e in graph.edges if node_id in (e.source, e.target))


def welsh_powell(graph: Graph[Any]) -> Dict[int, int]:
    """Color nodes so that no two adjacent nodes share a color.

    Nodes are taken by decreasing degree (ties by id). Each round opens a
    new color, numbered from 1, and gives it to every remaining node not
    adjacent, in either direction, to a node already holding it.

    Returns:
        ``{node_id: color}``; the number of colors used is the maximum value.
    """
    adjacent: Dict[int, Set[int]] = {
        n: set(graph.neighbors(n)) | set(graph.predecessors(n)) for n in graph.node_ids
    }
    remaining = sorted(graph.node_ids, key=lambda n: (-degree(graph, n), n))
    coloring: Dict[int, int] = {}
    color = 0

    while remaining:
        color += 1
        blocked: Set[int] = set()
        uncolored: List[int] = []
        for node_id in remaining:
            if node_id in blocked:
                uncolored.append(node_id)
                continue
            coloring[node_id] = color
            blocked |= adjacent[node_id]
        remaining = uncolored

    return coloring


def chromatic_upper_bound(graph: Graph[Any]) -> int:
    return max(welsh_powell(graph).values(), default=0)


def coloring_styles(graph: Graph[Any], coloring: Dict[int, int]) -> Dict[int, NodeStyle]:
    """Turn a coloring into node styles, keeping existing labels and positions."""
    styles: Dict[int, NodeStyle] = {}
    for node_id, color in coloring.items():
        hex_color = PALETTE[color - 1] if 1 <= color <= len(PALETTE) else FALLBACK_COLOR
        base = graph.style(node_id) or NodeStyle(label=str(graph.payload(node_id)))
        styles[node_id] = replace(base, color=hex_color)
    return styles
