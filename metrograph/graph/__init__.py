"""Graph engine for representing the transportation network.

This subpackage builds immutable weighted graphs from adjacency lists
or matrices and runs traversal, path-finding, cycle detection and
component decomposition on top of them.
"""

from .coloring import coloring_styles, welsh_powell
from .components import decompose_scc
from .cycles import find_any_cycle
from .edge import Edge
from .geo import nearest_node
from .graph import NO_EDGE, Graph, NodeStyle
from .registry import ById, ByPayload, ByRef, NodeRef, NodeRegistry, NodeSelector
from .shortest_path import (
    AllPairsPaths,
    PathTree,
    bellman_ford,
    dijkstra,
    distance_between,
    floyd_warshall,
    path_tree_graph,
    shortest_route,
)
from .traversal import bfs, dfs

__all__ = [
    "NO_EDGE",
    "Graph",
    "NodeStyle",
    "Edge",
    "NodeRegistry",
    "NodeRef",
    "NodeSelector",
    "ById",
    "ByRef",
    "ByPayload",
    "bfs",
    "dfs",
    "PathTree",
    "AllPairsPaths",
    "dijkstra",
    "bellman_ford",
    "floyd_warshall",
    "shortest_route",
    "distance_between",
    "path_tree_graph",
    "find_any_cycle",
    "decompose_scc",
    "welsh_powell",
    "coloring_styles",
    "nearest_node",
]
