"""Immutable weighted graph.

A :class:`Graph` is built once from a complete adjacency list or
adjacency matrix. Every derived property (order, size, density,
directedness, weightedness, connectivity, adjacency matrix, reverse
adjacency index) is computed during construction and never recomputed,
so a built graph can be shared by concurrent readers.

Node ids come from the graph's :class:`~metrograph.graph.registry.NodeRegistry`,
which is frozen by construction. Child graphs (SCCs, path trees) share
the frozen registry so ids keep their meaning across them.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    TypeVar,
)

from ..domain.errors import InvalidStartError, NodeNotFoundError, NotSquareError
from .edge import DEFAULT_EDGE_COLOR, Edge
from .registry import NodeRef, NodeRegistry

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Sentinel weight meaning "no edge" in adjacency matrices.
NO_EDGE = math.inf
WEIGHT_EPSILON = 1e-9

Adjacency = Mapping[int, Mapping[int, float]]


@dataclass(frozen=True, slots=True)
class NodeStyle:
    """Presentation data for one node, kept outside the engine's node model.

    Attributes:
        label: Display label
        color: Fill color, also used to color edges within a line
        x: Horizontal position (longitude for stations)
        y: Vertical position (latitude for stations)
    """

    label: str = ""
    color: str = DEFAULT_EDGE_COLOR
    x: float = 0.0
    y: float = 0.0


def same_weight(a: float, b: float) -> bool:
    """Compare two weights with the engine tolerance; ``NO_EDGE`` equals itself."""
    return a == b or abs(a - b) <= WEIGHT_EPSILON


def is_no_edge(weight: float) -> bool:
    return math.isinf(weight) and weight > 0


def _check_weight(source: int, target: int, weight: float) -> float:
    weight = float(weight)
    if math.isnan(weight) or weight == -math.inf:
        raise ValueError(f"Invalid weight {weight!r} for edge {source} -> {target}")
    return weight


def _edge_color(
    styles: Mapping[int, NodeStyle], source: int, target: int
) -> str:
    # Edges between two stations of the same line take the line color.
    a = styles.get(source)
    b = styles.get(target)
    if a is not None and b is not None and a.color == b.color and a.label != b.label:
        return a.color
    return DEFAULT_EDGE_COLOR


class Graph(Generic[T]):
    """Weighted graph over registered node payloads.

    Use the ``from_*`` constructors rather than calling the class directly.

    Attributes:
        registry: The frozen registry resolving ids to payloads
        node_ids: Node ids in ascending order
        edges: Edge list, undirected edges listed once
        order: Number of nodes
        size: Number of edges in the edge list
        arc_count: Number of traversable directions
        density: ``size * f / (order * (order - 1))``, ``f`` = 1 if directed else 2
        is_directed: True iff the adjacency matrix is not symmetric
        is_weighted: True iff some edge weight differs from 1.0
        is_connected: True iff a BFS from the first node reaches every node
    """

    def __init__(
        self,
        registry: NodeRegistry[T],
        adjacency: Adjacency,
        styles: Optional[Mapping[int, NodeStyle]] = None,
    ) -> None:
        ids: Set[int] = set(adjacency)
        for neighbors in adjacency.values():
            ids.update(neighbors)
        for node_id in ids:
            registry.by_id(node_id)
        registry.freeze()
        self._registry = registry
        self._node_ids: Tuple[int, ...] = tuple(sorted(ids))
        self._index: Dict[int, int] = {n: i for i, n in enumerate(self._node_ids)}

        adjacency_map: Dict[int, Dict[int, float]] = {}
        reverse: Dict[int, Dict[int, float]] = {n: {} for n in self._node_ids}
        for source in self._node_ids:
            row: Dict[int, float] = {}
            for target, weight in sorted(adjacency.get(source, {}).items()):
                weight = _check_weight(source, target, weight)
                if target == source or is_no_edge(weight):
                    continue
                row[target] = weight
                reverse[target][source] = weight
            adjacency_map[source] = row
        self._adjacency = adjacency_map
        self._reverse = {n: dict(sorted(p.items())) for n, p in reverse.items()}

        style_table = styles or {}
        self._styles: Mapping[int, NodeStyle] = MappingProxyType(
            {n: style_table[n] for n in self._node_ids if n in style_table}
        )

        self._is_directed = False
        edges: List[Edge] = []
        for source, row in self._adjacency.items():
            for target, weight in row.items():
                back = self._adjacency[target].get(source, NO_EDGE)
                directed = not same_weight(weight, back)
                if directed:
                    self._is_directed = True
                if directed or source < target:
                    edges.append(
                        Edge(
                            source,
                            target,
                            weight,
                            directed,
                            _edge_color(self._styles, source, target),
                        )
                    )
        self._edges: Tuple[Edge, ...] = tuple(edges)

        self._order = len(self._node_ids)
        self._size = len(self._edges)
        self._arc_count = sum(2 if not e.directed else 1 for e in self._edges)
        if self._order < 2:
            self._density = 0.0
        else:
            factor = 1.0 if self._is_directed else 2.0
            self._density = self._size * factor / (self._order * (self._order - 1))
        self._is_weighted = any(
            abs(e.weight - 1.0) > WEIGHT_EPSILON for e in self._edges
        )
        self._is_connected = (
            self._order == 0
            or len(self._reach(self._node_ids[0])) == self._order
        )
        self._matrix: Tuple[Tuple[float, ...], ...] = tuple(
            tuple(
                0.0 if source == target else self._adjacency[source].get(target, NO_EDGE)
                for target in self._node_ids
            )
            for source in self._node_ids
        )

        logger.debug(
            "Graph built",
            extra={
                "order": self._order,
                "size": self._size,
                "directed": self._is_directed,
            },
        )

    # ------------------------------------------------------------------ #
    # Constructors
    # ------------------------------------------------------------------ #

    @classmethod
    def from_adjacency_list(
        cls,
        adjacency: Adjacency,
        registry: Optional[NodeRegistry[Any]] = None,
        styles: Optional[Mapping[int, NodeStyle]] = None,
    ) -> Graph[Any]:
        """Build a graph from ``{node_id: {neighbor_id: weight}}``.

        Nodes are the keys plus every neighbor. Without a registry, a new
        one is created whose payloads are the ids themselves.

        Raises:
            NodeNotFoundError: If an id is missing from ``registry``.
        """
        if registry is None:
            ids: Set[int] = set(adjacency)
            for neighbors in adjacency.values():
                ids.update(neighbors)
            registry = NodeRegistry()
            for node_id in range(max(ids) + 1 if ids else 0):
                registry.register(node_id)
        return cls(registry, adjacency, styles)

    @classmethod
    def from_unweighted_adjacency(
        cls,
        adjacency: Mapping[int, Iterable[int]],
        registry: Optional[NodeRegistry[Any]] = None,
        styles: Optional[Mapping[int, NodeStyle]] = None,
    ) -> Graph[Any]:
        """Build a graph from ``{node_id: [neighbor_ids]}`` with weight 1.0."""
        weighted = {
            source: {target: 1.0 for target in targets}
            for source, targets in adjacency.items()
        }
        return cls.from_adjacency_list(weighted, registry, styles)

    @classmethod
    def from_payloads(
        cls,
        adjacency: Mapping[T, Mapping[T, float]],
        styles: Optional[Mapping[T, NodeStyle]] = None,
    ) -> Graph[T]:
        """Build a graph from payload-keyed adjacency.

        Keys are registered first, in mapping order, then any neighbor
        not yet seen.

        Example:
            graph = Graph.from_payloads({"A": {"B": 1.0}, "B": {"A": 1.0}})
        """
        registry: NodeRegistry[T] = NodeRegistry()
        for payload in adjacency:
            registry.get_or_create(payload)
        id_adjacency: Dict[int, Dict[int, float]] = {}
        for payload, neighbors in adjacency.items():
            row = id_adjacency.setdefault(registry.id_of(payload), {})
            for neighbor, weight in neighbors.items():
                row[registry.get_or_create(neighbor)] = weight
        id_styles = {registry.id_of(p): s for p, s in (styles or {}).items()}
        return cls(registry, id_adjacency, id_styles)

    @classmethod
    def from_adjacency_matrix(
        cls,
        matrix: Sequence[Sequence[float]],
        registry: Optional[NodeRegistry[Any]] = None,
        styles: Optional[Mapping[int, NodeStyle]] = None,
    ) -> Graph[Any]:
        """Build a graph from an ``n x n`` matrix, ``NO_EDGE`` meaning no edge.

        Row and column ``i`` belong to node id ``i``. Ids missing from the
        registry are created with the index as payload.

        Raises:
            NotSquareError: If a row length differs from the row count.
            DuplicatePayloadError: If an index payload clashes with an
                existing node.
        """
        rows = len(matrix)
        for row in matrix:
            if len(row) != rows:
                raise NotSquareError(
                    f"Adjacency matrix must be square, got a row of {len(row)} "
                    f"values in a {rows}-row matrix",
                    rows=rows,
                    columns=len(row),
                )

        if registry is None:
            registry = NodeRegistry()
        for node_id in range(rows):
            if node_id not in registry:
                registry.register(node_id)

        adjacency: Dict[int, Dict[int, float]] = {}
        for i, row in enumerate(matrix):
            adjacency[i] = {
                j: float(weight)
                for j, weight in enumerate(row)
                if i != j and not is_no_edge(float(weight))
            }
        return cls(registry, adjacency, styles)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def registry(self) -> NodeRegistry[T]:
        return self._registry

    @property
    def node_ids(self) -> Tuple[int, ...]:
        return self._node_ids

    @property
    def nodes(self) -> Tuple[NodeRef[T], ...]:
        return tuple(self._registry.by_id(n) for n in self._node_ids)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def styles(self) -> Mapping[int, NodeStyle]:
        return self._styles

    @property
    def order(self) -> int:
        return self._order

    @property
    def size(self) -> int:
        return self._size

    @property
    def arc_count(self) -> int:
        return self._arc_count

    @property
    def density(self) -> float:
        return self._density

    @property
    def is_directed(self) -> bool:
        return self._is_directed

    @property
    def is_weighted(self) -> bool:
        return self._is_weighted

    @property
    def is_connected(self) -> bool:
        return self._is_connected

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return self._order

    def __iter__(self) -> Iterator[int]:
        return iter(self._node_ids)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __repr__(self) -> str:
        kind = "directed" if self._is_directed else "undirected"
        return f"Graph(order={self._order}, size={self._size}, {kind})"

    def neighbors(self, node_id: int) -> Mapping[int, float]:
        """Return ``{neighbor_id: weight}`` for the outgoing edges of a node."""
        return MappingProxyType(self._adjacency[node_id])

    def predecessors(self, node_id: int) -> Mapping[int, float]:
        """Return ``{predecessor_id: weight}`` for the incoming edges of a node."""
        return MappingProxyType(self._reverse[node_id])

    def weight(self, source: int, target: int) -> float:
        """Return the weight of ``source -> target``, or ``NO_EDGE``."""
        row = self._adjacency.get(source)
        if row is None:
            return NO_EDGE
        return row.get(target, NO_EDGE)

    def has_edge(self, source: int, target: int) -> bool:
        return not is_no_edge(self.weight(source, target))

    def path_weight(self, path: Sequence[int]) -> float:
        """Sum the weights along consecutive nodes, ``NO_EDGE`` if a hop is missing."""
        total = 0.0
        for source, target in zip(path, path[1:]):
            weight = self.weight(source, target)
            if is_no_edge(weight):
                return NO_EDGE
            total += weight
        return total

    def index_of(self, node_id: int) -> int:
        """Return the row/column of ``node_id`` in :meth:`adjacency_matrix`."""
        try:
            return self._index[node_id]
        except KeyError:
            raise NodeNotFoundError(
                f"Node {node_id} is not part of this graph", node_id=node_id
            ) from None

    def payload(self, node_id: int) -> T:
        return self._registry.by_id(node_id).payload

    def style(self, node_id: int) -> Optional[NodeStyle]:
        return self._styles.get(node_id)

    def resolve(self, selector: Any) -> int:
        """Resolve an id, node reference or payload to a node id of this graph.

        Raises:
            InvalidStartError: If the node is unknown or absent from this graph.
        """
        try:
            node_id = self._registry.resolve(selector).id
        except NodeNotFoundError as e:
            raise InvalidStartError(
                f"Invalid start node: {selector!r}", cause=e, node_id=e.node_id
            ) from e
        if node_id not in self._index:
            raise InvalidStartError(
                f"Invalid start node: {selector!r} is not part of this graph",
                node_id=node_id,
            )
        return node_id

    def node(self, selector: Any) -> NodeRef[T]:
        return self._registry.by_id(self.resolve(selector))

    def adjacency_list(self) -> Dict[int, Dict[int, float]]:
        """Return a copy of ``{node_id: {neighbor_id: weight}}``."""
        return {source: dict(row) for source, row in self._adjacency.items()}

    def adjacency_matrix(self) -> Tuple[Tuple[float, ...], ...]:
        """Return the dense matrix in :attr:`node_ids` order.

        The diagonal is 0.0 and missing edges are ``NO_EDGE``.
        """
        return self._matrix

    def subgraph(self, node_ids: Iterable[int]) -> Graph[T]:
        """Return the induced subgraph over ``node_ids`` as a new graph.

        Every edge whose two endpoints lie in the set is kept.

        Raises:
            NodeNotFoundError: If an id is not part of this graph.
        """
        keep = set(node_ids)
        for node_id in keep:
            self.index_of(node_id)
        adjacency: Dict[int, Dict[int, float]] = {n: {} for n in keep}
        for edge in self._edges:
            if edge.source in keep and edge.target in keep:
                for source, target, weight in edge.arcs():
                    adjacency[source][target] = weight
        return Graph(self._registry, adjacency, self._styles)

    def _reach(self, start: int) -> Set[int]:
        seen = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbor in self._adjacency[current]:
                if neighbor not in seen:
                    seen.add(neighbor)
                    queue.append(neighbor)
        return seen
