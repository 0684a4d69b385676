"""Edge value type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Tuple

DEFAULT_EDGE_COLOR = "#000000"


@dataclass(frozen=True, eq=False)
class Edge:
    """A weighted connection between two node ids.

    Undirected edges are equal when their endpoints match in either
    order; directed edges must match orientation exactly. ``color`` is
    presentation data and plays no part in equality.

    Attributes:
        source: Id of the source node
        target: Id of the target node
        weight: Cost of traversing the edge
        directed: Whether the edge can only be walked source -> target
        color: Display color carried for renderers
    """

    source: int
    target: int
    weight: float = 1.0
    directed: bool = False
    color: str = field(default=DEFAULT_EDGE_COLOR, compare=False)

    def _key(self) -> Tuple[object, ...]:
        if self.directed:
            return (True, self.source, self.target, self.weight)
        return (False, frozenset((self.source, self.target)), self.weight)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def arcs(self) -> Iterator[Tuple[int, int, float]]:
        """Yield every traversable ``(source, target, weight)`` direction."""
        yield self.source, self.target, self.weight
        if not self.directed:
            yield self.target, self.source, self.weight

    def other_end(self, node_id: int) -> int:
        """Return the endpoint opposite ``node_id``.

        Raises:
            ValueError: If ``node_id`` is not an endpoint.
        """
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        raise ValueError(f"Node {node_id} is not an endpoint of {self!r}")

    def __str__(self) -> str:
        arrow = "->" if self.directed else "--"
        return f"{self.source} {arrow} {self.target} ({self.weight:g})"
