"""Node identities for graph payloads.

A :class:`NodeRegistry` hands out dense integer ids, starting at 0, to
payloads in registration order and guarantees that no two nodes carry
equal payloads. Every :class:`~metrograph.graph.graph.Graph` owns one
registry, frozen once the graph is built so that concurrent readers
never observe a registration.

Payloads are compared by value and must therefore be hashable.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterator, List, Optional, TypeVar, Union

from ..domain.errors import DuplicatePayloadError, NodeNotFoundError, RegistryFrozenError

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeRef(Generic[T]):
    """A registered node: its id and the payload it stands for."""

    id: int
    payload: T


@dataclass(frozen=True)
class ById:
    """Select a node by its integer id."""

    id: int


@dataclass(frozen=True)
class ByRef(Generic[T]):
    """Select a node through a reference obtained from a registry."""

    ref: NodeRef[T]


@dataclass(frozen=True)
class ByPayload(Generic[T]):
    """Select a node by payload, registering it if needed."""

    payload: T


NodeSelector = Union[ById, ByRef[Any], ByPayload[Any]]


def as_selector(value: Any) -> NodeSelector:
    """Coerce a raw start value into a :data:`NodeSelector`.

    Selectors pass through unchanged, ``NodeRef`` becomes :class:`ByRef`,
    a plain ``int`` is an id and anything else is a payload. Graphs
    whose payloads are themselves integers must wrap them in
    :class:`ByPayload` explicitly.
    """
    if isinstance(value, (ById, ByRef, ByPayload)):
        return value
    if isinstance(value, NodeRef):
        return ByRef(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return ById(value)
    return ByPayload(value)


class NodeRegistry(Generic[T]):
    """Assigns and resolves stable integer identities for payloads.

    Example:
        registry = NodeRegistry[str]()
        a = registry.register("A")          # 0
        b = registry.get_or_create("B")     # 1
        registry.get_or_create("A")         # 0 again
        registry.by_id(b).payload           # "B"
    """

    def __init__(self) -> None:
        self._nodes: List[NodeRef[T]] = []
        self._ids: Dict[T, int] = {}
        self._frozen = False
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[NodeRef[T]]:
        return iter(list(self._nodes))

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self._nodes)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"NodeRegistry(nodes={len(self._nodes)}, {state})"

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Refuse any further registration.

        Called by graph construction; afterwards the registry is only read.
        """
        with self._lock:
            if not self._frozen:
                self._frozen = True
                logger.debug("Registry frozen", extra={"nodes": len(self._nodes)})

    def register(self, payload: T) -> int:
        """Register a new payload and return its id.

        Raises:
            DuplicatePayloadError: If an equal payload is already registered.
            RegistryFrozenError: If the registry has been frozen.
        """
        with self._lock:
            existing = self._ids.get(payload)
            if existing is not None:
                raise DuplicatePayloadError(
                    f"Payload already registered: {payload!r}",
                    existing_id=existing,
                )
            return self._append(payload)

    def get_or_create(self, payload: T) -> int:
        """Return the id of an equal payload, registering it if absent.

        Raises:
            NodeNotFoundError: If the payload is unknown and the registry
                is frozen.
        """
        with self._lock:
            existing = self._ids.get(payload)
            if existing is not None:
                return existing
            if self._frozen:
                raise NodeNotFoundError(f"No node for payload: {payload!r}")
            return self._append(payload)

    def by_id(self, node_id: int) -> NodeRef[T]:
        """Return the node registered under ``node_id``.

        Raises:
            NodeNotFoundError: If no node has that id.
        """
        if node_id not in self:
            raise NodeNotFoundError(f"Node with id {node_id} not found", node_id=node_id)
        return self._nodes[node_id]

    def find(self, payload: T) -> Optional[int]:
        """Return the id of an equal payload, or None."""
        return self._ids.get(payload)

    def id_of(self, payload: T) -> int:
        """Return the id of an equal payload.

        Raises:
            NodeNotFoundError: If the payload is not registered.
        """
        node_id = self._ids.get(payload)
        if node_id is None:
            raise NodeNotFoundError(f"No node for payload: {payload!r}")
        return node_id

    def resolve(self, selector: Any) -> NodeRef[T]:
        """Resolve any accepted start shape to a node reference.

        ``selector`` may be a :data:`NodeSelector` or a raw value, coerced
        with :func:`as_selector`.

        Raises:
            NodeNotFoundError: If the id is unknown, the reference belongs to
                another registry, or the payload is unknown to a frozen
                registry.
        """
        selector = as_selector(selector)
        if isinstance(selector, ById):
            return self.by_id(selector.id)
        if isinstance(selector, ByRef):
            ref = selector.ref
            node = self.by_id(ref.id)
            if node.payload != ref.payload:
                raise NodeNotFoundError(
                    f"Node reference {ref!r} does not belong to this registry",
                    node_id=ref.id,
                )
            return node
        return self.by_id(self.get_or_create(selector.payload))

    def _append(self, payload: T) -> int:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {payload!r}: registry is frozen")
        node_id = len(self._nodes)
        self._nodes.append(NodeRef(node_id, payload))
        self._ids[payload] = node_id
        return node_id
