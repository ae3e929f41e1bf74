"""
Graph Store - Owns the nodes and arcs of a graph.

This module implements:
- Insertion-ordered node and arc collections with O(1) lookups by id
- A node -> arc ids incidence index, so cascading deletes skip full scans
- A revision counter bumped by every effective mutation
- Immutable snapshots consumed by all derived structures
"""

from dataclasses import dataclass
from typing import Callable

from .errors import InvalidReference
from .models import Arc, Node


@dataclass(frozen=True)
class GraphSnapshot:
    """An immutable, revision-stamped copy of the graph."""
    revision: int
    nodes: tuple[Node, ...]
    arcs: tuple[Arc, ...]

    @property
    def node_ids(self) -> tuple[str, ...]:
        return tuple(node.id for node in self.nodes)

    def contains_loop(self) -> bool:
        """Check if any arc starts and ends at the same node."""
        return any(arc.is_loop for arc in self.arcs)


class GraphStore:
    """
    Holds the graph and its mutation primitives.

    Adding something that is already present and removing something
    that is absent are both no-ops. Arcs must reference nodes that are
    in the store.
    """

    def __init__(self):
        self._nodes: dict[str, Node] = {}            # node_id -> Node
        self._arcs: dict[str, Arc] = {}              # arc_id -> Arc
        self._arcs_by_node: dict[str, set[str]] = {}  # node_id -> set of arc_ids
        self._revision = 0
        self._on_change_callbacks: list[Callable] = []

    # --- Properties ---

    @property
    def revision(self) -> int:
        """Counter bumped after each effective mutation."""
        return self._revision

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    @property
    def arcs(self) -> list[Arc]:
        return list(self._arcs.values())

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    # --- Change Callbacks ---

    def on_change(self, callback: Callable):
        """Register a callback for graph changes."""
        self._on_change_callbacks.append(callback)

    def _changed(self):
        self._revision += 1
        for callback in self._on_change_callbacks:
            callback()

    # --- Node Operations ---

    def add_node(self, node: Node) -> Node:
        """Add a node. A node whose id is already stored is left as it is."""
        existing = self._nodes.get(node.id)
        if existing is not None:
            return existing

        self._nodes[node.id] = node
        self._arcs_by_node[node.id] = set()
        self._changed()
        return node

    def remove_node(self, node_id: str) -> bool:
        """Remove a node and every arc incident to it."""
        if node_id not in self._nodes:
            return False

        for arc_id in self._arcs_by_node.pop(node_id, set()):
            arc = self._arcs.pop(arc_id, None)
            if arc is not None:
                # The other endpoint keeps its own incidence entry
                other = arc.end if arc.begin == node_id else arc.begin
                if other in self._arcs_by_node:
                    self._arcs_by_node[other].discard(arc_id)

        del self._nodes[node_id]
        self._changed()
        return True

    # --- Arc Operations ---

    def add_arc(self, arc: Arc) -> Arc:
        """
        Add an arc between two stored nodes.

        The returned arc carries the `key` assigned by the store: the
        number of arcs already connecting the same ordered pair.

        Raises:
            InvalidReference: If either endpoint is not in the store
        """
        existing = self._arcs.get(arc.id)
        if existing is not None:
            return existing

        if arc.begin not in self._nodes:
            raise InvalidReference(arc.begin, "begin node")
        if arc.end not in self._nodes:
            raise InvalidReference(arc.end, "end node")

        key = sum(1 for other in self._arcs.values() if other.connects(arc.begin, arc.end))
        if key != arc.key:
            arc = arc.model_copy(update={"key": key})

        self._arcs[arc.id] = arc
        self._arcs_by_node[arc.begin].add(arc.id)
        self._arcs_by_node[arc.end].add(arc.id)
        self._changed()
        return arc

    def remove_arc(self, arc_id: str) -> bool:
        """Remove one arc by id."""
        arc = self._arcs.pop(arc_id, None)
        if arc is None:
            return False

        self._arcs_by_node[arc.begin].discard(arc_id)
        self._arcs_by_node[arc.end].discard(arc_id)
        self._changed()
        return True

    def contains_arc(self, begin: str, end: str) -> bool:
        """Check for any arc from `begin` to `end`, parallel arcs included."""
        return any(arc.connects(begin, end) for arc in self.arcs_of(begin))

    def arcs_of(self, node_id: str) -> list[Arc]:
        """Get the arcs incident to a node, in insertion order."""
        arc_ids = self._arcs_by_node.get(node_id)
        if not arc_ids:
            return []
        return [arc for arc in self._arcs.values() if arc.id in arc_ids]

    # --- Whole-graph Operations ---

    def clear(self):
        """Drop every node and arc."""
        self._nodes.clear()
        self._arcs.clear()
        self._arcs_by_node.clear()
        self._changed()

    def snapshot(self) -> GraphSnapshot:
        """Take an immutable copy of the current graph."""
        return GraphSnapshot(
            revision=self._revision,
            nodes=tuple(self._nodes.values()),
            arcs=tuple(self._arcs.values()),
        )
