"""
Graph Controller - The single API surface of the analysis engine.

This module implements:
- Mutation calls forwarded to the GraphStore
- Lazily rebuilt derived structures (adjacency index, distance matrix),
  invalidated by the store revision so queries never see stale data
- Metric, verifier, coloring and enumeration queries returning value
  snapshots
- Async enumeration variants running on a worker thread
"""

import logging
from typing import Callable

from . import metrics, verifiers
from .adjacency import AdjacencyIndex
from .coloring import colorize_nodes as greedy_colorize
from .distance import DistanceMatrix
from .enumeration import (
    CancellationToken,
    EnumerationResult,
    enumerate_eulerian_cycles,
    enumerate_simple_paths,
)
from .errors import EmptyGraph, InvalidReference
from .models import Arc, Node
from .store import GraphSnapshot, GraphStore
from .workers import run_enumeration

logger = logging.getLogger(__name__)


class GraphController:
    """
    Owns a graph and answers every question about it.

    Derived structures are computed from a snapshot of the store and kept
    until the store revision moves on; the next query after a mutation
    rebuilds them.
    """

    def __init__(self, store: GraphStore | None = None):
        self._store = store if store is not None else GraphStore()
        self._snapshot: GraphSnapshot | None = None
        self._adjacency: AdjacencyIndex | None = None
        self._distances: DistanceMatrix | None = None

    # --- Derived State ---

    @property
    def store(self) -> GraphStore:
        return self._store

    @property
    def is_stale(self) -> bool:
        """Check if the cached structures lag behind the store."""
        return self._snapshot is None or self._snapshot.revision != self._store.revision

    def _refresh(self):
        if not self.is_stale:
            return
        snapshot = self._store.snapshot()
        logger.debug(f"Rebuilding derived structures at revision {snapshot.revision}")
        self._snapshot = snapshot
        self._adjacency = AdjacencyIndex(snapshot)
        self._distances = DistanceMatrix(snapshot, self._adjacency)

    def snapshot(self) -> GraphSnapshot:
        self._refresh()
        return self._snapshot

    def adjacency_index(self) -> AdjacencyIndex:
        self._refresh()
        return self._adjacency

    def distance_matrix(self) -> DistanceMatrix:
        self._refresh()
        return self._distances

    def on_change(self, callback: Callable):
        """Register a callback for graph changes."""
        self._store.on_change(callback)

    # --- Mutation ---

    def add_node(self, node: Node | None = None, **kwargs) -> Node:
        """Add a node, building it from `kwargs` when none is given."""
        if node is None:
            node = Node(**kwargs)
        return self._store.add_node(node)

    def remove_node(self, node_id: str) -> bool:
        """Remove a node together with all of its arcs."""
        return self._store.remove_node(node_id)

    def add_arc(self, arc: Arc | None = None, **kwargs) -> Arc:
        """Add an arc, building it from `kwargs` when none is given."""
        if arc is None:
            arc = Arc(**kwargs)
        return self._store.add_arc(arc)

    def remove_arc(self, arc_id: str) -> bool:
        return self._store.remove_arc(arc_id)

    def clear(self):
        self._store.clear()

    # --- Lookups ---

    def _require_node(self, node_id: str):
        if not self._store.has_node(node_id):
            raise InvalidReference(node_id)

    def adjacent_nodes_of(self, node_id: str) -> tuple[str, ...]:
        return self.adjacency_index().adjacent_nodes_of(node_id)

    def distance(self, begin: str, end: str) -> int:
        """Shortest distance in arcs, or INFINITY when `end` is unreachable."""
        return self.distance_matrix().distance(begin, end)

    # --- Metrics ---

    def degree_of(self, node_id: str) -> int:
        self._require_node(node_id)
        return metrics.degree_of(self.snapshot(), node_id)

    def eccentricity(self, node_id: str) -> int:
        return metrics.eccentricity(self.distance_matrix(), node_id)

    def diameter(self) -> int:
        return metrics.diameter(self.distance_matrix())

    def radius(self) -> int:
        return metrics.radius(self.distance_matrix())

    def centers(self) -> list[str]:
        return metrics.centers(self.distance_matrix())

    # --- Structure ---

    def is_connective(self) -> bool:
        return verifiers.is_connective(self.snapshot(), self.distance_matrix())

    def is_tree(self) -> bool:
        return verifiers.is_tree(self.snapshot(), self.distance_matrix())

    def is_planar(self) -> bool:
        return verifiers.is_planar(self.snapshot())

    def colorize_nodes(self) -> dict[str, str]:
        return greedy_colorize(self.adjacency_index())

    # --- Enumeration ---

    def eulerian_cycles(
        self,
        start: str | None = None,
        token: CancellationToken | None = None,
        max_results: int | None = None
    ) -> EnumerationResult:
        """
        Find closed walks that use every arc exactly once.

        With a `start`, only cycles from that node are returned; without
        one, the search runs from every node in graph order and keeps the
        first occurrence of each distinct cycle.

        Raises:
            EmptyGraph: If the graph has no nodes
            InvalidReference: If `start` is not in the graph
            ValueError: If `max_results` is less than 1
        """
        return self._eulerian_cycles(self.snapshot(), start, token, max_results)

    @staticmethod
    def _eulerian_cycles(
        snapshot: GraphSnapshot,
        start: str | None,
        token: CancellationToken | None,
        max_results: int | None
    ) -> EnumerationResult:
        if not snapshot.nodes:
            raise EmptyGraph("Cannot enumerate cycles of an empty graph")
        if start is not None:
            return enumerate_eulerian_cycles(snapshot, start, token, max_results)

        combined = EnumerationResult()
        seen: set[tuple[str, ...]] = set()
        for node_id in snapshot.node_ids:
            remaining = None if max_results is None else max_results - len(combined.paths)
            result = enumerate_eulerian_cycles(snapshot, node_id, token, remaining)
            for cycle in result.paths:
                if cycle not in seen:
                    seen.add(cycle)
                    combined.paths.append(cycle)
            if not result.complete:
                combined.status = result.status
                break
        return combined

    def path_between(
        self,
        begin: str,
        end: str,
        token: CancellationToken | None = None,
        max_results: int | None = None,
        max_depth: int | None = None
    ) -> EnumerationResult:
        """
        Find every simple path from `begin` to `end`.

        Raises:
            InvalidReference: If either endpoint is not in the graph
        """
        return enumerate_simple_paths(
            self.snapshot(), begin, end,
            adjacency=self.adjacency_index(),
            token=token,
            max_results=max_results,
            max_depth=max_depth,
        )

    async def eulerian_cycles_async(
        self,
        start: str | None = None,
        timeout: float | None = None,
        max_results: int | None = None
    ) -> EnumerationResult:
        """Like eulerian_cycles, on a worker thread with an optional timeout."""
        return await run_enumeration(
            self._eulerian_cycles, self.snapshot(), start,
            timeout=timeout, max_results=max_results,
        )

    async def path_between_async(
        self,
        begin: str,
        end: str,
        timeout: float | None = None,
        max_results: int | None = None,
        max_depth: int | None = None
    ) -> EnumerationResult:
        """Like path_between, on a worker thread with an optional timeout."""
        return await run_enumeration(
            enumerate_simple_paths, self.snapshot(), begin, end,
            adjacency=self.adjacency_index(),
            timeout=timeout,
            max_results=max_results,
            max_depth=max_depth,
        )
