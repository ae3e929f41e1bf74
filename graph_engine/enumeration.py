"""
Enumeration - Backtracking searches for cycles and paths.

Provides two exhaustive searches over a graph snapshot:
- Edge-covering cycles: closed walks from a start node that use every
  arc exactly once
- Simple paths: walks between two nodes that never repeat a node

Both searches keep an explicit frame stack instead of recursing, check a
CancellationToken at every step and can stop after a number of results.
A stopped search still returns everything it found so far.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum

from .adjacency import AdjacencyIndex
from .errors import InvalidReference
from .models import Path
from .store import GraphSnapshot

logger = logging.getLogger(__name__)


class EnumerationStatus(str, Enum):
    """How an enumeration ended."""
    COMPLETE = "complete"    # Search space exhausted
    CANCELLED = "cancelled"  # Token cancelled by the caller
    TIMED_OUT = "timed_out"  # Token deadline passed
    TRUNCATED = "truncated"  # max_results reached


class CancellationToken:
    """
    Cooperative stop signal shared between a caller and a running search.

    Safe to cancel from another thread. An optional timeout turns into a
    deadline checked alongside the cancel flag.
    """

    def __init__(self, timeout: float | None = None):
        self._cancelled = threading.Event()
        self._deadline = None if timeout is None else time.monotonic() + timeout

    def cancel(self):
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def timed_out(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def stop_status(self) -> EnumerationStatus | None:
        """Get the reason to stop, or None to keep going."""
        if self.cancelled:
            return EnumerationStatus.CANCELLED
        if self.timed_out:
            return EnumerationStatus.TIMED_OUT
        return None


@dataclass
class EnumerationResult:
    """Paths found by a search and how the search ended."""
    paths: list[Path] = field(default_factory=list)
    status: EnumerationStatus = EnumerationStatus.COMPLETE

    @property
    def complete(self) -> bool:
        return self.status == EnumerationStatus.COMPLETE

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "paths": [list(path) for path in self.paths],
            "count": len(self.paths),
            "status": self.status.value,
        }


class _Collector:
    """Keeps distinct paths in discovery order, up to an optional cap."""

    def __init__(self, max_results: int | None = None):
        if max_results is not None and max_results < 1:
            raise ValueError(f"max_results must be at least 1, got {max_results}")
        self.paths: list[Path] = []
        self._seen: set[Path] = set()
        self._max_results = max_results

    @property
    def full(self) -> bool:
        return self._max_results is not None and len(self.paths) >= self._max_results

    def add(self, path: Path):
        if path not in self._seen:
            self._seen.add(path)
            self.paths.append(path)

    def result(self, status: EnumerationStatus) -> EnumerationResult:
        return EnumerationResult(paths=list(self.paths), status=status)


def _arc_moves(snapshot: GraphSnapshot) -> dict[str, list[tuple[str, str]]]:
    """Map each node to the (arc_id, next_node) steps leaving it."""
    moves: dict[str, list[tuple[str, str]]] = {node.id: [] for node in snapshot.nodes}
    for arc in snapshot.arcs:
        moves[arc.begin].append((arc.id, arc.end))
        if not arc.directed and not arc.is_loop:
            moves[arc.end].append((arc.id, arc.begin))
    return moves


def _finish(kind: str, collector: _Collector, status: EnumerationStatus) -> EnumerationResult:
    if status == EnumerationStatus.COMPLETE:
        logger.info(f"{kind} enumeration complete: {len(collector.paths)} found")
    else:
        logger.warning(f"{kind} enumeration stopped ({status.value}) after {len(collector.paths)} found")
    return collector.result(status)


def enumerate_eulerian_cycles(
    snapshot: GraphSnapshot,
    start: str,
    token: CancellationToken | None = None,
    max_results: int | None = None
) -> EnumerationResult:
    """
    Find all distinct closed walks from `start` that use every arc once.

    An undirected arc may be walked either way but is consumed by the
    first traversal. Cycles are compared as exact node sequences, so two
    parallel arcs producing the same sequence count once.

    Args:
        snapshot: The graph to search
        start: Node every cycle begins and ends at
        token: Optional cancellation token, checked at every step
        max_results: Stop after this many cycles

    Returns:
        EnumerationResult with cycles as (start, ..., start) tuples

    Raises:
        InvalidReference: If `start` is not in the graph
        ValueError: If `max_results` is less than 1
    """
    moves = _arc_moves(snapshot)
    if start not in moves:
        raise InvalidReference(start, "start node")

    collector = _Collector(max_results)
    total = len(snapshot.arcs)
    if total == 0:
        return _finish("Cycle", collector, EnumerationStatus.COMPLETE)

    path: list[str] = [start]
    trail: list[str] = []  # arc ids, one per frame above the root
    used: set[str] = set()
    stack = [iter(moves[start])]

    while stack:
        if token is not None:
            status = token.stop_status()
            if status is not None:
                return _finish("Cycle", collector, status)

        step = next(stack[-1], None)
        if step is None:
            # Frame exhausted: undo the arc that led here
            stack.pop()
            if trail:
                used.discard(trail.pop())
                path.pop()
            continue

        arc_id, next_node = step
        if arc_id in used:
            continue

        if len(used) + 1 == total:
            # Last unused arc: the walk is a cycle only if it closes at start
            if next_node == start:
                collector.add(tuple(path) + (start,))
                if collector.full:
                    return _finish("Cycle", collector, EnumerationStatus.TRUNCATED)
            continue

        used.add(arc_id)
        trail.append(arc_id)
        path.append(next_node)
        stack.append(iter(moves[next_node]))

    return _finish("Cycle", collector, EnumerationStatus.COMPLETE)


def enumerate_simple_paths(
    snapshot: GraphSnapshot,
    begin: str,
    end: str,
    adjacency: AdjacencyIndex | None = None,
    token: CancellationToken | None = None,
    max_results: int | None = None,
    max_depth: int | None = None
) -> EnumerationResult:
    """
    Find all paths from `begin` to `end` that never repeat a node.

    Args:
        snapshot: The graph to search
        begin: Starting node ID
        end: Ending node ID
        adjacency: Prebuilt adjacency index for the snapshot
        token: Optional cancellation token, checked at every step
        max_results: Stop after this many paths
        max_depth: Skip paths longer than this many arcs

    Returns:
        EnumerationResult with paths as (begin, ..., end) tuples

    Raises:
        InvalidReference: If either endpoint is not in the graph
        ValueError: If `max_results` is less than 1
    """
    if adjacency is None or adjacency.revision != snapshot.revision:
        adjacency = AdjacencyIndex(snapshot)
    if begin not in adjacency:
        raise InvalidReference(begin, "begin node")
    if end not in adjacency:
        raise InvalidReference(end, "end node")

    collector = _Collector(max_results)
    if begin == end:
        collector.add((begin,))
        return _finish("Path", collector, EnumerationStatus.COMPLETE)

    path: list[str] = [begin]
    visited: set[str] = {begin}
    stack = [iter(adjacency.adjacent_nodes_of(begin))]

    while stack:
        if token is not None:
            status = token.stop_status()
            if status is not None:
                return _finish("Path", collector, status)

        next_node = next(stack[-1], None)
        if next_node is None:
            stack.pop()
            visited.discard(path.pop())
            continue

        if next_node in visited:
            continue

        # Arc count of the path once next_node is appended
        length = len(path)
        if max_depth is not None and length > max_depth:
            continue

        if next_node == end:
            collector.add(tuple(path) + (end,))
            if collector.full:
                return _finish("Path", collector, EnumerationStatus.TRUNCATED)
            continue

        if max_depth is not None and length >= max_depth:
            continue

        visited.add(next_node)
        path.append(next_node)
        stack.append(iter(adjacency.adjacent_nodes_of(next_node)))

    return _finish("Path", collector, EnumerationStatus.COMPLETE)
