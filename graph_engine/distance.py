"""
Distance matrix - All-pairs shortest distances over the adjacency index.

Every arc has unit weight, so a breadth-first search from each node is
enough. Unreachable pairs hold the INFINITY sentinel.
"""

from collections import deque

from .adjacency import AdjacencyIndex
from .errors import InvalidReference
from .store import GraphSnapshot

# Reserved "no path" value (not a real infinity, so it stays an int)
INFINITY = 2**31 - 1


class DistanceMatrix:
    """
    Shortest distances between every ordered pair of nodes.

    A node reaches itself at distance 0 as soon as it has an incident
    arc; an isolated node has INFINITY even to itself.
    """

    def __init__(self, snapshot: GraphSnapshot, adjacency: AdjacencyIndex | None = None):
        if adjacency is None:
            adjacency = AdjacencyIndex(snapshot)
        self.revision = snapshot.revision

        node_ids = snapshot.node_ids
        touched: set[str] = set()
        for arc in snapshot.arcs:
            touched.add(arc.begin)
            touched.add(arc.end)

        self._distances: dict[str, dict[str, int]] = {}
        for start in node_ids:
            row = {nid: INFINITY for nid in node_ids}
            if start in touched:
                row[start] = 0

            # BFS from this node
            seen = {start}
            queue = deque([(start, 0)])
            while queue:
                current, dist = queue.popleft()
                for neighbor in adjacency.adjacent_nodes_of(current):
                    if neighbor not in seen:
                        seen.add(neighbor)
                        row[neighbor] = dist + 1
                        queue.append((neighbor, dist + 1))

            self._distances[start] = row

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._distances

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DistanceMatrix):
            return self._distances == other._distances
        return NotImplemented

    @property
    def node_ids(self) -> tuple[str, ...]:
        return tuple(self._distances)

    def distance(self, begin: str, end: str) -> int:
        """
        Get the distance from `begin` to `end`.

        Raises:
            InvalidReference: If either node is not in the matrix
        """
        row = self.row(begin)
        try:
            return row[end]
        except KeyError:
            raise InvalidReference(end) from None

    def row(self, begin: str) -> dict[str, int]:
        """Get every distance from `begin`, keyed by target node id."""
        try:
            return self._distances[begin]
        except KeyError:
            raise InvalidReference(begin) from None

    def to_dict(self) -> dict[str, dict[str, int | None]]:
        """Convert to JSON-serializable dict (INFINITY becomes None)."""
        return {
            begin: {end: (None if dist == INFINITY else dist) for end, dist in row.items()}
            for begin, row in self._distances.items()
        }
