"""
Adjacency index - Which nodes can be reached from a node in one hop.
"""

from .errors import InvalidReference
from .store import GraphSnapshot


class AdjacencyIndex:
    """
    Successor lists built from a graph snapshot.

    Directed arcs count from begin to end only, undirected arcs count
    both ways. Each successor is listed once, in order of the first arc
    reaching it.
    """

    def __init__(self, snapshot: GraphSnapshot):
        self.revision = snapshot.revision
        successors: dict[str, dict[str, None]] = {node.id: {} for node in snapshot.nodes}
        neighbors: dict[str, dict[str, None]] = {node.id: {} for node in snapshot.nodes}

        for arc in snapshot.arcs:
            if arc.begin not in successors or arc.end not in successors:
                continue
            successors[arc.begin][arc.end] = None
            if not arc.directed:
                successors[arc.end][arc.begin] = None
            if not arc.is_loop:
                neighbors[arc.begin][arc.end] = None
                neighbors[arc.end][arc.begin] = None

        self._successors = {nid: tuple(found) for nid, found in successors.items()}
        self._neighbors = {nid: tuple(found) for nid, found in neighbors.items()}

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._successors

    @property
    def node_ids(self) -> tuple[str, ...]:
        return tuple(self._successors)

    def adjacent_nodes_of(self, node_id: str) -> tuple[str, ...]:
        """Get the nodes reachable from `node_id` through a single arc."""
        try:
            return self._successors[node_id]
        except KeyError:
            raise InvalidReference(node_id) from None

    def neighbors_of(self, node_id: str) -> tuple[str, ...]:
        """Get the other endpoints of every arc at `node_id`, direction ignored."""
        try:
            return self._neighbors[node_id]
        except KeyError:
            raise InvalidReference(node_id) from None

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to JSON-serializable dict of successor lists."""
        return {nid: list(found) for nid, found in self._successors.items()}
