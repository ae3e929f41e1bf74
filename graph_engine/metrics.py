"""
Graph metrics - Degree, eccentricity, diameter, radius and centers.

All distance-based metrics ignore INFINITY entries, so a disconnected
graph reports the metrics of what is reachable rather than failing.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .distance import INFINITY, DistanceMatrix
from .store import GraphSnapshot

if TYPE_CHECKING:
    from .controller import GraphController


def degree_of(snapshot: GraphSnapshot, node_id: str) -> int:
    """
    Count the arc ends at a node.

    A self-loop contributes two ends; every parallel arc counts on its own.
    """
    degree = 0
    for arc in snapshot.arcs:
        if arc.begin == node_id:
            degree += 1
        if arc.end == node_id:
            degree += 1
    return degree


def eccentricity(distances: DistanceMatrix, node_id: str) -> int:
    """Greatest finite distance from a node, or 0 if nothing is reachable."""
    finite = [d for d in distances.row(node_id).values() if d != INFINITY]
    return max(finite, default=0)


def eccentricities(distances: DistanceMatrix) -> dict[str, int]:
    return {nid: eccentricity(distances, nid) for nid in distances.node_ids}


def diameter(distances: DistanceMatrix) -> int:
    """Greatest eccentricity over all nodes (0 for an empty or edgeless graph)."""
    return max(eccentricities(distances).values(), default=0)


def radius(distances: DistanceMatrix) -> int:
    """Smallest positive eccentricity, or 0 when no node has one."""
    return min((e for e in eccentricities(distances).values() if e > 0), default=0)


def centers(distances: DistanceMatrix) -> list[str]:
    """All nodes whose eccentricity equals the radius, in graph order."""
    target = radius(distances)
    return [nid for nid, ecc in eccentricities(distances).items() if ecc == target]


# --- Components & Summary ---

@dataclass
class ConnectedComponent:
    """A weakly connected component (arc direction ignored)."""
    node_ids: list[str] = field(default_factory=list)
    arc_count: int = 0

    @property
    def size(self) -> int:
        return len(self.node_ids)


@dataclass
class NodeDegreeInfo:
    """Degree information for a single node."""
    node_id: str
    label: str
    incoming: int = 0   # Arc ends pointing at this node
    outgoing: int = 0   # Arc ends leaving this node

    @property
    def total(self) -> int:
        return self.incoming + self.outgoing


@dataclass
class GraphSummary:
    """Complete summary of a graph's structure."""
    total_nodes: int
    total_arcs: int
    directed_arcs: int
    self_loops: int
    connected_components: int
    diameter: int
    radius: int
    centers: list[str]
    is_connective: bool
    is_tree: bool
    is_planar: bool
    most_connected_nodes: list[NodeDegreeInfo]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_nodes": self.total_nodes,
            "total_arcs": self.total_arcs,
            "directed_arcs": self.directed_arcs,
            "self_loops": self.self_loops,
            "connected_components": self.connected_components,
            "diameter": self.diameter,
            "radius": self.radius,
            "centers": self.centers,
            "is_connective": self.is_connective,
            "is_tree": self.is_tree,
            "is_planar": self.is_planar,
            "most_connected_nodes": [
                {
                    "id": n.node_id,
                    "label": n.label,
                    "degree": n.total,
                    "incoming": n.incoming,
                    "outgoing": n.outgoing
                }
                for n in self.most_connected_nodes
            ],
        }


def find_weak_components(snapshot: GraphSnapshot) -> list[ConnectedComponent]:
    """
    Find all connected components using BFS, treating arcs as undirected.

    Args:
        snapshot: The graph to analyze

    Returns:
        List of ConnectedComponent objects, in order of their first node
    """
    if not snapshot.nodes:
        return []

    node_ids = snapshot.node_ids

    # Build adjacency list (undirected)
    adjacency: dict[str, set[str]] = {nid: set() for nid in node_ids}
    arc_counts: dict[str, int] = defaultdict(int)

    for arc in snapshot.arcs:
        if arc.begin in adjacency and arc.end in adjacency:
            adjacency[arc.begin].add(arc.end)
            adjacency[arc.end].add(arc.begin)
            arc_counts[arc.begin] += 1

    # BFS to find components
    visited: set[str] = set()
    components: list[ConnectedComponent] = []

    for start_node in node_ids:
        if start_node in visited:
            continue

        component_nodes: list[str] = []
        queue = deque([start_node])
        visited.add(start_node)

        while queue:
            current = queue.popleft()
            component_nodes.append(current)

            for neighbor in adjacency[current]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        components.append(ConnectedComponent(
            node_ids=component_nodes,
            arc_count=sum(arc_counts[nid] for nid in component_nodes)
        ))

    return components


def calculate_node_degrees(snapshot: GraphSnapshot) -> dict[str, NodeDegreeInfo]:
    """Calculate incoming/outgoing arc ends for all nodes."""
    degrees: dict[str, NodeDegreeInfo] = {}
    for node in snapshot.nodes:
        degrees[node.id] = NodeDegreeInfo(node_id=node.id, label=node.label)

    for arc in snapshot.arcs:
        if arc.begin in degrees:
            degrees[arc.begin].outgoing += 1
        if arc.end in degrees:
            degrees[arc.end].incoming += 1

    return degrees


def summarize_graph(controller: "GraphController", top_n: int = 5) -> GraphSummary:
    """
    Generate a comprehensive summary of the controller's graph.

    Args:
        controller: The graph to summarize
        top_n: Number of top connected nodes to include

    Returns:
        GraphSummary object with all analysis results
    """
    snapshot = controller.snapshot()

    degrees = calculate_node_degrees(snapshot)
    sorted_by_degree = sorted(degrees.values(), key=lambda x: x.total, reverse=True)
    most_connected = [n for n in sorted_by_degree[:top_n] if n.total > 0]

    return GraphSummary(
        total_nodes=len(snapshot.nodes),
        total_arcs=len(snapshot.arcs),
        directed_arcs=sum(1 for arc in snapshot.arcs if arc.directed),
        self_loops=sum(1 for arc in snapshot.arcs if arc.is_loop),
        connected_components=len(find_weak_components(snapshot)),
        diameter=controller.diameter(),
        radius=controller.radius(),
        centers=controller.centers(),
        is_connective=controller.is_connective(),
        is_tree=controller.is_tree(),
        is_planar=controller.is_planar(),
        most_connected_nodes=most_connected,
    )
