"""
Structural verifiers - Connectivity, tree and planarity checks.

Each check returns a plain boolean for any well-formed graph, empty
graphs included.
"""

import networkx as nx

from .distance import INFINITY, DistanceMatrix
from .store import GraphSnapshot


def is_connective(snapshot: GraphSnapshot, distances: DistanceMatrix) -> bool:
    """
    Return ``True`` when every ordered pair of nodes has a finite distance.

    A graph without nodes or without arcs is never connective.
    """
    if not snapshot.nodes or not snapshot.arcs:
        return False

    node_ids = snapshot.node_ids
    for begin in node_ids:
        row = distances.row(begin)
        for end in node_ids:
            if row[end] == INFINITY:
                return False
    return True


def is_tree(snapshot: GraphSnapshot, distances: DistanceMatrix) -> bool:
    """
    Return ``True`` when the graph is connective, loop-free and has
    exactly one arc fewer than it has nodes.
    """
    if snapshot.contains_loop():
        return False
    if len(snapshot.arcs) != len(snapshot.nodes) - 1:
        return False
    return is_connective(snapshot, distances)


def to_networkx(snapshot: GraphSnapshot) -> nx.MultiGraph:
    """Build the underlying undirected multigraph of a snapshot."""
    graph = nx.MultiGraph()
    graph.add_nodes_from(snapshot.node_ids)
    for arc in snapshot.arcs:
        graph.add_edge(arc.begin, arc.end, key=arc.id)
    return graph


def is_planar(snapshot: GraphSnapshot) -> bool:
    """Return ``True`` when the graph can be drawn without crossing arcs."""
    is_planar_flag, _ = nx.check_planarity(to_networkx(snapshot))
    return is_planar_flag
