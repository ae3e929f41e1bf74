"""
Graph errors - Exception taxonomy for the analysis engine.

Unreachability is not an error: it is reported through the
``INFINITY`` sentinel of the distance matrix.
"""


class GraphError(Exception):
    """Base class for all engine errors."""


class InvalidReference(GraphError, KeyError):
    """An arc, query or path names a node that is not in the graph."""

    def __init__(self, node_id: str, context: str = "node"):
        self.node_id = node_id
        self.context = context
        super().__init__(f"Unknown {context}: {node_id}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return self.args[0]


class EmptyGraph(GraphError, ValueError):
    """An enumeration was requested on a graph without nodes."""
