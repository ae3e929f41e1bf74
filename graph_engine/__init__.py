"""
Graph Engine - Graph store, metrics, verifiers, coloring and enumeration.

This package is the analysis core of the graph editor. The backend API
and the MCP tools both go through GraphController, so every answer about
a graph comes from a single place.
"""

from .models import (
    Node,
    Arc,
    Path,
    # Request models (for API)
    CreateNodeRequest,
    CreateArcRequest,
)
from .errors import GraphError, InvalidReference, EmptyGraph
from .store import GraphStore, GraphSnapshot
from .adjacency import AdjacencyIndex
from .distance import DistanceMatrix, INFINITY
from .enumeration import (
    CancellationToken,
    EnumerationResult,
    EnumerationStatus,
    enumerate_eulerian_cycles,
    enumerate_simple_paths,
)
from .controller import GraphController
from .metrics import summarize_graph, find_weak_components
from .validation import validate_graph, validation_summary, ValidationIssue, IssueSeverity

__all__ = [
    # Models
    "Node",
    "Arc",
    "Path",
    # Request models
    "CreateNodeRequest",
    "CreateArcRequest",
    # Errors
    "GraphError",
    "InvalidReference",
    "EmptyGraph",
    # Store & derived structures
    "GraphStore",
    "GraphSnapshot",
    "AdjacencyIndex",
    "DistanceMatrix",
    "INFINITY",
    # Enumeration
    "CancellationToken",
    "EnumerationResult",
    "EnumerationStatus",
    "enumerate_eulerian_cycles",
    "enumerate_simple_paths",
    # Facade
    "GraphController",
    # Analysis
    "summarize_graph",
    "find_weak_components",
    # Validation
    "validate_graph",
    "validation_summary",
    "ValidationIssue",
    "IssueSeverity",
]
