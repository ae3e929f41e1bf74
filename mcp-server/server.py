#!/usr/bin/env python3
"""
Graph Tool MCP Server

Provides MCP tools for AI agents to build graphs and query the analysis
engine. All changes are immediately reflected in the editor via
WebSocket updates.
"""

import httpx
from mcp.server.fastmcp import FastMCP
from typing import Optional
import json
import os

# Backend API URL
API_BASE = os.environ.get("GRAPH_TOOL_API_BASE", "http://127.0.0.1:8766/api")

# Create MCP server
mcp = FastMCP("graph-tool")


# --- HTTP Client Helper ---

def api_request(method: str, endpoint: str, **kwargs) -> dict:
    """Make a request to the graph tool backend."""
    url = f"{API_BASE}{endpoint}"
    with httpx.Client(timeout=60.0) as client:
        if method == "GET":
            response = client.get(url, params=kwargs.get("params"))
        elif method == "POST":
            response = client.post(url, json=kwargs.get("json"), params=kwargs.get("params"))
        elif method == "DELETE":
            response = client.delete(url)
        else:
            raise ValueError(f"Unknown method: {method}")

        if response.status_code >= 400:
            error = response.json().get("detail", "Unknown error")
            raise Exception(f"API error: {error}")

        return response.json()


def _params(**values) -> dict:
    return {k: v for k, v in values.items() if v is not None}


# ============================================================================
# GRAPH TOOLS
# ============================================================================

@mcp.tool()
def graph_get_current() -> str:
    """
    Get the full current graph: nodes, arcs and revision.

    Use this to see what is in the graph before changing it.
    """
    result = api_request("GET", "/graph")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_new() -> str:
    """Drop every node and arc and start from an empty graph."""
    result = api_request("POST", "/graph/new")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_add_node(label: str = "", node_id: Optional[str] = None) -> str:
    """
    Add a node to the graph.

    Args:
        label: Display label
        node_id: Optional stable id (generated when omitted)

    Returns the created node.
    """
    data = {"label": label}
    if node_id:
        data["id"] = node_id
    result = api_request("POST", "/graph/nodes", json=data)
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_delete_node(node_id: str) -> str:
    """
    Delete a node. Every arc touching it is deleted as well.

    Args:
        node_id: ID of the node to delete
    """
    result = api_request("DELETE", f"/graph/nodes/{node_id}")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_add_arc(begin: str, end: str, directed: bool = True) -> str:
    """
    Connect two nodes with an arc.

    Args:
        begin: ID of the node the arc starts at
        end: ID of the node the arc ends at
        directed: False for an arc walkable in both directions

    Several arcs may join the same pair; each gets its own id and key.
    """
    result = api_request("POST", "/graph/arcs", json={
        "begin": begin,
        "end": end,
        "directed": directed
    })
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_delete_arc(arc_id: str) -> str:
    """
    Delete an arc.

    Args:
        arc_id: ID of the arc to delete
    """
    result = api_request("DELETE", f"/graph/arcs/{arc_id}")
    return json.dumps(result, indent=2)


# ============================================================================
# ANALYSIS TOOLS
# ============================================================================

@mcp.tool()
def graph_node_degree(node_id: str) -> str:
    """
    Get the degree and eccentricity of a node.

    Degree counts arc ends (a self-loop counts twice). Eccentricity is
    the greatest finite distance from the node.
    """
    result = api_request("GET", f"/graph/nodes/{node_id}/degree")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_metrics() -> str:
    """Get the diameter, radius and center nodes of the graph."""
    result = api_request("GET", "/graph/metrics")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_structure() -> str:
    """Check whether the graph is connective, a tree, and planar."""
    result = api_request("GET", "/graph/structure")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_adjacency() -> str:
    """
    Get the nodes reachable from each node through a single arc.

    Directed arcs count from begin to end only.
    """
    result = api_request("GET", "/graph/adjacency")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_distances() -> str:
    """
    Get the shortest distance between every ordered pair of nodes.

    Unreachable pairs are null.
    """
    result = api_request("GET", "/graph/distances")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_colorize() -> str:
    """
    Color the nodes so that no arc joins two nodes of the same color.

    The coloring is greedy: always valid, not always minimal.
    """
    result = api_request("GET", "/graph/coloring")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_eulerian_cycles(
    start: Optional[str] = None,
    timeout: Optional[float] = None,
    max_results: Optional[int] = None
) -> str:
    """
    Enumerate closed walks that use every arc exactly once.

    Args:
        start: Node every cycle begins at (all nodes when omitted)
        timeout: Seconds before the search gives up
        max_results: Stop after this many cycles

    The status field tells whether the search finished or was cut short
    (timed_out, truncated); cut-short searches still return what they found.
    """
    result = api_request("GET", "/graph/cycles", params=_params(
        start=start, timeout=timeout, max_results=max_results
    ))
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_paths_between(
    begin: str,
    end: str,
    timeout: Optional[float] = None,
    max_results: Optional[int] = None,
    max_depth: Optional[int] = None
) -> str:
    """
    Enumerate every simple path (no repeated node) between two nodes.

    Args:
        begin: Starting node ID
        end: Ending node ID
        timeout: Seconds before the search gives up
        max_results: Stop after this many paths
        max_depth: Skip paths longer than this many arcs
    """
    result = api_request("GET", "/graph/paths", params=_params(
        begin=begin, end=end, timeout=timeout,
        max_results=max_results, max_depth=max_depth
    ))
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_validate_structure() -> str:
    """
    Validate the graph for structural issues.

    Reports isolated nodes, dangling arc references, self-loops and
    parallel arcs, with a summary count per severity.
    """
    result = api_request("GET", "/graph/validate")
    return json.dumps(result, indent=2)


@mcp.tool()
def graph_summarize() -> str:
    """
    Get a structural summary of the graph.

    Includes node/arc counts, components, diameter, radius, centers,
    the structural flags and the most connected nodes.
    """
    result = api_request("GET", "/graph/summary")
    return json.dumps(result, indent=2)


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    mcp.run()
