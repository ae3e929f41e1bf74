"""
Graph Tool Backend - FastAPI Application

This is the main entry point for the graph analysis backend.
It provides:
- REST API for graph mutation (nodes, arcs) and analysis queries
- Enumeration endpoints running on worker threads with a timeout
- WebSocket endpoint for real-time updates
- CORS configuration for local editor development
"""
import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from graph_engine import (
    GraphController,
    CreateNodeRequest,
    CreateArcRequest,
    EmptyGraph,
    InvalidReference,
    summarize_graph,
    validate_graph,
    validation_summary,
)
from .websocket_manager import ws_manager

HOST = os.environ.get("GRAPH_TOOL_HOST", "127.0.0.1")
PORT = int(os.environ.get("GRAPH_TOOL_PORT", "8766"))
ENUMERATION_TIMEOUT = float(os.environ.get("GRAPH_TOOL_ENUMERATION_TIMEOUT", "10"))
MAX_RESULTS = int(os.environ.get("GRAPH_TOOL_MAX_RESULTS", "1000"))
LOG_LEVEL = os.environ.get("GRAPH_TOOL_LOG_LEVEL", "INFO")

logger = logging.getLogger(__name__)

# Global graph for the application
graph_controller = GraphController()


# --- Async change notification ---
# Bridge between sync GraphStore callbacks and async WebSocket broadcasts

_change_event: Optional[asyncio.Event] = None

def on_graph_change():
    """Callback for graph changes - sets event for async handler."""
    if _change_event is not None:
        _change_event.set()

graph_controller.on_change(on_graph_change)

async def change_broadcaster():
    """Background task that broadcasts changes to WebSocket clients."""
    while True:
        await _change_event.wait()
        _change_event.clear()
        await ws_manager.notify_graph_updated(graph_controller.store.revision)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler for startup/shutdown tasks."""
    global _change_event
    # The event must belong to the loop serving the app
    _change_event = asyncio.Event()

    broadcaster_task = asyncio.create_task(change_broadcaster())
    logger.info(f"Graph tool backend ready (enumeration timeout {ENUMERATION_TIMEOUT}s, max results {MAX_RESULTS})")

    yield

    broadcaster_task.cancel()
    try:
        await broadcaster_task
    except asyncio.CancelledError:
        pass


# --- FastAPI App ---

app = FastAPI(
    title="Graph Tool API",
    description="Analysis backend for the graph editor",
    version="1.0.0",
    lifespan=lifespan
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _graph_state() -> dict:
    snapshot = graph_controller.snapshot()
    return {
        "revision": snapshot.revision,
        "nodes": [node.model_dump() for node in snapshot.nodes],
        "arcs": [arc.to_json_dict() for arc in snapshot.arcs],
    }


# --- Health Check ---

@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "connections": ws_manager.connection_count}


# --- Graph State ---

@app.get("/api/graph")
async def get_graph():
    """Get the current graph state."""
    return _graph_state()


@app.post("/api/graph/new")
async def new_graph():
    """Drop every node and arc."""
    graph_controller.clear()
    return {"success": True, "graph": _graph_state()}


# --- Node Operations ---

@app.post("/api/graph/nodes")
async def create_node(request: CreateNodeRequest):
    """Add a node. An id that is already in use returns the existing node."""
    fields = {"label": request.label}
    if request.id:
        fields["id"] = request.id
    node = graph_controller.add_node(**fields)
    return {"success": True, "node": node.model_dump()}


@app.delete("/api/graph/nodes/{node_id}")
async def delete_node(node_id: str):
    """Delete a node and all of its arcs."""
    if not graph_controller.remove_node(node_id):
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")
    return {"success": True}


@app.get("/api/graph/nodes/{node_id}/degree")
async def node_degree(node_id: str):
    """Get the degree and eccentricity of a node."""
    try:
        return {
            "success": True,
            "node_id": node_id,
            "degree": graph_controller.degree_of(node_id),
            "eccentricity": graph_controller.eccentricity(node_id),
        }
    except InvalidReference as e:
        raise HTTPException(status_code=404, detail=str(e))


# --- Arc Operations ---

@app.post("/api/graph/arcs")
async def create_arc(request: CreateArcRequest):
    """Add an arc between two existing nodes."""
    try:
        arc = graph_controller.add_arc(
            begin=request.begin,
            end=request.end,
            directed=request.directed
        )
        return {"success": True, "arc": arc.to_json_dict()}
    except InvalidReference as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.delete("/api/graph/arcs/{arc_id}")
async def delete_arc(arc_id: str):
    """Delete an arc."""
    if not graph_controller.remove_arc(arc_id):
        raise HTTPException(status_code=404, detail=f"Arc not found: {arc_id}")
    return {"success": True}


# --- Metrics & Structure ---

@app.get("/api/graph/metrics")
async def graph_metrics():
    """Get diameter, radius and centers."""
    return {
        "success": True,
        "diameter": graph_controller.diameter(),
        "radius": graph_controller.radius(),
        "centers": graph_controller.centers(),
    }


@app.get("/api/graph/structure")
async def graph_structure():
    """Classify the graph: connective, tree, planar."""
    return {
        "success": True,
        "is_connective": graph_controller.is_connective(),
        "is_tree": graph_controller.is_tree(),
        "is_planar": graph_controller.is_planar(),
    }


@app.get("/api/graph/adjacency")
async def graph_adjacency():
    """Get the successor list of every node (undirected arcs count both ways)."""
    return {"success": True, "adjacency": graph_controller.adjacency_index().to_dict()}


@app.get("/api/graph/distances")
async def graph_distances():
    """Get the all-pairs distance matrix (unreachable pairs are null)."""
    return {"success": True, "distances": graph_controller.distance_matrix().to_dict()}


@app.get("/api/graph/coloring")
async def graph_coloring():
    """Get a proper coloring of the nodes."""
    coloring = graph_controller.colorize_nodes()
    return {
        "success": True,
        "coloring": coloring,
        "colors_used": len(set(coloring.values())),
    }


# --- Enumeration ---

@app.get("/api/graph/cycles")
async def graph_cycles(
    start: Optional[str] = Query(default=None),
    timeout: float = Query(default=ENUMERATION_TIMEOUT, gt=0),
    max_results: int = Query(default=MAX_RESULTS, ge=1)
):
    """
    Enumerate closed walks that use every arc exactly once.

    Runs on a worker thread; a search that hits the timeout or the
    result cap returns what it found with a matching status.
    """
    try:
        result = await graph_controller.eulerian_cycles_async(
            start=start,
            timeout=timeout,
            max_results=max_results
        )
    except InvalidReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EmptyGraph as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, **result.to_dict()}


@app.get("/api/graph/paths")
async def graph_paths(
    begin: str = Query(...),
    end: str = Query(...),
    timeout: float = Query(default=ENUMERATION_TIMEOUT, gt=0),
    max_results: int = Query(default=MAX_RESULTS, ge=1),
    max_depth: Optional[int] = Query(default=None, ge=1)
):
    """Enumerate all simple paths between two nodes."""
    try:
        result = await graph_controller.path_between_async(
            begin,
            end,
            timeout=timeout,
            max_results=max_results,
            max_depth=max_depth
        )
    except InvalidReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, **result.to_dict()}


# --- Analysis & Validation ---

@app.get("/api/graph/validate")
async def validate_current_graph():
    """
    Validate the current graph for structural issues.

    Returns a list of issues (errors, warnings, info) and a summary.
    """
    issues = validate_graph(graph_controller.snapshot())
    return {
        "success": True,
        "issues": [issue.to_dict() for issue in issues],
        "summary": validation_summary(issues)
    }


@app.get("/api/graph/summary")
async def summarize_current_graph():
    """Get a structural summary of the current graph."""
    return {
        "success": True,
        "summary": summarize_graph(graph_controller).to_dict()
    }


# --- WebSocket ---

@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for real-time updates.

    Clients connect here to receive graph_updated events.
    """
    await ws_manager.connect(websocket)

    try:
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text('{"type": "pong"}')
    except WebSocketDisconnect:
        await ws_manager.disconnect(websocket)


# --- Run with uvicorn ---

def run():
    """Start the backend with uvicorn."""
    import uvicorn
    logging.basicConfig(level=LOG_LEVEL)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
