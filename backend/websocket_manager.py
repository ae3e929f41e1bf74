"""
Pushes graph revision changes to connected editors.
"""
from fastapi import WebSocket
from typing import Set
import asyncio
import json
import logging

logger = logging.getLogger(__name__)


class WebSocketManager:
    """Tracks open sockets and fans out `graph_updated` events."""

    def __init__(self):
        self._connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        async with self._lock:
            self._connections.add(websocket)
        logger.info(f"Editor connected ({len(self._connections)} open)")

    async def disconnect(self, websocket: WebSocket):
        async with self._lock:
            self._connections.discard(websocket)
        logger.info(f"Editor disconnected ({len(self._connections)} open)")

    async def broadcast(self, message: dict):
        """Send `message` to every socket, dropping those whose send fails."""
        if not self._connections:
            return

        payload = json.dumps(message)
        dead: Set[WebSocket] = set()

        async with self._lock:
            for websocket in self._connections:
                try:
                    await websocket.send_text(payload)
                except Exception as e:
                    logger.warning(f"Dropping socket after failed send: {e}")
                    dead.add(websocket)
            self._connections -= dead

    async def notify_graph_updated(self, revision: int):
        """Announce a new store revision; clients re-read /api/graph."""
        await self.broadcast({"type": "graph_updated", "revision": revision})

    @property
    def connection_count(self) -> int:
        return len(self._connections)


ws_manager = WebSocketManager()
