import json
import uuid
from typing import Any, Dict, Optional

from fastapi import WebSocket
from fastapi.requests import HTTPConnection
from settings import logger


class ConnectionManager:
    """Registry of live chat sessions with fan-out helpers.

    One instance is created per application and handed to handlers; it
    is not module global state.
    """

    def __init__(self):
        self.active_connections: Dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket) -> str:
        """Accept a new WebSocket connection and return its session id."""
        await websocket.accept()
        session_id = uuid.uuid4().hex
        self.active_connections[session_id] = websocket
        logger.info("WebSocket connection established", extra={
            "session_id": session_id,
            "total_connections": len(self.active_connections)
        })
        return session_id

    def disconnect(self, session_id: str):
        """Remove a session from the registry."""
        if self.active_connections.pop(session_id, None) is not None:
            logger.info("WebSocket connection closed", extra={
                "session_id": session_id,
                "total_connections": len(self.active_connections)
            })

    @staticmethod
    def encode(event: str, data: Any = None) -> str:
        return json.dumps({"event": event, "data": data})

    async def broadcast(self, event: str, data: Any = None, exclude: Optional[str] = None):
        """Send an event to every session, optionally skipping one (the sender)."""
        recipients = {
            session_id: connection
            for session_id, connection in self.active_connections.items()
            if session_id != exclude
        }
        if not recipients:
            logger.debug("No WebSocket sessions to broadcast to", extra={"event": event})
            return

        logger.info("Broadcasting event to WebSocket clients", extra={
            "event": event,
            "connection_count": len(recipients)
        })

        message = self.encode(event, data)
        disconnected_sessions = []

        for session_id, connection in recipients.items():
            try:
                await connection.send_text(message)
            except Exception as e:
                logger.warning("Failed to send event to WebSocket client", extra={
                    "session_id": session_id,
                    "error": str(e)
                })
                disconnected_sessions.append(session_id)

        # Remove failed connections
        for session_id in disconnected_sessions:
            self.disconnect(session_id)

    async def send_to_connection(self, session_id: str, event: str, data: Any = None):
        """Send an event to one session only."""
        connection = self.active_connections.get(session_id)
        if connection is None:
            return
        try:
            await connection.send_text(self.encode(event, data))
        except Exception as e:
            logger.warning("Failed to send event to specific WebSocket client", extra={
                "session_id": session_id,
                "error": str(e)
            })
            self.disconnect(session_id)

    def get_connection_count(self) -> int:
        """Get the number of active connections."""
        return len(self.active_connections)


def get_hub(connection: HTTPConnection) -> ConnectionManager:
    """Dependency returning the application's connection registry."""
    return connection.app.state.hub
