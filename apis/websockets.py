from typing import Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from sqlmodel import Session
from database import get_session
from helpers.auth import get_current_user
from helpers.tokens import AuthClaim, InvalidToken, verify
from realtime.manager import ConnectionManager, get_hub
from realtime.events import ChatEventHandler, CONNECTION_ESTABLISHED
from .schemas.chat import WebSocketStatsResponse
from settings import logger

router = APIRouter(tags=["websockets"])


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    token: Optional[str] = None,
    hub: ConnectionManager = Depends(get_hub),
    db_session: Session = Depends(get_session)
):
    """
    WebSocket endpoint for the chat room.

    Query parameter:
    - token: bearer token; optional, but rejected when present and invalid
    """
    if token:
        try:
            verify(token)
        except InvalidToken as e:
            logger.warning("WebSocket authentication failed", extra={
                "error": str(e),
                "token": token[:20] + "..." if len(token) > 20 else token
            })
            await websocket.close(code=1008, reason="Authentication failed")
            return

    session_id = await hub.connect(websocket)
    handler = ChatEventHandler(hub, session_id, db_session)

    try:
        await hub.send_to_connection(session_id, CONNECTION_ESTABLISHED, {
            "session_id": session_id,
            "active_connections": hub.get_connection_count()
        })

        while True:
            data = await websocket.receive_text()
            await handler.dispatch(data)

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error("WebSocket connection error", extra={
            "session_id": session_id,
            "error": str(e)
        })
    finally:
        await handler.on_disconnect()


@router.get("/ws/stats")
async def get_websocket_stats(
    claim: AuthClaim = Depends(get_current_user),
    hub: ConnectionManager = Depends(get_hub)
) -> WebSocketStatsResponse:
    """Get WebSocket connection statistics."""
    return WebSocketStatsResponse(
        active_connections=hub.get_connection_count(),
        status="running"
    )
