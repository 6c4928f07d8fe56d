"""
Chat room event handling for a single WebSocket session.

Incoming frames are JSON objects ``{"event": ..., "data": ...}``. There is
no error channel back to the sender: invalid input is logged and dropped.
"""

import json
from typing import Any, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, func

from apis.schemas.chat import ChatMessageResponse, IncomingChatMessage
from models.chat import ChatMessage
from realtime.manager import ConnectionManager
from settings import logger

# Incoming events
SEND_MESSAGE = "sendMessage"
USER_STARTED_TYPING = "userStartedTyping"
USER_STOPPED_TYPING = "userStoppedTyping"
PING = "ping"

# Outgoing events
NEW_MESSAGE = "newMessage"
USER_LIST_UPDATED = "userListUpdated"
IS_TYPING = "isTyping"
STOPPED_TYPING = "stoppedTyping"
PONG = "pong"
CONNECTION_ESTABLISHED = "connection_established"


def parse_chat_message(data: Any) -> Optional[IncomingChatMessage]:
    """Validate a ``sendMessage`` payload.

    Returns None for invalid payloads; the caller drops them.
    """
    try:
        return IncomingChatMessage.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid message received", extra={
            "payload": repr(data)[:100],
            "errors": e.error_count()
        })
        return None


class ChatEventHandler:
    """Handles events of one connected session against the shared hub."""

    def __init__(self, hub: ConnectionManager, session_id: str, db_session: Session):
        self.hub = hub
        self.session_id = session_id
        self.db_session = db_session

    async def dispatch(self, raw: str):
        try:
            frame = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Invalid JSON received from WebSocket client", extra={
                "data": raw[:100] + "..." if len(raw) > 100 else raw
            })
            return

        if not isinstance(frame, dict):
            logger.warning("WebSocket frame is not an object", extra={"data": raw[:100]})
            return

        event = frame.get("event")
        data = frame.get("data")

        if event == SEND_MESSAGE:
            await self.on_send_message(data)
        elif event == USER_STARTED_TYPING:
            await self.on_typing_started(data)
        elif event == USER_STOPPED_TYPING:
            await self.on_typing_stopped()
        elif event == PING:
            await self.hub.send_to_connection(self.session_id, PONG, data)
        else:
            logger.debug("Unknown WebSocket event", extra={"event": event})

    async def on_send_message(self, data: Any):
        """Store the message, echo it to everyone, announce first-time senders."""
        incoming = parse_chat_message(data)
        if incoming is None:
            return

        message = ChatMessage(user=incoming.user, message=incoming.message)
        try:
            self.db_session.add(message)
            self.db_session.commit()
            self.db_session.refresh(message)
            count_statement = select(func.count()).select_from(ChatMessage).where(ChatMessage.user == incoming.user)
            user_message_count = self.db_session.exec(count_statement).one()
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error("Error saving message", extra={"user": incoming.user, "error": str(e)})
            return

        payload = ChatMessageResponse.model_validate(message).model_dump(mode="json")
        await self.hub.broadcast(NEW_MESSAGE, payload)

        if user_message_count == 1:
            await self.hub.broadcast(USER_LIST_UPDATED)

    async def on_typing_started(self, username: Any):
        await self.hub.broadcast(IS_TYPING, username, exclude=self.session_id)

    async def on_typing_stopped(self):
        await self.hub.broadcast(STOPPED_TYPING, exclude=self.session_id)

    async def on_disconnect(self):
        """The leaving user may have been typing; clear it for everyone else."""
        await self.hub.broadcast(STOPPED_TYPING, exclude=self.session_id)
        self.hub.disconnect(self.session_id)
