from pydantic import BaseModel, Field
from datetime import datetime


class ChatMessageResponse(BaseModel):
    """Persisted chat room message."""
    id: str = Field(..., description="Message ID")
    user: str = Field(..., description="Sender label")
    message: str = Field(..., description="Message text")
    timestamp: datetime = Field(..., description="When the message was stored")

    model_config = {"from_attributes": True}


class IncomingChatMessage(BaseModel):
    """Payload of a ``sendMessage`` event."""
    user: str = Field(..., min_length=1, description="Sender label")
    message: str = Field(..., description="Message text")


class WebSocketStatsResponse(BaseModel):
    active_connections: int
    status: str
