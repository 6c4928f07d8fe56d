from sqlmodel import SQLModel, Field
from datetime import datetime
from .helper import id_generator, utc_now


class ChatMessage(SQLModel, table=True):
    """Message posted to the public chat room.

    ``user`` is the free text label typed by the sender, not a User reference.
    """
    id: str = Field(default_factory=id_generator('message', 10), primary_key=True)
    user: str = Field(index=True)
    message: str
    timestamp: datetime = Field(default_factory=utc_now, index=True)
