from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON
from typing import List, Optional
from datetime import datetime
from .helper import id_generator, utc_now


class Note(SQLModel, table=True):
    """Video note owned by the user who created it."""
    id: str = Field(default_factory=id_generator('note', 10), primary_key=True)
    title: str
    description: str = Field(default="")
    user_id: str = Field(foreign_key="user.id", index=True)
    video_path: Optional[str] = Field(default=None)
    # Ids of users who liked the note, each at most once
    likes: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class Comment(SQLModel, table=True):
    """Comment left on a note by any authenticated user."""
    id: str = Field(default_factory=id_generator('comment', 10), primary_key=True)
    text: str
    note_id: str = Field(foreign_key="note.id", index=True)
    author_id: str = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
