from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class CreateCommentRequest(BaseModel):
    """Schema for adding a comment to a note."""
    text: Optional[str] = Field(default=None, description="Comment text")


# Response Schemas
class NoteResponse(BaseModel):
    """Schema for note responses."""
    id: str = Field(..., description="Note ID")
    title: str = Field(..., description="Note title")
    description: str = Field(default="", description="Note description")
    user_id: str = Field(..., description="Owner user ID")
    video_path: Optional[str] = Field(default=None, description="Relative path of uploaded video or external URL")
    likes: List[str] = Field(default_factory=list, description="IDs of users who liked the note")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}


class CommentAuthorResponse(BaseModel):
    id: str = Field(..., description="Author user ID")
    username: str = Field(..., description="Author username")

    model_config = {"from_attributes": True}


class CommentResponse(BaseModel):
    """Comment joined with its author's username."""
    id: str = Field(..., description="Comment ID")
    text: str = Field(..., description="Comment text")
    note_id: str = Field(..., description="Commented note ID")
    author: CommentAuthorResponse = Field(..., description="Comment author")
    created_at: datetime = Field(..., description="Creation timestamp")
