from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from .notes import NoteResponse


class UserSummaryResponse(BaseModel):
    """Search hit."""
    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")

    model_config = {"from_attributes": True}


class PublicUserResponse(BaseModel):
    """Public profile fields (no email, no password)."""
    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    created_at: datetime = Field(..., description="Registration timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}


class PublicProfileResponse(BaseModel):
    user: PublicUserResponse
    notes: List[NoteResponse] = Field(default_factory=list, description="Notes, newest first")
