from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlmodel import Session, select, desc
from database import get_session
from models.user import User
from models.notes import Note
from helpers.auth import get_current_user
from helpers.errors import NotFound
from helpers.tokens import AuthClaim
from .schemas.users import UserSummaryResponse, PublicUserResponse, PublicProfileResponse
from .schemas.notes import NoteResponse

router = APIRouter(prefix="/users", tags=["users"])

SEARCH_LIMIT = 10


@router.get("/search")
async def search_users(
    q: Optional[str] = Query(default=None, description="Part of a username, case insensitive"),
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> List[UserSummaryResponse]:
    """Find other users by username."""
    if not q:
        return []

    statement = (
        select(User)
        .where(func.lower(User.username).contains(q.lower(), autoescape=True))
        .where(User.id != claim.user_id)
        .order_by(User.username)
        .limit(SEARCH_LIMIT)
    )
    users = db_session.exec(statement).all()

    return [UserSummaryResponse.model_validate(user) for user in users]


@router.get("/profile/{username}")
async def get_public_profile(
    username: str,
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> PublicProfileResponse:
    """Public profile and all notes of a user."""
    user = db_session.exec(select(User).where(User.username == username)).first()

    if not user:
        raise NotFound("User not found")

    notes_statement = select(Note).where(Note.user_id == user.id).order_by(desc(Note.created_at))
    notes = db_session.exec(notes_statement).all()

    return PublicProfileResponse(
        user=PublicUserResponse.model_validate(user),
        notes=[NoteResponse.model_validate(note) for note in notes]
    )
