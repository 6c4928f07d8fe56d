from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from database import get_session
from models.user import User
from helpers.auth import get_current_user
from helpers.errors import NotFound
from helpers.tokens import AuthClaim
from .schemas.auth import ProfileResponse

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> ProfileResponse:
    """Get the caller's own profile."""
    user = db_session.exec(select(User).where(User.id == claim.user_id)).first()

    if not user:
        raise NotFound("User not found.")

    return ProfileResponse.model_validate(user)
