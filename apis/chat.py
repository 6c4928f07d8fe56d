from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from database import get_session
from models.chat import ChatMessage
from helpers.auth import get_current_user
from helpers.tokens import AuthClaim
from .schemas.chat import ChatMessageResponse

router = APIRouter(tags=["chat"])


@router.get("/messages")
async def list_messages(
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> List[ChatMessageResponse]:
    """Full chat history, oldest first."""
    statement = select(ChatMessage).order_by(ChatMessage.timestamp)
    messages = db_session.exec(statement).all()

    return [ChatMessageResponse.model_validate(message) for message in messages]


@router.get("/users")
async def list_chat_users(
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> List[str]:
    """Distinct sender labels seen in the chat history."""
    statement = select(ChatMessage.user).distinct().order_by(ChatMessage.user)
    return list(db_session.exec(statement).all())
