from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlmodel import Session, select, desc
from database import get_session
from models.user import User
from models.notes import Note, Comment
from models.helper import utc_now
from helpers.auth import get_current_user, require_owner
from helpers.errors import NotFound, ValidationError
from helpers.media import save_upload, remove_media
from helpers.tokens import AuthClaim
from .schemas.notes import NoteResponse, CreateCommentRequest, CommentResponse, CommentAuthorResponse
from .schemas.auth import MessageResponse
from settings import get_settings, logger

router = APIRouter(prefix="/notes", tags=["notes"])


def _get_note_or_404(note_id: str, db_session: Session) -> Note:
    note = db_session.exec(select(Note).where(Note.id == note_id)).first()
    if not note:
        raise NotFound("Note not found")
    return note


def _has_upload(video_file: Optional[UploadFile]) -> bool:
    return video_file is not None and bool(video_file.filename)


def _comment_response(comment: Comment, author: User) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        text=comment.text,
        note_id=comment.note_id,
        author=CommentAuthorResponse.model_validate(author),
        created_at=comment.created_at
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    video_file: Optional[UploadFile] = File(default=None, alias="videoFile"),
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> NoteResponse:
    """Create a note owned by the caller."""
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")

    if _has_upload(video_file):
        video_path = await save_upload(video_file)
    else:
        video_path = get_settings().placeholder_video_url

    note = Note(
        title=title,
        description=(description or "").strip(),
        user_id=claim.user_id,
        video_path=video_path
    )

    db_session.add(note)
    db_session.commit()
    db_session.refresh(note)

    logger.info("Note created", extra={"note_id": note.id, "user_id": claim.user_id})
    return NoteResponse.model_validate(note)


@router.get("")
async def list_notes(
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> List[NoteResponse]:
    """List the caller's notes, newest first."""
    statement = select(Note).where(Note.user_id == claim.user_id).order_by(desc(Note.created_at))
    notes = db_session.exec(statement).all()

    return [NoteResponse.model_validate(note) for note in notes]


@router.put("/{note_id}")
async def update_note(
    note_id: str,
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    video_file: Optional[UploadFile] = File(default=None, alias="videoFile"),
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> NoteResponse:
    """Update title, description and/or video of an owned note."""
    note = _get_note_or_404(note_id, db_session)
    require_owner(claim, note.user_id)

    # Only non-blank values replace the stored ones
    title = (title or "").strip()
    description = (description or "").strip()
    if title:
        note.title = title
    if description:
        note.description = description

    if _has_upload(video_file):
        previous_path = note.video_path
        note.video_path = await save_upload(video_file)
        # Result ignored: a stale file must not fail the update
        remove_media(previous_path)

    note.updated_at = utc_now()
    db_session.add(note)
    db_session.commit()
    db_session.refresh(note)

    logger.info("Note updated", extra={"note_id": note.id, "user_id": claim.user_id})
    return NoteResponse.model_validate(note)


@router.delete("/{note_id}")
async def delete_note(
    note_id: str,
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> MessageResponse:
    """Delete an owned note together with its video and comments."""
    note = _get_note_or_404(note_id, db_session)
    require_owner(claim, note.user_id)

    # Result ignored: a stale file must not block the deletion
    remove_media(note.video_path)

    # Remove comments first so none outlive the note
    comments = db_session.exec(select(Comment).where(Comment.note_id == note_id)).all()
    for comment in comments:
        db_session.delete(comment)
    db_session.commit()

    db_session.delete(note)
    db_session.commit()

    logger.info("Note deleted", extra={
        "note_id": note_id,
        "user_id": claim.user_id,
        "deleted_comments": len(comments)
    })
    return MessageResponse(message="Note deleted successfully")


@router.put("/{note_id}/like")
async def toggle_like(
    note_id: str,
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> NoteResponse:
    """Like the note, or remove the caller's like if already present."""
    note = _get_note_or_404(note_id, db_session)

    likes = [user_id for user_id in (note.likes or []) if user_id != claim.user_id]
    if len(likes) == len(note.likes or []):
        likes.append(claim.user_id)

    # Assign a new list so the JSON column is flagged as changed
    note.likes = likes
    db_session.add(note)
    db_session.commit()
    db_session.refresh(note)

    return NoteResponse.model_validate(note)


@router.post("/{note_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(
    note_id: str,
    comment_data: CreateCommentRequest,
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> CommentResponse:
    """Comment on any note."""
    text = (comment_data.text or "").strip()
    if not text:
        raise ValidationError("Comment text is required")

    _get_note_or_404(note_id, db_session)

    author = db_session.exec(select(User).where(User.id == claim.user_id)).first()
    if not author:
        raise NotFound("User not found.")

    comment = Comment(
        text=text,
        note_id=note_id,
        author_id=author.id
    )

    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)

    return _comment_response(comment, author)


@router.get("/{note_id}/comments")
async def list_comments(
    note_id: str,
    claim: AuthClaim = Depends(get_current_user),
    db_session: Session = Depends(get_session)
) -> List[CommentResponse]:
    """Comments of a note, newest first, with author usernames."""
    statement = (
        select(Comment, User)
        .join(User, Comment.author_id == User.id)
        .where(Comment.note_id == note_id)
        .order_by(desc(Comment.created_at))
    )
    results = db_session.exec(statement).all()

    return [_comment_response(comment, author) for comment, author in results]
