import re

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from database import get_session
from models.user import User
from .schemas.auth import RegisterRequest, LoginRequest, LoginResponse, LoginUserResponse, MessageResponse
from helpers.auth import hash_password, verify_password
from helpers.errors import Conflict, ValidationError
from helpers.tokens import issue
from settings import logger

router = APIRouter(prefix="/auth", tags=["authentication"])

EMAIL_PATTERN = re.compile(r".+@.+\..+")
MIN_PASSWORD_LENGTH = 6


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    db_session: Session = Depends(get_session)
) -> MessageResponse:
    """Register a new account."""

    username = (register_data.username or "").strip()
    email = (register_data.email or "").strip().lower()
    password = register_data.password or ""

    if not username or not email or not password:
        raise ValidationError("Please enter all fields.")

    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("Please fill a valid email address")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    # Check for existing user, email first
    if db_session.exec(select(User).where(User.email == email)).first():
        raise Conflict("User with this email already exists.")

    if db_session.exec(select(User).where(User.username == username)).first():
        raise Conflict("Username is already taken.")

    new_user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password)
    )

    db_session.add(new_user)
    try:
        db_session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        db_session.rollback()
        raise Conflict("User with this email or username already exists.")

    logger.info("User registered", extra={"user_id": new_user.id, "username": username})
    return MessageResponse(message="User registered successfully!")


@router.post("/login")
async def login(
    login_data: LoginRequest,
    db_session: Session = Depends(get_session)
) -> LoginResponse:
    """Exchange email and password for a one hour bearer token."""

    email = (login_data.email or "").strip().lower()
    password = login_data.password or ""

    if not email or not password:
        raise ValidationError("Please enter all fields.")

    user = db_session.exec(select(User).where(User.email == email)).first()

    # Don't reveal whether email or password was wrong
    if not user or not verify_password(password, user.hashed_password):
        logger.info("Login failed", extra={"email": email})
        raise ValidationError("Invalid credentials.")

    token = issue(user.id, user.username)

    return LoginResponse(
        token=token,
        user=LoginUserResponse.model_validate(user)
    )
