"""Signed, time limited identity tokens (HS256 JWT)."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as pyjwt
from pydantic import BaseModel, ValidationError

from settings import get_settings


class InvalidToken(Exception):
    """Raised for malformed, tampered or expired tokens alike."""


class AuthClaim(BaseModel):
    """Verified identity carried by a token."""
    user_id: str
    username: str
    issued_at: datetime
    expires_at: datetime


def issue(user_id: str, username: str, issued_at: Optional[datetime] = None) -> str:
    """Sign a token for the given identity, valid for the configured window."""
    settings = get_settings()
    issued_at = issued_at or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=settings.token_ttl_minutes)

    payload = {
        "user": {"id": user_id, "username": username},
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return pyjwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify(token: str) -> AuthClaim:
    """Check signature and expiry and return the claim.

    Raises:
        InvalidToken: for any decoding, signature or expiry failure.
    """
    settings = get_settings()
    try:
        payload = pyjwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
        user = payload["user"]
        return AuthClaim(
            user_id=user["id"],
            username=user["username"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (pyjwt.PyJWTError, KeyError, TypeError, ValidationError) as e:
        raise InvalidToken(str(e)) from e
