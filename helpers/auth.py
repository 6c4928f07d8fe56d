import hashlib
import hmac
import secrets
from typing import Optional

from fastapi import Header

from helpers.errors import Forbidden, Unauthenticated
from helpers.tokens import AuthClaim, InvalidToken, verify
from settings import logger

PASSWORD_ITERATIONS = 260000


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Salted PBKDF2-SHA256, stored as ``<iterations>$<salt>$<hex digest>``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PASSWORD_ITERATIONS).hex()
    return f"{PASSWORD_ITERATIONS}${salt}${digest}"


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        iterations, salt, digest = hashed_password.split("$")
        iterations = int(iterations)
    except ValueError:
        return False
    candidate = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations).hex()
    return hmac.compare_digest(candidate, digest)


async def get_current_user(
    authorization: Optional[str] = Header(default=None)
) -> AuthClaim:
    """Resolve the caller's identity from the ``Authorization: Bearer`` header.

    Stateless: every request is checked on its own and nothing is stored.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise Unauthenticated("Access denied. No token provided.")

    token = authorization.split(" ", 1)[1].strip()
    try:
        return verify(token)
    except InvalidToken as e:
        logger.info("Rejected bearer token", extra={"error": str(e)})
        raise Unauthenticated("Token is not valid.")


def require_owner(claim: AuthClaim, owner_id: str) -> None:
    """Allow mutation only when the caller owns the resource."""
    if str(owner_id) != claim.user_id:
        raise Forbidden("User not authorized")
