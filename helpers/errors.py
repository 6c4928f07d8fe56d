"""
HTTP error taxonomy shared by all routers.

Each class fixes its status code and a default message so handlers only
pass a detail when it differs from the default.
"""

from typing import Optional

from fastapi import HTTPException, status


class ApiError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Server Error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class ValidationError(ApiError):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Please enter all fields."


class Unauthenticated(ApiError):
    """Missing or invalid bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Access denied. No token provided."


class Forbidden(ApiError):
    """Authenticated, but not the owner of the resource.

    Uses 401 rather than 403 so existing clients keep working.
    """
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "User not authorized"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(ApiError):
    """Duplicate username or email."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists."


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server Error"
