from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class RegisterRequest(BaseModel):
    """Schema for account registration. Presence is checked by the handler."""
    username: Optional[str] = Field(default=None, description="Unique username")
    email: Optional[str] = Field(default=None, description="Unique email address")
    password: Optional[str] = Field(default=None, description="Plain text password (min 6 characters)")


class LoginRequest(BaseModel):
    """Schema for user login."""
    email: Optional[str] = Field(default=None, description="Account email")
    password: Optional[str] = Field(default=None, description="Plain text password")


# Response Schemas
class LoginUserResponse(BaseModel):
    """User information returned alongside a fresh token."""
    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="User email address")

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    """Schema for login response."""
    token: str = Field(..., description="Signed JWT access token, valid for one hour")
    user: LoginUserResponse = Field(..., description="Authenticated user information")


class ProfileResponse(BaseModel):
    """Own profile (everything except the password hash)."""
    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="User email address")
    created_at: datetime = Field(..., description="Registration timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Schema for simple message responses."""
    message: str = Field(..., description="Response message")
