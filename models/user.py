from sqlmodel import SQLModel, Field
from datetime import datetime
from .helper import id_generator, utc_now


class User(SQLModel, table=True):
    """Registered account that owns notes and writes comments."""
    id: str = Field(default_factory=id_generator('user', 10), primary_key=True)
    username: str = Field(unique=True, index=True)
    email: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
