"""Pydantic models for auth domain."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class User(BaseModel):
    """A dashboard operator."""

    id: UUID
    name: str
    email: EmailStr
    password_hash: str | None = Field(default=None, exclude=True, repr=False)

    model_config = {"from_attributes": True}


class Credentials(BaseModel):
    """Submitted sign-in form."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class Session(BaseModel):
    """An active user session."""

    token: str = Field(..., description="Session token (opaque string)")
    user_id: UUID
    created_at: datetime
    expires_at: datetime
    last_activity_at: datetime
