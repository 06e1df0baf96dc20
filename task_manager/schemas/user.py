"""User schemas.

Field rules (email syntax, password strength, age) are enforced by
``UserService`` so that API and service callers get the same errors.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """User registration request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    name: str | None = Field(None, max_length=255)
    age: int = 0


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class UserUpdate(BaseModel):
    """Update the current user. Unknown fields are passed on and rejected."""

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)
    age: int | None = None


class UserResponse(BaseModel):
    """Public user information."""

    id: int
    name: str | None
    email: str
    age: int
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    user: UserResponse
    token: str
