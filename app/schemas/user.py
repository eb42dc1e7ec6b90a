"""
Pydantic schemas for user registration, login and profile.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from uuid import UUID

from app.schemas.job import CamelModel


class UserRegisterRequest(CamelModel):
    """Request schema for user registration."""
    name: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(
        ...,
        min_length=6,
        max_length=72,  # bcrypt limit
    )
    last_name: Optional[str] = Field(None, min_length=1, max_length=20)
    location: Optional[str] = Field(None, min_length=1, max_length=20)


class UserLoginRequest(BaseModel):
    """Request schema for user login."""
    email: EmailStr
    password: str


class UserUpdateRequest(CamelModel):
    """Profile update; all fields are required."""
    name: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    last_name: str = Field(..., min_length=1, max_length=20)
    location: str = Field(..., min_length=1, max_length=20)


class UserResponse(CamelModel):
    """User profile response (no sensitive data)."""
    id: UUID
    email: str
    name: str
    last_name: str
    location: str


class AuthResponse(CamelModel):
    """Profile plus a freshly issued access token."""
    user: UserResponse
    token: str
