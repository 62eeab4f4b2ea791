"""Authentication request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """Schema for user registration."""
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=100)
    full_name: Optional[str] = Field(None, max_length=200)


class LoginRequest(CamelModel):
    """Schema for user login."""
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RefreshRequest(CamelModel):
    """Expired access token plus the refresh token issued with it."""
    token: str = Field(min_length=1)
    refresh_token: str = Field(min_length=1)


class TokenResponse(CamelModel):
    """Access + refresh token pair and the profile it was issued for."""
    token: str
    refresh_token: str
    username: str
    email: str
    role: str
    expires_at: datetime


class UserProfile(CamelModel):
    """Read-only projection of the authenticated user."""
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    role: str
    created_at: datetime
