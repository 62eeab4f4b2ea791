"""Pydantic schemas for API request/response validation."""

from app.schemas.base import CamelModel, MessageResponse
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    TokenResponse,
    UserProfile,
)

__all__ = [
    "CamelModel",
    "MessageResponse",
    "RegisterRequest",
    "LoginRequest",
    "RefreshRequest",
    "TokenResponse",
    "UserProfile",
]
