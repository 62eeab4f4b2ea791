"""Authentication endpoints."""

from fastapi import APIRouter

from app.core.dependencies import AuthServiceDep, CurrentClaims
from app.core.exceptions import BadRequestError, UnauthorizedError
from app.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserProfile,
)
from app.schemas.base import MessageResponse

router = APIRouter()


@router.post("/register", response_model=TokenResponse)
async def register(data: RegisterRequest, auth: AuthServiceDep):
    """
    Register a new user with role "User".
    Returns access and refresh tokens.
    """
    return await auth.register(data)


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, auth: AuthServiceDep):
    """
    Authenticate a user.
    Returns access and refresh tokens.
    """
    return await auth.login(credentials.username, credentials.password)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(body: RefreshRequest, auth: AuthServiceDep):
    """
    Exchange an expired access token plus its refresh token for a new pair.
    The presented refresh token stops working immediately.
    """
    return await auth.refresh(body.token, body.refresh_token)


@router.post("/logout", response_model=MessageResponse)
async def logout(claims: CurrentClaims, auth: AuthServiceDep):
    """Invalidate the stored refresh token of the current user."""
    username = claims.get("username")
    if not username:
        raise BadRequestError("User not found")

    await auth.logout(username)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserProfile)
async def get_current_user(claims: CurrentClaims, auth: AuthServiceDep):
    """Return the authenticated user's profile."""
    username = claims.get("username")
    if not username:
        raise UnauthorizedError("Invalid token payload")
    return await auth.get_current_user(username)
