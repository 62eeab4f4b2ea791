"""Authentication flow: register, login, refresh (with rotation), logout."""

import logging
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.exc import IntegrityError

from app.core.config import Settings
from app.core.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
)
from app.core.security import PasswordHasher, as_utc, utcnow
from app.models.user import User, UserRole
from app.repositories.user_repository import UserRepository
from app.schemas.auth import RegisterRequest, TokenResponse, UserProfile
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """
    Orchestrates the credential lifecycle on top of the token service and
    the user repository.

    Each user holds at most one refresh token. Every successful login or
    refresh overwrites it, so a refresh token is usable exactly once; a
    replayed or superseded value no longer matches and is rejected.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        passwords: PasswordHasher,
        settings: Settings,
        now: Callable[[], datetime] = utcnow,
    ):
        self.users = users
        self.tokens = tokens
        self.passwords = passwords
        self.refresh_token_lifetime = timedelta(days=settings.refresh_token_expire_days)
        self.now = now

    # ─── Registration ───────────────────────────

    async def register(self, data: RegisterRequest) -> TokenResponse:
        if await self.users.exists(User.username == data.username):
            raise ConflictError("Username already exists")
        if await self.users.exists(User.email == data.email):
            raise ConflictError("Email already registered")

        user = User(
            username=data.username,
            email=data.email,
            password_hash=self.passwords.hash(data.password),
            full_name=data.full_name,
            role=UserRole.USER.value,
            is_active=True,
        )
        try:
            await self.users.add(user)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same name/email.
            raise ConflictError("Username or email already exists")

        logger.info(f"Registered user: {user.username}")
        return await self._issue_tokens(user)

    # ─── Login ──────────────────────────────────

    async def login(self, username: str, password: str) -> TokenResponse:
        user = await self.users.get_by_username(username)
        hashed = user.password_hash if user else self.passwords.dummy_hash
        password_ok = self.passwords.verify(password, hashed)

        if not user or not password_ok:
            logger.warning("Failed login attempt")
            raise UnauthorizedError("Invalid credentials")

        if not user.is_active:
            logger.warning(f"Login attempt for deactivated account: {user.username}")
            raise UnauthorizedError("Account is deactivated")

        logger.info(f"User logged in: {user.username}")
        return await self._issue_tokens(user)

    # ─── Refresh (rotation) ─────────────────────

    async def refresh(self, expired_access_token: str, refresh_token: str) -> TokenResponse:
        claims = self.tokens.validate_expired_token(expired_access_token)
        if not claims:
            raise BadRequestError("Invalid token")

        username = claims.get("username")
        if not username:
            raise BadRequestError("Invalid token")

        user = await self.users.get_by_username(username)
        if user is None or user.refresh_token != refresh_token:
            logger.warning("Rejected refresh attempt with unknown or superseded refresh token")
            raise BadRequestError("Invalid refresh token")

        if not user.is_active:
            logger.warning(f"Refresh attempt for deactivated account: {user.username}")
            raise BadRequestError("Account is deactivated")

        expiry = as_utc(user.refresh_token_expiry_time)
        if expiry is None or expiry <= self.now():
            raise BadRequestError("Refresh token expired")

        logger.info(f"Rotated refresh token for: {user.username}")
        return await self._issue_tokens(user)

    # ─── Logout ─────────────────────────────────

    async def logout(self, username: str) -> None:
        """Drop the stored refresh token. Idempotent."""
        user = await self.users.get_by_username(username)
        if user is None or user.refresh_token is None:
            return

        user.refresh_token = None
        user.refresh_token_expiry_time = None
        await self.users.update(user)
        logger.info(f"User logged out: {user.username}")

    # ─── Current user ───────────────────────────

    async def get_current_user(self, username: str) -> UserProfile:
        user = await self.users.get_by_username(username)
        if user is None:
            raise NotFoundError("User not found")
        return UserProfile.model_validate(user)

    # ─── Helpers ────────────────────────────────

    async def _issue_tokens(self, user: User) -> TokenResponse:
        """Mint a fresh pair and overwrite the stored refresh token."""
        now = self.now()
        access_token = self.tokens.issue_access_token(user, now=now)
        refresh_token = self.tokens.issue_refresh_token()

        user.refresh_token = refresh_token
        user.refresh_token_expiry_time = now + self.refresh_token_lifetime
        await self.users.update(user)

        return TokenResponse(
            token=access_token,
            refresh_token=refresh_token,
            username=user.username,
            email=user.email,
            role=user.role,
            expires_at=self.tokens.access_token_expires_at(now),
        )
