"""
Tests for the authentication flow: register, login, refresh rotation, logout.

Run with: pytest tests/test_auth_service.py -v
"""

import os
from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from jose import jwt
from passlib.hash import bcrypt as plain_bcrypt

from app.core.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
)
from app.core.security import as_utc
from app.repositories.user_repository import UserRepository
from app.schemas.auth import RegisterRequest
from app.services.auth_service import AuthService


@pytest.fixture
def users(db):
    return UserRepository(db)


@pytest.fixture
def auth_service(users, token_service, password_hasher, settings, clock):
    return AuthService(users, token_service, password_hasher, settings, now=clock)


def _registration(**overrides) -> RegisterRequest:
    fields = dict(
        username="jdoe",
        email="jdoe@company.com",
        password="Secret123",
        full_name="John Doe",
    )
    fields.update(overrides)
    return RegisterRequest(**fields)


# ============================================
# Registration
# ============================================

class TestRegister:
    """Tests for AuthService.register."""

    @pytest.mark.asyncio
    async def test_register_returns_token_pair(self, auth_service, token_service):
        result = await auth_service.register(_registration())

        assert result.username == "jdoe"
        assert result.email == "jdoe@company.com"
        assert result.role == "User"
        assert result.refresh_token

        claims = token_service.validate_access_token(result.token)
        assert claims["username"] == "jdoe"
        assert claims["role"] == "User"

    @pytest.mark.asyncio
    async def test_register_stores_hash_and_refresh_token(self, auth_service, users, clock):
        result = await auth_service.register(_registration())

        user = await users.get_by_username("jdoe")
        assert user.password_hash != "Secret123"
        assert auth_service.passwords.verify("Secret123", user.password_hash)
        assert user.refresh_token == result.refresh_token
        assert as_utc(user.refresh_token_expiry_time) == clock() + timedelta(days=7)
        assert user.is_active is True

    @pytest.mark.asyncio
    async def test_expires_at_matches_access_lifetime(self, auth_service, clock):
        result = await auth_service.register(_registration())
        assert result.expires_at == clock() + timedelta(minutes=60)

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, auth_service):
        await auth_service.register(_registration())

        with pytest.raises(ConflictError) as exc_info:
            await auth_service.register(_registration(email="other@company.com"))

        assert exc_info.value.message == "Username already exists"

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, auth_service):
        await auth_service.register(_registration())

        with pytest.raises(ConflictError) as exc_info:
            await auth_service.register(_registration(username="someone"))

        assert exc_info.value.message == "Email already registered"

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_maps_to_conflict(self, auth_service, users):
        """A duplicate that slips past the existence checks hits the unique index."""
        await auth_service.register(_registration())

        with patch.object(users, "exists", AsyncMock(return_value=False)):
            with pytest.raises(ConflictError) as exc_info:
                await auth_service.register(_registration(email="other@company.com"))

        assert exc_info.value.message == "Username or email already exists"


# ============================================
# Login
# ============================================

class TestLogin:
    """Tests for AuthService.login."""

    @pytest.mark.asyncio
    async def test_login_after_register(self, auth_service):
        registered = await auth_service.register(_registration())

        result = await auth_service.login("jdoe", "Secret123")

        assert result.username == registered.username
        assert result.email == registered.email
        assert result.role == registered.role

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth_service):
        await auth_service.register(_registration())

        with pytest.raises(UnauthorizedError) as exc_info:
            await auth_service.login("jdoe", "wrong-password")

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_unknown_user_has_same_message(self, auth_service):
        with pytest.raises(UnauthorizedError) as exc_info:
            await auth_service.login("ghost", "whatever")

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_unknown_user_still_checks_a_hash(self, auth_service):
        """Both failure paths run one bcrypt verification."""
        passwords = auth_service.passwords
        with patch.object(passwords, "verify", wraps=passwords.verify) as verify:
            with pytest.raises(UnauthorizedError):
                await auth_service.login("ghost", "whatever")

        verify.assert_called_once_with("whatever", passwords.dummy_hash)

    @pytest.mark.asyncio
    async def test_deactivated_account(self, auth_service, users):
        await auth_service.register(_registration())
        user = await users.get_by_username("jdoe")
        await users.deactivate(user)

        with pytest.raises(UnauthorizedError) as exc_info:
            await auth_service.login("jdoe", "Secret123")

        assert exc_info.value.message == "Account is deactivated"

    @pytest.mark.asyncio
    async def test_long_password_checked_past_72_bytes(self, auth_service):
        await auth_service.register(_registration(password="P" * 80))

        with pytest.raises(UnauthorizedError) as exc_info:
            await auth_service.login("jdoe", "P" * 72 + "x" * 8)

        assert exc_info.value.message == "Invalid credentials"
        result = await auth_service.login("jdoe", "P" * 80)
        assert result.username == "jdoe"

    @pytest.mark.asyncio
    async def test_login_supersedes_previous_refresh_token(self, auth_service):
        first = await auth_service.register(_registration())
        second = await auth_service.login("jdoe", "Secret123")

        assert first.refresh_token != second.refresh_token
        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.refresh(first.token, first.refresh_token)

        assert exc_info.value.message == "Invalid refresh token"


# ============================================
# Refresh
# ============================================

class TestRefresh:
    """Tests for refresh token rotation."""

    @pytest.mark.asyncio
    async def test_refresh_rotates_token(self, auth_service, users):
        issued = await auth_service.register(_registration())

        rotated = await auth_service.refresh(issued.token, issued.refresh_token)

        assert rotated.refresh_token != issued.refresh_token
        assert rotated.username == "jdoe"
        user = await users.get_by_username("jdoe")
        assert user.refresh_token == rotated.refresh_token

    @pytest.mark.asyncio
    async def test_replayed_refresh_token_rejected(self, auth_service):
        issued = await auth_service.register(_registration())
        await auth_service.refresh(issued.token, issued.refresh_token)

        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.refresh(issued.token, issued.refresh_token)

        assert exc_info.value.message == "Invalid refresh token"

    @pytest.mark.asyncio
    async def test_rotated_token_is_usable(self, auth_service):
        issued = await auth_service.register(_registration())
        rotated = await auth_service.refresh(issued.token, issued.refresh_token)

        again = await auth_service.refresh(rotated.token, rotated.refresh_token)

        assert again.refresh_token not in (issued.refresh_token, rotated.refresh_token)

    @pytest.mark.asyncio
    async def test_expired_access_token_is_accepted(self, auth_service, clock):
        """Access token lapsed after an hour; refresh token still valid."""
        issued = await auth_service.register(_registration())
        clock.advance(hours=3)

        rotated = await auth_service.refresh(issued.token, issued.refresh_token)

        assert rotated.expires_at == clock() + timedelta(minutes=60)

    @pytest.mark.asyncio
    async def test_refresh_token_expires_after_seven_days(self, auth_service):
        issued = await auth_service.register(_registration())
        auth_service.now.advance(days=7, seconds=1)

        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.refresh(issued.token, issued.refresh_token)

        assert exc_info.value.message == "Refresh token expired"

    @pytest.mark.asyncio
    async def test_refresh_token_valid_just_before_expiry(self, auth_service, clock):
        issued = await auth_service.register(_registration())
        clock.advance(days=6, hours=23)

        rotated = await auth_service.refresh(issued.token, issued.refresh_token)
        assert rotated.refresh_token != issued.refresh_token

    @pytest.mark.asyncio
    async def test_malformed_access_token(self, auth_service):
        issued = await auth_service.register(_registration())

        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.refresh("garbage", issued.refresh_token)

        assert exc_info.value.message == "Invalid token"

    @pytest.mark.asyncio
    async def test_token_without_username(self, auth_service, token_service, clock):
        issued = await auth_service.register(_registration())
        now = clock()
        token = jwt.encode(
            {
                "sub": "1",
                "iat": now,
                "exp": now + timedelta(minutes=5),
                "iss": token_service.issuer,
                "aud": token_service.audience,
            },
            os.environ["JWT_SECRET_KEY"],
            algorithm="HS256",
        )

        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.refresh(token, issued.refresh_token)

        assert exc_info.value.message == "Invalid token"

    @pytest.mark.asyncio
    async def test_deactivated_account_cannot_refresh(self, auth_service, users):
        issued = await auth_service.register(_registration())
        await users.deactivate(await users.get_by_username("jdoe"))

        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.refresh(issued.token, issued.refresh_token)

        assert exc_info.value.message == "Account is deactivated"

    @pytest.mark.asyncio
    async def test_refresh_token_of_another_user(self, auth_service):
        jdoe = await auth_service.register(_registration())
        other = await auth_service.register(
            _registration(username="asmith", email="asmith@company.com")
        )

        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.refresh(jdoe.token, other.refresh_token)

        assert exc_info.value.message == "Invalid refresh token"


# ============================================
# Logout / current user
# ============================================

class TestLogout:
    """Tests for AuthService.logout."""

    @pytest.mark.asyncio
    async def test_logout_revokes_refresh_token(self, auth_service, users):
        issued = await auth_service.register(_registration())

        await auth_service.logout("jdoe")

        user = await users.get_by_username("jdoe")
        assert user.refresh_token is None
        assert user.refresh_token_expiry_time is None
        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.refresh(issued.token, issued.refresh_token)
        assert exc_info.value.message == "Invalid refresh token"

    @pytest.mark.asyncio
    async def test_logout_is_idempotent(self, auth_service):
        await auth_service.register(_registration())

        await auth_service.logout("jdoe")
        await auth_service.logout("jdoe")
        await auth_service.logout("nobody")


class TestCurrentUser:
    """Tests for AuthService.get_current_user."""

    @pytest.mark.asyncio
    async def test_profile(self, auth_service):
        await auth_service.register(_registration())

        profile = await auth_service.get_current_user("jdoe")

        assert profile.username == "jdoe"
        assert profile.full_name == "John Doe"
        assert profile.role == "User"
        assert profile.created_at is not None

    @pytest.mark.asyncio
    async def test_unknown_user(self, auth_service):
        with pytest.raises(NotFoundError) as exc_info:
            await auth_service.get_current_user("ghost")

        assert exc_info.value.message == "User not found"


# ============================================
# Password hashing
# ============================================

class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_hash_is_salted(self, password_hasher):
        first = password_hasher.hash("Secret123")
        second = password_hasher.hash("Secret123")

        assert first != second
        assert password_hasher.verify("Secret123", first)
        assert password_hasher.verify("Secret123", second)

    def test_wrong_password_fails(self, password_hasher):
        hashed = password_hasher.hash("Secret123")
        assert password_hasher.verify("secret123", hashed) is False

    def test_dummy_hash_rejects_everything(self, password_hasher):
        assert password_hasher.verify("", password_hasher.dummy_hash) is False
        assert password_hasher.verify("Secret123", password_hasher.dummy_hash) is False

    def test_suffix_beyond_72_bytes_matters(self, password_hasher):
        hashed = password_hasher.hash("a" * 72 + "correct-suffix")

        assert password_hasher.verify("a" * 72 + "WRONG", hashed) is False
        assert password_hasher.verify("a" * 72 + "correct-suffix", hashed) is True

    def test_new_hashes_use_bcrypt_sha256(self, password_hasher):
        assert password_hasher.hash("Secret123").startswith("$bcrypt-sha256$")

    def test_plain_bcrypt_hash_still_verifies(self, password_hasher):
        stored = plain_bcrypt.using(rounds=4).hash("Secret123")

        assert password_hasher.verify("Secret123", stored) is True
        assert password_hasher.verify("Secret124", stored) is False
