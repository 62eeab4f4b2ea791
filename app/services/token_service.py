"""Signed access tokens and opaque refresh tokens.

Pure cryptography: nothing here touches the database. Validation never
raises; a malformed, tampered or foreign token yields ``None``.
"""

import base64
import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from app.core.config import Settings
from app.core.exceptions import ConfigurationError
from app.core.security import utcnow
from app.models.user import User

logger = logging.getLogger(__name__)

SIGNING_ALGORITHM = "HS256"
MIN_KEY_BYTES = 32
REFRESH_TOKEN_BYTES = 64


class TokenService:
    """Issue and validate JWT access tokens; mint refresh tokens."""

    def __init__(self, settings: Settings):
        key = settings.jwt_secret_key
        if not key:
            raise ConfigurationError("JWT signing key not configured (JWT_SECRET_KEY)")
        if len(key.encode("utf-8")) < MIN_KEY_BYTES:
            raise ConfigurationError(
                f"JWT signing key must be at least {MIN_KEY_BYTES} bytes for {SIGNING_ALGORITHM}"
            )
        if settings.jwt_algorithm.upper() != SIGNING_ALGORITHM:
            raise ConfigurationError(f"Unsupported JWT algorithm: {settings.jwt_algorithm}")

        self._key = key
        self.issuer = settings.jwt_issuer
        self.audience = settings.jwt_audience
        self.access_token_lifetime = timedelta(minutes=settings.access_token_expire_minutes)

    # ─── Issuance ────────────────────────────────

    def access_token_expires_at(self, now: Optional[datetime] = None) -> datetime:
        return (now or utcnow()) + self.access_token_lifetime

    def issue_access_token(self, user: User, now: Optional[datetime] = None) -> str:
        now = now or utcnow()
        claims = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "role": user.role,
            "full_name": user.full_name or "",
            "jti": str(uuid.uuid4()),
            "iat": now,
            "exp": self.access_token_expires_at(now),
            "iss": self.issuer,
            "aud": self.audience,
        }
        return jwt.encode(claims, self._key, algorithm=SIGNING_ALGORITHM)

    @staticmethod
    def issue_refresh_token() -> str:
        """64 bytes from the OS CSPRNG, base64-encoded. Caller binds it to a user."""
        return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode("ascii")

    # ─── Validation ──────────────────────────────

    def validate_access_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Full validation, expiry included. Used for bearer-protected routes."""
        return self._decode(token, verify_exp=True)

    def validate_expired_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Validate signature, issuer, audience and algorithm but not expiry.

        Only the refresh flow uses this: the access token presented there is
        expected to have lapsed already.
        """
        return self._decode(token, verify_exp=False)

    def _decode(self, token: str, verify_exp: bool) -> Optional[Dict[str, Any]]:
        try:
            header = jwt.get_unverified_header(token)
            if str(header.get("alg", "")).upper() != SIGNING_ALGORITHM:
                logger.warning("Rejected token signed with alg=%s", header.get("alg"))
                return None

            return jwt.decode(
                token,
                self._key,
                algorithms=[SIGNING_ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                options={
                    "verify_exp": verify_exp,
                    "require_aud": True,
                    "require_iss": True,
                    "leeway": 0,
                },
            )
        except (JWTError, ValueError, TypeError, AttributeError):
            return None
