"""Password hashing and clock helpers."""

from datetime import datetime, timezone
from typing import Optional

from passlib.context import CryptContext


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from the database."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class PasswordHasher:
    """
    bcrypt hashing with a configurable cost factor.

    New hashes use bcrypt_sha256 so the whole password counts, not just its
    first 72 bytes. Plain bcrypt hashes still verify.
    """

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt"],
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
            bcrypt__rounds=rounds,
        )
        # Verified against when the user does not exist so both
        # login failure paths cost one bcrypt check.
        self.dummy_hash = self._context.hash("this_is_a_fake_user_that_never_exists")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._context.verify(password, hashed)
