"""User lookups used by the authentication flow."""

from typing import Optional

from app.models.user import User
from app.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self.first_or_default(User.username == username)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.first_or_default(User.email == email)
