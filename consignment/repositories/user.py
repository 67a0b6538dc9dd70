"""User repository."""

from __future__ import annotations

from sqlalchemy import func

from consignment.domain.user import User
from consignment.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        rows = await self.list(func.lower(User.email) == email.strip().lower(), limit=1)
        return rows[0] if rows else None
