"""
User Repository.

Data access for user accounts.
"""

from sqlalchemy import func, select

from voicenotes.backend.models.user import User
from voicenotes.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model. Emails are compared case-insensitively."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None
