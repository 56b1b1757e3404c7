"""Repository for dashboard users."""

from uuid import UUID

from sqlalchemy import func, select

from trainerdesk.db.models.user import User

from .base import BaseRepository


class UserRepository(BaseRepository[User, UUID]):
    """User lookups by email."""

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email, case-insensitively."""
        query = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None
