"""Repository for trainers (tenants)."""

from uuid import UUID

from sqlalchemy import exists, select

from trainerdesk.db.models.trainer import Trainer

from .base import BaseRepository


class TrainerRepository(BaseRepository[Trainer, UUID]):
    """Trainer lookups, including the subdomain existence check used by allocation."""

    async def get_by_subdomain(self, subdomain: str, *, active_only: bool = True) -> Trainer | None:
        """Get a trainer by subdomain label.

        Args:
            subdomain: The label (compared lowercased)
            active_only: Ignore deactivated trainers

        Returns:
            Trainer if found, None otherwise
        """
        query = select(Trainer).where(Trainer.subdomain == subdomain.lower())
        if active_only:
            query = query.where(Trainer.is_active == True)  # noqa: E712
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, label: str) -> bool:
        """Whether any trainer, active or not, holds ``label``."""
        query = select(exists().where(Trainer.subdomain == label))
        result = await self.db.execute(query)
        return bool(result.scalar())
