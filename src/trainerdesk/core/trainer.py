"""Trainer profile reads and updates."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from trainerdesk.core.auth import SessionUser
from trainerdesk.core.exceptions import TrainerAccessDeniedError, TrainerNotFoundError
from trainerdesk.core.logging import get_logger
from trainerdesk.db.models.trainer import Trainer
from trainerdesk.db.models.user import User
from trainerdesk.db.repositories.trainer import TrainerRepository
from trainerdesk.db.repositories.user import UserRepository

logger = get_logger(__name__)


class TrainerService:
    """Profile operations for the signed-in user's own trainer."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.trainers = TrainerRepository(db)
        self.users = UserRepository(db)

    def assert_owner(self, session_user: SessionUser, trainer_id: UUID) -> None:
        """Users may only touch their own trainer.

        Raises:
            TrainerAccessDeniedError: If ``trainer_id`` is not the user's trainer
        """
        if session_user.trainer_id != trainer_id:
            raise TrainerAccessDeniedError(trainer_id, "trainer profile")

    async def get_trainer_or_raise(self, trainer_id: UUID) -> Trainer:
        """Get a trainer by ID.

        Raises:
            TrainerNotFoundError: If the trainer does not exist
        """
        trainer = await self.trainers.get(trainer_id)
        if trainer is None:
            raise TrainerNotFoundError(trainer_id)
        return trainer

    async def get_public_page(self, subdomain: str) -> Trainer:
        """Get the active trainer behind a subdomain.

        Raises:
            TrainerNotFoundError: If no active trainer holds the label
        """
        trainer = await self.trainers.get_by_subdomain(subdomain)
        if trainer is None:
            raise TrainerNotFoundError(subdomain)
        return trainer

    async def get_profile(
        self, session_user: SessionUser, trainer_id: UUID
    ) -> tuple[Trainer, User | None]:
        """Get a trainer and the signed-in user's record."""
        self.assert_owner(session_user, trainer_id)
        trainer = await self.get_trainer_or_raise(trainer_id)
        user = await self.users.get(session_user.user_id)
        return trainer, user

    async def update_profile(
        self,
        session_user: SessionUser,
        trainer_id: UUID,
        *,
        name: str,
        business_name: str,
        timezone: str,
        bio: str | None = None,
        phone: str | None = None,
        profile_photo: str | None = None,
    ) -> Trainer:
        """Update profile settings.

        Empty optional values are stored as NULL. The subdomain is left
        untouched even when the business name changes. The caller commits.

        Raises:
            TrainerAccessDeniedError: If ``trainer_id`` is not the user's trainer
            TrainerNotFoundError: If the trainer does not exist
        """
        self.assert_owner(session_user, trainer_id)
        trainer = await self.get_trainer_or_raise(trainer_id)

        trainer = await self.trainers.update(
            trainer,
            {
                "business_name": business_name,
                "bio": bio or None,
                "phone": phone or None,
                "timezone": timezone,
                "profile_photo": profile_photo or None,
            },
        )

        # The token's name is stale after an earlier rename
        user = await self.users.get(session_user.user_id)
        if user is not None and user.name != name:
            await self.users.update(user, {"name": name})

        logger.info("trainer_profile_updated", trainer_id=str(trainer_id))
        return trainer
