"""Account registration: a new trainer business plus its primary user."""

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from trainerdesk.config.settings import Settings, get_settings
from trainerdesk.core.exceptions import EmailAlreadyRegisteredError, SubdomainAllocationError
from trainerdesk.core.logging import get_logger
from trainerdesk.core.security import hash_password_async
from trainerdesk.core.subdomain import SubdomainAllocator, slugify_subdomain
from trainerdesk.db.models.trainer import SubscriptionTier, Trainer
from trainerdesk.db.models.user import User, UserRole
from trainerdesk.db.repositories.trainer import TrainerRepository
from trainerdesk.db.repositories.user import UserRepository

logger = get_logger(__name__)


@dataclass
class RegistrationResult:
    """The records created by a successful registration."""

    user: User
    trainer: Trainer


class RegistrationService:
    """Create a trainer and its primary user in one transaction.

    The subdomain is chosen by ``SubdomainAllocator`` before the insert.
    If the insert still hits the unique constraint (another registration
    took the label in between), the transaction is rolled back and
    allocation runs again, up to ``REGISTRATION_MAX_RETRIES`` times.

    This service commits: registration is its own unit of work.
    """

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings | None = None,
        allocator: SubdomainAllocator | None = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.users = UserRepository(db)
        self.trainers = TrainerRepository(db)
        self.allocator = allocator or SubdomainAllocator(
            self.trainers, max_attempts=self.settings.SUBDOMAIN_MAX_ATTEMPTS
        )

    async def register(
        self,
        *,
        name: str,
        email: str,
        business_name: str,
        password: str,
    ) -> RegistrationResult:
        """Register a new trainer account.

        Args:
            name: The primary user's display name
            email: Login email (must be unused)
            business_name: Source text for the subdomain
            password: Plain password, stored as a bcrypt hash

        Returns:
            The created user and trainer

        Raises:
            EmailAlreadyRegisteredError: If the email has an account
            InvalidSubdomainError: If no label can be derived from the name
            SubdomainAllocationError: If no unique label could be allocated
        """
        email = email.strip().lower()
        if await self.users.email_exists(email):
            raise EmailAlreadyRegisteredError(email)

        password_hash = await hash_password_async(password)

        for attempt in range(1, self.settings.REGISTRATION_MAX_RETRIES + 1):
            subdomain = await self.allocator.allocate(business_name)
            try:
                result = await self._create_records(
                    name=name,
                    email=email,
                    business_name=business_name,
                    subdomain=subdomain,
                    password_hash=password_hash,
                )
            except IntegrityError:
                await self.db.rollback()
                if await self.users.email_exists(email):
                    raise EmailAlreadyRegisteredError(email) from None
                logger.warning(
                    "subdomain_insert_conflict",
                    subdomain=subdomain,
                    attempt=attempt,
                )
                continue

            logger.info(
                "registration_completed",
                trainer_id=str(result.trainer.trainer_id),
                user_id=str(result.user.user_id),
                subdomain=subdomain,
            )
            return result

        raise SubdomainAllocationError(
            slugify_subdomain(business_name), self.settings.REGISTRATION_MAX_RETRIES
        )

    async def _create_records(
        self,
        *,
        name: str,
        email: str,
        business_name: str,
        subdomain: str,
        password_hash: str,
    ) -> RegistrationResult:
        trainer = Trainer(
            business_name=business_name,
            subdomain=subdomain,
            subscription_tier=SubscriptionTier.FREE.value,
            sms_credits=self.settings.DEFAULT_SMS_CREDITS,
            email_credits=self.settings.DEFAULT_EMAIL_CREDITS,
        )
        trainer = await self.trainers.create(trainer)

        user = User(
            email=email,
            name=name,
            password_hash=password_hash,
            role=UserRole.PRIMARY_TRAINER.value,
            trainer_id=trainer.trainer_id,
        )
        user = await self.users.create(user)

        await self.db.commit()
        return RegistrationResult(user=user, trainer=trainer)
