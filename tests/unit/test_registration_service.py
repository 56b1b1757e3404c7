"""Unit tests for account registration."""

import pytest
from pydantic import SecretStr
from sqlalchemy import func, select

from trainerdesk.config.settings import Settings
from trainerdesk.core.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidSubdomainError,
    SubdomainAllocationError,
)
from trainerdesk.core.registration import RegistrationService
from trainerdesk.core.security import verify_password
from trainerdesk.core.subdomain import SubdomainAllocator
from trainerdesk.db.models import SubscriptionTier, Trainer, User, UserRole
from trainerdesk.db.repositories.trainer import TrainerRepository


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        SECRET_KEY=SecretStr("registration-test-secret-key-0123456789"),
    )


class StaleStore:
    """Reports the first probe as free, as a concurrent registration would.

    Later probes are answered by the real repository.
    """

    def __init__(self, repository: TrainerRepository, stale_probes: int = 1):
        self.repository = repository
        self.stale_probes = stale_probes

    async def exists(self, label: str) -> bool:
        if self.stale_probes > 0:
            self.stale_probes -= 1
            return False
        return await self.repository.exists(label)


async def _register(service: RegistrationService, **overrides):
    data = {
        "name": "Jane Doe",
        "email": "jane@acmegym.io",
        "business_name": "Acme Gym",
        "password": "password123",
    }
    data.update(overrides)
    return await service.register(**data)


async def _count(db_session, model) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.asyncio
class TestRegistrationService:
    async def test_creates_trainer_and_primary_user(self, db_session, settings):
        result = await _register(RegistrationService(db_session, settings))

        assert result.trainer.subdomain == "acme-gym"
        assert result.trainer.business_name == "Acme Gym"
        assert result.user.trainer_id == result.trainer.trainer_id
        assert result.user.role == UserRole.PRIMARY_TRAINER.value
        assert result.user.email == "jane@acmegym.io"

    async def test_applies_plan_defaults(self, db_session, settings):
        result = await _register(RegistrationService(db_session, settings))

        assert result.trainer.subscription_tier == SubscriptionTier.FREE.value
        assert result.trainer.sms_credits == 10
        assert result.trainer.email_credits == 50
        assert result.trainer.is_active is True

    async def test_password_is_hashed(self, db_session, settings):
        result = await _register(RegistrationService(db_session, settings))

        assert result.user.password_hash != "password123"
        assert verify_password("password123", result.user.password_hash)

    async def test_email_is_normalized(self, db_session, settings):
        result = await _register(
            RegistrationService(db_session, settings), email="  Jane@AcmeGym.io "
        )

        assert result.user.email == "jane@acmegym.io"

    async def test_duplicate_email_rejected(self, db_session, settings):
        service = RegistrationService(db_session, settings)
        await _register(service)

        with pytest.raises(EmailAlreadyRegisteredError):
            await _register(service, email="JANE@acmegym.io", business_name="Other Gym")

        assert await _count(db_session, Trainer) == 1
        assert await _count(db_session, User) == 1

    async def test_same_business_name_gets_suffix(self, db_session, settings):
        service = RegistrationService(db_session, settings)
        await _register(service)

        second = await _register(service, email="bob@acmegym.io")
        third = await _register(service, email="carol@acmegym.io")

        assert second.trainer.subdomain == "acme-gym-2"
        assert third.trainer.subdomain == "acme-gym-3"

    async def test_unusable_business_name_rejected(self, db_session, settings):
        with pytest.raises(InvalidSubdomainError):
            await _register(RegistrationService(db_session, settings), business_name="!!!")

        assert await _count(db_session, Trainer) == 0

    async def test_insert_conflict_retries_allocation(self, db_session, settings):
        """Test a label taken between check and insert is re-allocated."""
        await _register(RegistrationService(db_session, settings))

        repository = TrainerRepository(db_session)
        allocator = SubdomainAllocator(StaleStore(repository))
        service = RegistrationService(db_session, settings, allocator=allocator)

        result = await _register(service, email="late@acmegym.io")

        assert result.trainer.subdomain == "acme-gym-2"
        assert await _count(db_session, Trainer) == 2
        assert await _count(db_session, User) == 2

    async def test_persistent_conflicts_give_up(self, db_session, settings):
        """Test repeated insert conflicts end in an allocation error."""
        await _register(RegistrationService(db_session, settings))

        repository = TrainerRepository(db_session)
        allocator = SubdomainAllocator(StaleStore(repository, stale_probes=1000))
        service = RegistrationService(db_session, settings, allocator=allocator)

        with pytest.raises(SubdomainAllocationError) as exc_info:
            await _register(service, email="late@acmegym.io")

        assert exc_info.value.base_label == "acme-gym"
        assert exc_info.value.attempts == settings.REGISTRATION_MAX_RETRIES
        assert await _count(db_session, Trainer) == 1
        assert await _count(db_session, User) == 1

    async def test_allocation_ceiling_from_settings(self, db_session):
        settings = Settings(ENVIRONMENT="test", SUBDOMAIN_MAX_ATTEMPTS=2)
        service = RegistrationService(db_session, settings)
        await _register(service)
        await _register(service, email="bob@acmegym.io")

        with pytest.raises(SubdomainAllocationError) as exc_info:
            await _register(service, email="carol@acmegym.io")

        assert exc_info.value.attempts == 2
