"""Pytest fixtures for TrainerDesk tests."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from trainerdesk.config.settings import Settings
from trainerdesk.db.config import get_db
from trainerdesk.db.models import Base

# Reserved label, so requests are not routed to a tenant page
MAIN_SITE_URL = "http://www.trainerdesk.com"

TEST_PASSWORD = "correct-horse-battery"


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Use the cheapest bcrypt cost so registration-heavy tests stay fast."""
    monkeypatch.setattr("trainerdesk.core.security.BCRYPT_ROUNDS", 4)


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create settings for testing."""
    return Settings(
        ENVIRONMENT="test",
        DEBUG=False,
        log_level="DEBUG",
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        SECRET_KEY=SecretStr("test-secret-key-that-is-long-enough-1234"),
        BASE_DOMAIN="trainerdesk.com",
    )


# =============================================================================
# Database fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database per test.

    StaticPool keeps the single in-memory connection alive for the
    lifetime of the engine.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


# =============================================================================
# API test fixtures
# =============================================================================


@pytest.fixture
def test_app(test_settings: Settings, db_session: AsyncSession) -> FastAPI:
    """Create a FastAPI test application bound to the test database."""
    from trainerdesk.api.app import create_app

    app = create_app(settings=test_settings)

    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db
    return app


@pytest_asyncio.fixture
async def test_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for API testing.

    Provides an httpx.AsyncClient configured to call the test application
    directly without network overhead, addressed to the main site.
    """
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url=MAIN_SITE_URL,
    ) as client:
        yield client


@pytest_asyncio.fixture
async def registered_account(test_client: AsyncClient) -> dict:
    """Register a trainer account through the API.

    Returns the registration payload merged with the response body.
    """
    payload = {
        "name": "Joe Trainer",
        "email": "joe@joesfitness.io",
        "business_name": "Joe's Fitness",
        "password": TEST_PASSWORD,
    }
    response = await test_client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return {**payload, **response.json()}


@pytest_asyncio.fixture
async def auth_headers(test_client: AsyncClient, registered_account: dict) -> dict[str, str]:
    """Bearer headers for the registered account.

    The login cookie is dropped so that only requests passing these
    headers are authenticated.
    """
    response = await test_client.post(
        "/api/auth/login",
        json={"email": registered_account["email"], "password": TEST_PASSWORD},
    )
    assert response.status_code == 200, response.text
    test_client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
