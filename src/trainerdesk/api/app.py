"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from trainerdesk.api.middleware import (
    ErrorHandlingMiddleware,
    RequestContextMiddleware,
    RequestLoggingMiddleware,
    SessionMiddleware,
    SubdomainRoutingMiddleware,
)
from trainerdesk.api.middleware.errors import request_validation_handler
from trainerdesk.api.routers import api_router, health_router, pages_router
from trainerdesk.config.settings import Settings, get_settings
from trainerdesk.config.validation import get_configuration_summary, validate_or_raise
from trainerdesk.core.logging import setup_logging
from trainerdesk.core.tenant_resolver import ResolverConfig, TenantResolver

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the application factory that assembles all components:
    - Middleware (in correct order)
    - Routers
    - Exception handlers
    - Lifespan management

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        Configured FastAPI application

    Example:
        # Production
        app = create_app()

        # Testing
        test_settings = Settings(ENVIRONMENT="test", SECRET_KEY=SecretStr("x" * 32))
        app = create_app(settings=test_settings)

        # Run with uvicorn
        uvicorn trainerdesk.api.app:create_app --factory
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="TrainerDesk API",
        description="Multi-tenant booking and client management for fitness trainers",
        version="0.1.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=_lifespan,
    )

    # Store settings on app state for access in dependencies
    app.state.settings = settings

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Configure middleware (order matters - outermost to innermost)
    _configure_middleware(app, settings)

    _configure_routers(app)

    return app


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging, refuses to start on configuration errors, and
    opens and closes the database pool.
    """
    from trainerdesk.db.config import close_db, init_db

    settings: Settings = app.state.settings

    setup_logging(log_level=settings.log_level)

    validate_or_raise(settings)

    logger.info("api_starting", **get_configuration_summary(settings))

    try:
        await init_db()
        logger.info("database_pool_initialized")
    except Exception as e:
        logger.warning("database_initialization_skipped", error=str(e))

    yield

    logger.info("api_shutting_down")
    await close_db()


def _configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware order (outermost to innermost execution):
    1. RequestLoggingMiddleware - Logs all requests with the original path
    2. ErrorHandlingMiddleware - Converts exceptions to HTTP responses
    3. CORSMiddleware - Handles CORS (if configured)
    4. SubdomainRoutingMiddleware - Rewrites tenant hosts to /pages/<label>
    5. SessionMiddleware - Decodes the session token, never rejects
    6. RequestContextMiddleware - Sets ContextVar for request context

    Note: Middleware is added in reverse order because Starlette
    processes them from last-added to first-added.
    """
    # Innermost: Request context (needs subdomain and session from upstream)
    app.add_middleware(RequestContextMiddleware)

    app.add_middleware(SessionMiddleware)

    app.add_middleware(
        SubdomainRoutingMiddleware,
        resolver=TenantResolver(ResolverConfig.from_settings(settings)),
    )

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Error handling (catches exceptions from all inner middleware)
    app.add_middleware(ErrorHandlingMiddleware, debug=settings.DEBUG)

    # Outermost: Request logging
    app.add_middleware(RequestLoggingMiddleware)


def _configure_routers(app: FastAPI) -> None:
    """Configure API routers."""
    # Health check endpoints (no prefix - at root level)
    app.include_router(health_router)

    # Tenant pages, the target of subdomain rewrites
    app.include_router(pages_router)

    # JSON API under /api
    app.include_router(api_router)


# Convenience for running directly
# Usage: uvicorn trainerdesk.api.app:app
app = create_app()
