"""Health check endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from trainerdesk.api.dependencies import AppSettings, DbSession
from trainerdesk.api.schemas.health import (
    ComponentHealth,
    HealthDetailResponse,
    HealthResponse,
    HealthStatus,
)
from trainerdesk.config.validation import ValidationSeverity, validate_configuration

router = APIRouter(tags=["health"])

# Application version - should come from package metadata in production
APP_VERSION = "0.1.0"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Basic health check",
    description="Returns basic liveness status. No authentication required.",
)
async def health_check() -> HealthResponse:
    """Basic liveness check endpoint.

    Returns 200 if the application is running, regardless of
    dependency health. Use /health/ready for full readiness check.
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        version=APP_VERSION,
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/health/db",
    response_model=HealthDetailResponse,
    summary="Database health check",
    description="Checks database connectivity. No authentication required.",
)
async def health_db(db: DbSession) -> HealthDetailResponse:
    """Database connectivity check.

    Executes a simple query to verify database connection.
    """
    db_health = await _check_database(db)

    return HealthDetailResponse(
        status=db_health.status,
        version=APP_VERSION,
        timestamp=datetime.now(UTC),
        database=db_health,
        details=None,
    )


@router.get(
    "/health/ready",
    response_model=HealthDetailResponse,
    summary="Full readiness check",
    description="Checks database and configuration. No authentication required.",
)
async def health_ready(db: DbSession, settings: AppSettings) -> HealthDetailResponse:
    """Full readiness check endpoint.

    Use this for Kubernetes readiness probes. Configuration errors make
    the service unhealthy, warnings only degrade it.
    """
    db_health = await _check_database(db)
    config_health = _check_configuration(settings)

    return HealthDetailResponse(
        status=_aggregate_health([db_health, config_health]),
        version=APP_VERSION,
        timestamp=datetime.now(UTC),
        database=db_health,
        details={
            "checks_performed": ["database", "configuration"],
            "configuration": config_health.model_dump(mode="json"),
        },
    )


async def _check_database(db: AsyncSession) -> ComponentHealth:
    """Check database connectivity."""
    start = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
        latency_ms = (time.perf_counter() - start) * 1000

        return ComponentHealth(
            status=HealthStatus.HEALTHY,
            message="Database connection successful",
            latency_ms=round(latency_ms, 2),
        )
    except Exception as e:
        latency_ms = (time.perf_counter() - start) * 1000
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message=f"Database connection failed: {str(e)[:100]}",
            latency_ms=round(latency_ms, 2),
        )


def _check_configuration(settings) -> ComponentHealth:
    results = validate_configuration(settings)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]
    if errors:
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message="; ".join(f"{r.field}: {r.message}" for r in errors),
        )
    if results:
        return ComponentHealth(
            status=HealthStatus.DEGRADED,
            message=f"{len(results)} configuration warning(s)",
        )
    return ComponentHealth(status=HealthStatus.HEALTHY, message="Configuration valid")


def _aggregate_health(components: list[ComponentHealth]) -> HealthStatus:
    """Aggregate component health into overall status.

    Returns:
        UNHEALTHY if any component is unhealthy, DEGRADED if any is
        degraded, HEALTHY otherwise
    """
    statuses = [c.status for c in components]

    if any(s == HealthStatus.UNHEALTHY for s in statuses):
        return HealthStatus.UNHEALTHY

    if any(s == HealthStatus.DEGRADED for s in statuses):
        return HealthStatus.DEGRADED

    return HealthStatus.HEALTHY
