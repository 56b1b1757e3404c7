"""Configuration validation for startup checks.

Validates that required configuration is present and valid before the
application starts accepting requests.

Usage:
    from trainerdesk.config.validation import validate_configuration

    # During startup
    errors = validate_configuration()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        sys.exit(1)
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from trainerdesk.config.settings import Settings, get_settings
from trainerdesk.utils.exceptions import ConfigurationError


logger = logging.getLogger("trainerdesk.config")

# A single DNS label: letters, digits and inner hyphens, at most 63 chars
DNS_LABEL_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$")


class ValidationSeverity(str, Enum):
    """Severity of configuration validation issues."""

    ERROR = "error"  # Must be fixed, app cannot start
    WARNING = "warning"  # Should be fixed, app can start but may have issues


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""

    field: str
    severity: ValidationSeverity
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        prefix = "ERROR" if self.severity == ValidationSeverity.ERROR else "WARNING"
        result = f"[{prefix}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


def validate_configuration(settings: Settings | None = None) -> list[ValidationResult]:
    """Validate application configuration.

    Runs all configuration checks and returns a list of validation results.

    Args:
        settings: Settings to validate (default: global settings)

    Returns:
        List of validation results (empty if all checks pass)
    """
    if settings is None:
        settings = get_settings()

    results: list[ValidationResult] = []

    results.extend(_validate_database(settings))
    results.extend(_validate_security(settings))
    results.extend(_validate_tenancy(settings))
    results.extend(_validate_api(settings))
    results.extend(_validate_environment(settings))

    return results


def validate_or_raise(settings: Settings | None = None) -> None:
    """Validate configuration and raise if errors found.

    Args:
        settings: Settings to validate

    Raises:
        ConfigurationError: If any validation errors are found
    """
    results = validate_configuration(settings)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]

    if errors:
        error_messages = "\n".join(str(e) for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_messages}")

    warnings = [r for r in results if r.severity == ValidationSeverity.WARNING]
    for warning in warnings:
        logger.warning(str(warning))


# =============================================================================
# Validators
# =============================================================================


def _validate_database(settings: Settings) -> list[ValidationResult]:
    """Validate database configuration."""
    results: list[ValidationResult] = []

    if not settings.DATABASE_URL:
        results.append(
            ValidationResult(
                field="DATABASE_URL",
                severity=ValidationSeverity.ERROR,
                message="Database URL is not configured",
                suggestion="Set DATABASE_URL environment variable",
            )
        )
    elif not settings.DATABASE_URL.startswith(("postgresql", "sqlite")):
        results.append(
            ValidationResult(
                field="DATABASE_URL",
                severity=ValidationSeverity.WARNING,
                message=f"Unexpected database type in URL: {settings.DATABASE_URL[:20]}...",
                suggestion="TrainerDesk is designed for PostgreSQL or SQLite",
            )
        )

    if settings.DATABASE_POOL_SIZE < 1:
        results.append(
            ValidationResult(
                field="DATABASE_POOL_SIZE",
                severity=ValidationSeverity.ERROR,
                message=f"Invalid pool size: {settings.DATABASE_POOL_SIZE}",
                suggestion="Use at least 1 connection",
            )
        )

    return results


def _validate_security(settings: Settings) -> list[ValidationResult]:
    """Validate session signing configuration."""
    results: list[ValidationResult] = []

    if settings.SECRET_KEY is None:
        results.append(
            ValidationResult(
                field="SECRET_KEY",
                severity=(
                    ValidationSeverity.ERROR
                    if settings.ENVIRONMENT == "production"
                    else ValidationSeverity.WARNING
                ),
                message="Session secret key is not configured",
                suggestion="Generate with: python -c 'import secrets; print(secrets.token_urlsafe(48))'",
            )
        )
    elif len(settings.SECRET_KEY.get_secret_value()) < 32:
        results.append(
            ValidationResult(
                field="SECRET_KEY",
                severity=ValidationSeverity.WARNING,
                message="Session secret key is short and may be weak",
                suggestion="Use at least 32 characters",
            )
        )

    if settings.SESSION_MAX_AGE_SECONDS <= 0:
        results.append(
            ValidationResult(
                field="SESSION_MAX_AGE_SECONDS",
                severity=ValidationSeverity.ERROR,
                message="Session lifetime must be positive",
            )
        )

    return results


def _validate_tenancy(settings: Settings) -> list[ValidationResult]:
    """Validate base domain, reserved labels and allocation limits."""
    results: list[ValidationResult] = []

    labels = settings.BASE_DOMAIN.split(".")
    if len(labels) < 2 or not all(DNS_LABEL_PATTERN.match(label) for label in labels):
        results.append(
            ValidationResult(
                field="BASE_DOMAIN",
                severity=ValidationSeverity.ERROR,
                message=f"Invalid base domain: {settings.BASE_DOMAIN!r}",
                suggestion="Use a bare domain such as trainerdesk.com",
            )
        )

    for label in settings.EXTRA_RESERVED_SUBDOMAINS:
        if not DNS_LABEL_PATTERN.match(label):
            results.append(
                ValidationResult(
                    field="EXTRA_RESERVED_SUBDOMAINS",
                    severity=ValidationSeverity.WARNING,
                    message=f"Reserved label {label!r} is not a valid DNS label and can never match",
                )
            )

    if settings.SUBDOMAIN_MAX_ATTEMPTS < 1:
        results.append(
            ValidationResult(
                field="SUBDOMAIN_MAX_ATTEMPTS",
                severity=ValidationSeverity.ERROR,
                message="Subdomain allocation needs at least one attempt",
            )
        )

    if settings.REGISTRATION_MAX_RETRIES < 1:
        results.append(
            ValidationResult(
                field="REGISTRATION_MAX_RETRIES",
                severity=ValidationSeverity.ERROR,
                message="Registration needs at least one insert attempt",
            )
        )

    return results


def _validate_api(settings: Settings) -> list[ValidationResult]:
    """Validate API configuration."""
    results: list[ValidationResult] = []

    if not (1 <= settings.API_PORT <= 65535):
        results.append(
            ValidationResult(
                field="API_PORT",
                severity=ValidationSeverity.ERROR,
                message=f"Invalid port number: {settings.API_PORT}",
                suggestion="Use a port between 1 and 65535",
            )
        )

    if settings.ENVIRONMENT == "production" and "*" in settings.CORS_ORIGINS:
        results.append(
            ValidationResult(
                field="CORS_ORIGINS",
                severity=ValidationSeverity.ERROR,
                message="Wildcard CORS origin not allowed in production",
                suggestion="Specify exact allowed origins",
            )
        )

    return results


def _validate_environment(settings: Settings) -> list[ValidationResult]:
    """Validate environment-specific settings."""
    results: list[ValidationResult] = []

    if settings.ENVIRONMENT == "production" and settings.DEBUG:
        results.append(
            ValidationResult(
                field="DEBUG",
                severity=ValidationSeverity.ERROR,
                message="Debug mode must be disabled in production",
                suggestion="Set DEBUG=false for production",
            )
        )

    if settings.ENVIRONMENT == "production" and settings.log_level == "DEBUG":
        results.append(
            ValidationResult(
                field="log_level",
                severity=ValidationSeverity.WARNING,
                message="DEBUG log level in production may expose sensitive data",
                suggestion="Use INFO or WARNING for production",
            )
        )

    return results


def get_configuration_summary(settings: Settings | None = None) -> dict[str, Any]:
    """Get a summary of current configuration (safe for logging).

    Excludes sensitive values like secret keys and connection strings.
    """
    if settings is None:
        settings = get_settings()

    return {
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "log_level": settings.log_level,
        "base_domain": settings.BASE_DOMAIN,
        "reserved_subdomains": sorted(settings.reserved_subdomains),
        "subdomain_max_attempts": settings.SUBDOMAIN_MAX_ATTEMPTS,
        "database_pool_size": settings.DATABASE_POOL_SIZE,
        "secret_key_configured": settings.SECRET_KEY is not None,
        "cors_origins_count": len(settings.CORS_ORIGINS),
    }
