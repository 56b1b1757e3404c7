"""Error handling middleware for mapping exceptions to HTTP responses."""

from datetime import UTC, datetime
from typing import Any, Callable
from uuid import UUID

import structlog
from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from trainerdesk.api.schemas.errors import APIError, ErrorCode
from trainerdesk.core.exceptions import (
    AuthenticationError,
    ContextNotSetError,
    EmailAlreadyRegisteredError,
    InvalidSubdomainError,
    SubdomainAllocationError,
    TrainerAccessDeniedError,
    TrainerNotFoundError,
)

logger = structlog.get_logger()


def _message(exc: Exception) -> str:
    """Message without the class-name prefix some errors add in ``__str__``."""
    return str(exc.args[0]) if exc.args else str(exc)


def build_error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render an APIError body with the request ID attached."""
    request_id = get_request_id(request)
    error = APIError(
        error_code=error_code,
        message=message,
        details=details,
        request_id=request_id,
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(mode="json"),
        headers={"X-Request-ID": request_id, **(headers or {})},
    )


def get_request_id(request: Request) -> str:
    """Extract request ID from state or return a placeholder."""
    if hasattr(request.state, "request_id"):
        rid = request.state.request_id
        return str(rid) if isinstance(rid, UUID) else rid
    return "unknown"


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Exception handler for FastAPI request body/query validation."""
    return build_error_response(
        request,
        422,
        ErrorCode.VALIDATION_ERROR.value,
        "Request validation failed",
        {"errors": _jsonable_errors(exc.errors())},
    )


def _jsonable_errors(errors) -> list[dict[str, Any]]:
    """Drop non-serializable ``ctx``/``input`` values from pydantic errors."""
    cleaned = []
    for error in errors:
        cleaned.append(
            {
                "loc": list(error.get("loc", ())),
                "msg": error.get("msg"),
                "type": error.get("type"),
            }
        )
    return cleaned


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware that catches exceptions and returns standardized error responses.

    Maps domain exceptions to appropriate HTTP status codes and formats
    all errors using the APIError schema.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request and handle any exceptions."""
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """Convert exception to JSON error response."""
        status_code, error_code, message, details = self._map_exception(exc)

        if status_code >= 500:
            logger.exception(
                "unhandled_exception",
                request_id=get_request_id(request),
                path=request.url.path,
                error_type=type(exc).__name__,
            )

        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return build_error_response(request, status_code, error_code, message, details, headers)

    def _map_exception(
        self, exc: Exception
    ) -> tuple[int, str, str, dict | None]:
        """Map exception to (status_code, error_code, message, details)."""
        # Authentication errors
        if isinstance(exc, AuthenticationError):
            return (
                401,
                ErrorCode.UNAUTHORIZED.value,
                exc.reason,
                None,
            )

        if isinstance(exc, TrainerAccessDeniedError):
            return (
                403,
                ErrorCode.FORBIDDEN.value,
                "Forbidden",
                {"trainer_id": str(exc.trainer_id), "resource": exc.resource},
            )

        # Tenant errors
        if isinstance(exc, TrainerNotFoundError):
            return (
                404,
                ErrorCode.TENANT_NOT_FOUND.value,
                _message(exc),
                {"identifier": str(exc.identifier)},
            )

        # Registration errors
        if isinstance(exc, EmailAlreadyRegisteredError):
            return (
                409,
                ErrorCode.EMAIL_TAKEN.value,
                _message(exc),
                None,
            )

        if isinstance(exc, SubdomainAllocationError):
            return (
                409,
                ErrorCode.SUBDOMAIN_UNAVAILABLE.value,
                _message(exc),
                {"base_label": exc.base_label, "attempts": exc.attempts},
            )

        if isinstance(exc, InvalidSubdomainError):
            return (
                422,
                ErrorCode.INVALID_SUBDOMAIN.value,
                "Business name must contain at least one letter or digit",
                {"business_name": exc.business_name},
            )

        # Validation errors (Pydantic)
        if isinstance(exc, ValidationError):
            return (
                422,
                ErrorCode.VALIDATION_ERROR.value,
                "Request validation failed",
                {"errors": _jsonable_errors(exc.errors())},
            )

        # Context errors (internal)
        if isinstance(exc, ContextNotSetError):
            return (
                500,
                ErrorCode.INTERNAL_ERROR.value,
                "Internal server error: context not initialized",
                None,
            )

        # Generic exceptions
        return (
            500,
            ErrorCode.INTERNAL_ERROR.value,
            "Internal server error",
            {"type": type(exc).__name__} if self.debug else None,
        )
