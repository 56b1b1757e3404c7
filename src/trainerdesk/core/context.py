"""Request context for async-safe multi-tenant operations.

This module provides request context propagation using Python's contextvars
so that logging and services can see which trainer and subdomain a request
belongs to without threading them through every call.

Usage:
    from trainerdesk.core.context import create_context, request_context

    ctx = create_context(subdomain="acme-gym")

    with request_context(ctx):
        current = get_current_context()
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field
from uuid_utils.compat import uuid7

from trainerdesk.core.exceptions import ContextNotSetError


class RequestContext(BaseModel):
    """Context for a single request/operation.

    Carries request correlation identifiers plus the tenant the request
    was routed to (by subdomain) and the signed-in user, when known.
    """

    # Identity
    request_id: UUID = Field(default_factory=uuid7)
    correlation_id: UUID = Field(default_factory=uuid7)

    # Tenant
    subdomain: str | None = None
    trainer_id: UUID | None = None
    user_id: UUID | None = None

    initiated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_log_dict(self) -> dict[str, Any]:
        """Convert context to a flat dictionary for structured logging."""
        data: dict[str, Any] = {
            "request_id": str(self.request_id),
            "correlation_id": str(self.correlation_id),
        }
        if self.subdomain is not None:
            data["subdomain"] = self.subdomain
        if self.trainer_id is not None:
            data["trainer_id"] = str(self.trainer_id)
        if self.user_id is not None:
            data["user_id"] = str(self.user_id)
        return data


# =============================================================================
# Context Variable Management
# =============================================================================

_request_context: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def get_current_context() -> RequestContext:
    """Get the current request context.

    Raises:
        ContextNotSetError: If no context is set in the current execution context
    """
    ctx = _request_context.get()
    if ctx is None:
        raise ContextNotSetError(
            "No request context is set. Use request_context() context manager."
        )
    return ctx


def get_current_context_or_none() -> RequestContext | None:
    """Get the current request context, or None if not set."""
    return _request_context.get()


def set_context(ctx: RequestContext) -> Token[RequestContext | None]:
    """Set the request context and return a token for restoration.

    This is a low-level API. Prefer using the request_context() context manager.
    """
    return _request_context.set(ctx)


def reset_context(token: Token[RequestContext | None]) -> None:
    """Reset the context to its previous value using a token."""
    _request_context.reset(token)


@contextmanager
def request_context(ctx: RequestContext):
    """Context manager for setting request context.

    This works for both sync and async code because contextvars are
    automatically propagated to async tasks.

    Args:
        ctx: The context to set for the duration of the block

    Yields:
        The context that was set
    """
    token = set_context(ctx)
    try:
        yield ctx
    finally:
        reset_context(token)


def create_context(
    *,
    request_id: UUID | None = None,
    correlation_id: UUID | None = None,
    subdomain: str | None = None,
    trainer_id: UUID | None = None,
    user_id: UUID | None = None,
) -> RequestContext:
    """Factory function to create a RequestContext with defaults.

    Args:
        request_id: Optional request ID (auto-generated if not provided)
        correlation_id: Optional correlation ID (auto-generated if not provided)
        subdomain: Tenant label the request was routed to
        trainer_id: Signed-in user's trainer
        user_id: Signed-in user

    Returns:
        A new RequestContext instance
    """
    return RequestContext(
        request_id=request_id or uuid7(),
        correlation_id=correlation_id or uuid7(),
        subdomain=subdomain,
        trainer_id=trainer_id,
        user_id=user_id,
    )
