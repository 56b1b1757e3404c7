"""Request context middleware for propagating context through the request lifecycle."""

from typing import Callable
from uuid import UUID

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from uuid_utils.compat import uuid7

from trainerdesk.core.context import create_context, request_context


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that sets up RequestContext for each request.

    Uses the ContextVar-based context management to propagate request
    context through async call chains, so every log event emitted while
    handling the request carries its IDs.

    Requires:
        request.state.tenant_subdomain: Set by SubdomainRoutingMiddleware
        request.state.session_user: Set by SessionMiddleware

    Sets:
        request.state.request_id: The generated request ID (UUIDv7)
        X-Request-ID response header: For client correlation
        X-Correlation-ID response header: Caller-supplied or generated
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request within a RequestContext."""
        request_id = uuid7()
        request.state.request_id = request_id

        session_user = getattr(request.state, "session_user", None)

        ctx = create_context(
            request_id=request_id,
            correlation_id=self._parse_correlation_id(request.headers.get("X-Correlation-ID")),
            subdomain=getattr(request.state, "tenant_subdomain", None),
            trainer_id=session_user.trainer_id if session_user else None,
            user_id=session_user.user_id if session_user else None,
        )

        with request_context(ctx):
            response = await call_next(request)

        response.headers["X-Request-ID"] = str(request_id)
        response.headers["X-Correlation-ID"] = str(ctx.correlation_id)

        return response

    def _parse_correlation_id(self, value: str | None) -> UUID | None:
        """Accept a caller's correlation ID if it is a UUID."""
        if not value:
            return None
        try:
            return UUID(value.strip())
        except ValueError:
            return None
