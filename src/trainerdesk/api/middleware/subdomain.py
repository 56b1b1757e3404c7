"""Subdomain routing middleware."""

from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from trainerdesk.core.tenant_resolver import TenantResolver

logger = structlog.get_logger()

# Probes hit the service by IP or internal hostname, so never rewrite these
SKIP_ROUTING_PATHS = {
    "/health",
    "/health/db",
    "/health/ready",
}


class SubdomainRoutingMiddleware(BaseHTTPMiddleware):
    """Middleware that routes tenant subdomains to their public page.

    For a request to ``acme.trainerdesk.com/anything`` the ASGI path is
    rewritten to ``/pages/acme`` before routing. This is an internal
    rewrite: the client sees no redirect and the URL it requested is
    unchanged. Reserved hosts (``www``, the bare base domain) pass through.

    Sets:
        request.state.tenant_subdomain: The tenant label, or None
        request.state.original_path: The path before any rewrite
    """

    def __init__(self, app: ASGIApp, resolver: TenantResolver | None = None):
        super().__init__(app)
        self.resolver = resolver or TenantResolver()

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Resolve the host and rewrite the routing path if needed."""
        path = request.scope["path"]
        request.state.original_path = path
        request.state.tenant_subdomain = None

        if path in SKIP_ROUTING_PATHS:
            return await call_next(request)

        decision = self.resolver.resolve(request.headers.get("host"), path)
        if decision.is_rewrite:
            request.state.tenant_subdomain = decision.label
            request.scope["path"] = decision.path
            request.scope["raw_path"] = decision.path.encode("ascii", "ignore")
            logger.debug(
                "subdomain_rewrite",
                subdomain=decision.label,
                original_path=path,
                path=decision.path,
            )

        return await call_next(request)
