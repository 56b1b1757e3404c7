"""Request logging middleware."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("trainerdesk.api.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs every HTTP request once it completes.

    Runs outside subdomain routing, so the logged path is the one the
    client asked for; the tenant label, when the request was routed to a
    tenant page, is logged alongside it.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request and log request/response."""
        start_time = time.perf_counter()

        # Capture before inner middleware rewrites the path
        request_meta = self._capture_request_metadata(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        self._log_request(request, response, request_meta, duration_ms)

        return response

    def _capture_request_metadata(self, request: Request) -> dict:
        """Capture metadata from the incoming request."""
        return {
            "method": request.method,
            "path": request.url.path,
            "host": request.headers.get("host"),
            "query": str(request.url.query) if request.url.query else None,
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("User-Agent"),
        }

    def _get_client_ip(self, request: Request) -> str | None:
        """Extract client IP from request, considering proxy headers."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # First IP in the chain is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return None

    def _log_request(
        self,
        request: Request,
        response: Response,
        request_meta: dict,
        duration_ms: float,
    ) -> None:
        """Log the completed request."""
        request_id = "unknown"
        if hasattr(request.state, "request_id"):
            request_id = str(request.state.request_id)

        subdomain = getattr(request.state, "tenant_subdomain", None)

        status_code = response.status_code
        if status_code >= 500:
            log_level = logging.ERROR
        elif status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        log_data = {
            "request_id": request_id,
            "subdomain": subdomain,
            "method": request_meta["method"],
            "host": request_meta["host"],
            "path": request_meta["path"],
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": request_meta["client_ip"],
            "user_agent": request_meta["user_agent"],
        }

        logger.log(
            log_level,
            f"{request_meta['method']} {request_meta['path']} "
            f"-> {status_code} ({duration_ms:.2f}ms)",
            extra=log_data,
        )
