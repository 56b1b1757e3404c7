"""Session middleware for reading the signed-in user."""

import re
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from trainerdesk.config.settings import Settings, get_settings
from trainerdesk.core.auth import SessionUser
from trainerdesk.core.exceptions import AuthenticationError
from trainerdesk.core.security import decode_session_token

logger = structlog.get_logger()

SECURE_COOKIE_PREFIX = "__Secure-"

_BEARER = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)


class SessionMiddleware(BaseHTTPMiddleware):
    """Middleware that decodes the session token, if any.

    Looks for the token in the session cookie (plain or ``__Secure-``
    prefixed) and then in an ``Authorization: Bearer`` header. This
    middleware never rejects a request; endpoints that need a signed-in
    user depend on ``get_current_user``.

    Sets:
        request.state.session_user: SessionUser, or None when anonymous
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Attach the session user to the request state."""
        settings = self._get_settings(request)
        request.state.session_user = None

        token = self._extract_token(request, settings)
        if token:
            try:
                claims = decode_session_token(token, settings)
                request.state.session_user = SessionUser.from_claims(claims)
            except AuthenticationError as e:
                logger.debug("session_rejected", reason=e.reason)

        return await call_next(request)

    def _get_settings(self, request: Request) -> Settings:
        if hasattr(request.app.state, "settings"):
            return request.app.state.settings
        return get_settings()

    def _extract_token(self, request: Request, settings: Settings) -> str | None:
        """Get the raw session token from cookie or Authorization header."""
        cookie_name = settings.SESSION_COOKIE_NAME
        token = request.cookies.get(cookie_name) or request.cookies.get(
            f"{SECURE_COOKIE_PREFIX}{cookie_name}"
        )
        if token:
            return token

        auth_header = request.headers.get("Authorization")
        if auth_header:
            match = _BEARER.match(auth_header)
            if match:
                return match.group(1).strip()
        return None
