"""FastAPI dependencies for API endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from trainerdesk.config.settings import Settings, get_settings
from trainerdesk.core.auth import SessionUser
from trainerdesk.core.exceptions import AuthenticationError
from trainerdesk.db.dependencies import DbSession, get_db

# Re-export database dependencies for convenience
__all__ = [
    "AppSettings",
    "CurrentUser",
    "DbSession",
    "get_app_settings",
    "get_current_user",
    "get_db",
    "get_optional_user",
]


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with, falling back to the cached global."""
    if hasattr(request.app.state, "settings"):
        return request.app.state.settings
    return get_settings()


def get_optional_user(request: Request) -> SessionUser | None:
    """The signed-in user decoded by SessionMiddleware, if any."""
    return getattr(request.state, "session_user", None)


def get_current_user(
    session_user: Annotated[SessionUser | None, Depends(get_optional_user)],
) -> SessionUser:
    """Require a signed-in user that belongs to a trainer.

    Raises:
        AuthenticationError: If there is no session or it has no trainer
    """
    if session_user is None or session_user.trainer_id is None:
        raise AuthenticationError("Unauthorized")
    return session_user


CurrentUser = Annotated[SessionUser, Depends(get_current_user)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
