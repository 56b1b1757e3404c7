"""Account registration and session endpoints.

- POST /api/auth/register - Create a trainer and its primary user
- POST /api/auth/login - Exchange credentials for a session
- POST /api/auth/logout - Clear session cookies
"""

import structlog
from fastapi import APIRouter, Response, status

from trainerdesk.api.dependencies import AppSettings, DbSession
from trainerdesk.api.middleware.session import SECURE_COOKIE_PREFIX
from trainerdesk.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisteredTrainer,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    SessionUserResponse,
)
from trainerdesk.config.settings import Settings
from trainerdesk.core.auth import AuthService
from trainerdesk.core.registration import RegistrationService
from trainerdesk.core.security import create_session_token

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["auth"])

# Cookies set by the web client's auth layer, cleared on logout
AUTH_COOKIE_SUFFIXES = ("session-token", "csrf-token", "callback-url")
AUTH_COOKIE_NAMESPACE = "authjs"


def logout_cookie_names() -> list[str]:
    """Plain and ``__Secure-`` variants of every auth cookie."""
    names = [f"{AUTH_COOKIE_NAMESPACE}.{suffix}" for suffix in AUTH_COOKIE_SUFFIXES]
    return names + [f"{SECURE_COOKIE_PREFIX}{name}" for name in names]


def _session_cookie_name(settings: Settings) -> str:
    if settings.ENVIRONMENT == "production":
        return f"{SECURE_COOKIE_PREFIX}{settings.SESSION_COOKIE_NAME}"
    return settings.SESSION_COOKIE_NAME


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a trainer account",
    description="""
    Create a trainer business and its primary user.

    The trainer's subdomain is derived from the business name. If the
    label is taken, a numeric suffix is appended (``acme-gym-2``, ...).
    """,
    responses={
        409: {"description": "Email already registered or no subdomain available"},
        422: {"description": "Invalid input"},
    },
)
async def register(
    request: RegisterRequest,
    db: DbSession,
    settings: AppSettings,
) -> RegisterResponse:
    """Register a new trainer account."""
    service = RegistrationService(db, settings=settings)
    result = await service.register(
        name=request.name,
        email=request.email,
        business_name=request.business_name,
        password=request.password,
    )

    return RegisterResponse(
        user=RegisteredUser(
            id=result.user.user_id,
            email=result.user.email,
            name=result.user.name,
        ),
        trainer=RegisteredTrainer(
            id=result.trainer.trainer_id,
            subdomain=result.trainer.subdomain,
        ),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Sign in",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(
    request: LoginRequest,
    response: Response,
    db: DbSession,
    settings: AppSettings,
) -> LoginResponse:
    """Check credentials, set the session cookie and return the token."""
    user = await AuthService(db).authenticate(request.email, request.password)

    token = create_session_token(
        user_id=user.user_id,
        trainer_id=user.trainer_id,
        role=user.role,
        name=user.name,
        email=user.email,
        settings=settings,
    )

    secure = settings.ENVIRONMENT == "production"
    response.set_cookie(
        key=_session_cookie_name(settings),
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=secure,
        samesite="lax",
        path="/",
    )

    return LoginResponse(
        access_token=token,
        expires_in=settings.SESSION_MAX_AGE_SECONDS,
        user=SessionUserResponse(
            id=user.user_id,
            email=user.email,
            name=user.name,
            role=user.role,
            trainer_id=user.trainer_id,
        ),
    )


@router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Sign out",
)
async def logout(response: Response) -> LogoutResponse:
    """Clear every session-related cookie.

    Session tokens are stateless, so this only removes them from the
    browser; it always succeeds.
    """
    for name in logout_cookie_names():
        response.delete_cookie(
            key=name,
            path="/",
            secure=name.startswith(SECURE_COOKIE_PREFIX),
        )

    logger.info("logout")
    return LogoutResponse()
