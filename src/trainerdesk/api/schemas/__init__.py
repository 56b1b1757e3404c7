"""API schemas for request/response validation."""

from .auth import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisteredTrainer,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    SessionUserResponse,
)
from .dashboard import ClientSummary, DashboardStatsResponse, UpcomingBookingResponse
from .errors import APIError, ErrorCode
from .health import ComponentHealth, HealthDetailResponse, HealthResponse, HealthStatus
from .pages import PublicPageResponse
from .trainer import ProfileSettings, TrainerOwner, TrainerResponse, TrainerUpdateResponse

__all__ = [
    # Error schemas
    "APIError",
    "ErrorCode",
    # Health schemas
    "ComponentHealth",
    "HealthDetailResponse",
    "HealthResponse",
    "HealthStatus",
    # Auth schemas
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "RegisterRequest",
    "RegisterResponse",
    "RegisteredTrainer",
    "RegisteredUser",
    "SessionUserResponse",
    # Dashboard schemas
    "ClientSummary",
    "DashboardStatsResponse",
    "UpcomingBookingResponse",
    # Trainer schemas
    "ProfileSettings",
    "TrainerOwner",
    "TrainerResponse",
    "TrainerUpdateResponse",
    # Public page
    "PublicPageResponse",
]
