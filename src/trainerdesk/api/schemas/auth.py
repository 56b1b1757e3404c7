"""API schemas for registration and session endpoints."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request to create a trainer account."""

    name: str = Field(..., min_length=2, max_length=255, description="Your full name")
    email: EmailStr = Field(..., description="Login email")
    business_name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        description="Business name; the subdomain is derived from it",
    )
    password: str = Field(..., min_length=8, max_length=128, description="Account password")

    model_config = {"json_schema_extra": {"example": {
        "name": "Joe Trainer",
        "email": "joe@joesfitness.io",
        "business_name": "Joe's Fitness",
        "password": "correct-horse-battery",
    }}}


class RegisteredUser(BaseModel):
    id: UUID
    email: str
    name: str


class RegisteredTrainer(BaseModel):
    id: UUID
    subdomain: str


class RegisterResponse(BaseModel):
    """Response after successful registration."""

    message: str = "Account created successfully"
    user: RegisteredUser
    trainer: RegisteredTrainer


class LoginRequest(BaseModel):
    """Email/password credentials."""

    email: str = Field(..., max_length=320)
    password: str = Field(..., max_length=128)


class SessionUserResponse(BaseModel):
    id: UUID
    email: str
    name: str
    role: str
    trainer_id: UUID | None = None


class LoginResponse(BaseModel):
    """Response after a successful login.

    The token is also set as the session cookie; API clients may send it
    back as ``Authorization: Bearer <token>`` instead.
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Session lifetime in seconds")
    user: SessionUserResponse


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Logged out successfully"
