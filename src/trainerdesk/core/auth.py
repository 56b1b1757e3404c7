"""Credential checks and the signed-in user model."""

from typing import Any
from uuid import UUID

import structlog
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from trainerdesk.core.exceptions import AuthenticationError
from trainerdesk.core.security import verify_password_async
from trainerdesk.db.models.user import User
from trainerdesk.db.repositories.user import UserRepository

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid email or password"


class SessionUser(BaseModel):
    """The user carried by a session token."""

    user_id: UUID
    trainer_id: UUID | None = None
    role: str
    name: str
    email: str

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "SessionUser":
        """Build from decoded token claims.

        Raises:
            AuthenticationError: If required claims are missing or malformed
        """
        try:
            trainer_id = claims.get("trainer_id")
            return cls(
                user_id=UUID(claims["sub"]),
                trainer_id=UUID(trainer_id) if trainer_id else None,
                role=claims["role"],
                name=claims.get("name") or "",
                email=claims.get("email") or "",
            )
        except (KeyError, TypeError, ValueError) as e:
            raise AuthenticationError("Malformed session") from e

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            trainer_id=user.trainer_id,
            role=user.role,
            name=user.name,
            email=user.email,
        )


class AuthService:
    """Email/password authentication."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the matching user.

        Unknown email and wrong password fail with the same message.

        Raises:
            AuthenticationError: If credentials are missing or invalid
        """
        if not email or not password:
            raise AuthenticationError("Email and password are required")

        user = await self.users.get_by_email(email)
        if user is None or not await verify_password_async(password, user.password_hash):
            logger.info("login_failed", email_domain=email.rpartition("@")[2])
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("login_succeeded", user_id=str(user.user_id))
        return user
