"""Password hashing and session token handling."""

import asyncio
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import bcrypt
from jose import JWTError, jwt

from trainerdesk.config.settings import Settings, get_settings
from trainerdesk.core.exceptions import AuthenticationError

BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    """Generate a bcrypt hash for a password."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        # Malformed stored hash
        return False


async def hash_password_async(password: str) -> str:
    """Hash a password in the default executor.

    bcrypt is CPU-bound, so request handlers must not call it on the loop.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, hash_password, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Verify a password in the default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, verify_password, plain_password, hashed_password)


def create_session_token(
    *,
    user_id: UUID,
    trainer_id: UUID | None,
    role: str,
    name: str,
    email: str,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> str:
    """Create a signed session token for a signed-in user."""
    settings = settings or get_settings()
    issued = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "trainer_id": str(trainer_id) if trainer_id is not None else None,
        "role": role,
        "name": name,
        "email": email,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)).timestamp()),
    }
    return jwt.encode(payload, settings.get_secret_key(), algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Verify and decode a session token.

    Raises:
        AuthenticationError: If the token is expired, tampered or malformed
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.get_secret_key(), algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise AuthenticationError("Invalid or expired session") from e
