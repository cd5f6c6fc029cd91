"""
Security utilities for password hashing and JWT token management.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from jose import JWTError, jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from xr_auth.config import get_settings

# Password hashing context using bcrypt at a fixed work factor
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        plain_password: The plain text password to hash

    Returns:
        Hashed password string
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a plain password against a hashed password.

    A missing or unparseable hash never matches.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


async def hash_password_async(plain_password: str) -> str:
    """Hash on the thread pool so the event loop keeps serving requests."""
    return await run_in_threadpool(hash_password, plain_password)


async def verify_password_async(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify on the thread pool so the event loop keeps serving requests."""
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


def create_access_token(
    user_id: Union[int, str],
    email: str,
    xr_id: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: Unique user identifier
        email: User email address
        xr_id: External XR identifier of the user
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(days=settings.jwt_access_token_expire_days)

    issued_at = datetime.now(timezone.utc)

    payload = {
        "id": user_id,
        "email": email,
        "xrId": xr_id,
        "exp": issued_at + expires_delta,
        "iat": issued_at,
    }

    return jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token string to decode

    Returns:
        Decoded payload dictionary with keys: id, email, xrId, exp, iat

    Raises:
        JWTError: If token is invalid or expired
    """
    settings = get_settings()

    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
    )


def is_token_expired(payload: dict[str, Any]) -> bool:
    """
    Check if a decoded token payload is expired.

    Args:
        payload: Decoded JWT payload

    Returns:
        True if expired, False otherwise
    """
    exp = payload.get("exp")
    if exp is None:
        return True
    return datetime.now(timezone.utc) > datetime.fromtimestamp(exp, tz=timezone.utc)


__all__ = [
    "JWTError",
    "create_access_token",
    "decode_token",
    "hash_password",
    "hash_password_async",
    "is_token_expired",
    "verify_password",
    "verify_password_async",
]
