"""
Core module - Security, validation and the error taxonomy.
"""
from xr_auth.core.exceptions import (
    AuthError,
    BackendUnavailable,
    Conflict,
    CreationFailed,
    InvalidCredentials,
    InvalidInput,
    UserNotFound,
)
from xr_auth.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from xr_auth.core.validation import validate_sign_in, validate_sign_up

__all__ = [
    "AuthError",
    "BackendUnavailable",
    "Conflict",
    "CreationFailed",
    "InvalidCredentials",
    "InvalidInput",
    "UserNotFound",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
    "validate_sign_in",
    "validate_sign_up",
]
