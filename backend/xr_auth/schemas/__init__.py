"""
Request and response schemas for API endpoints.
"""
from xr_auth.schemas.auth import (
    AuthResponse,
    AuthResult,
    ErrorResponse,
    PublicUser,
    SignInRequest,
    SignUpRequest,
)

__all__ = [
    "AuthResponse",
    "AuthResult",
    "ErrorResponse",
    "PublicUser",
    "SignInRequest",
    "SignUpRequest",
]
