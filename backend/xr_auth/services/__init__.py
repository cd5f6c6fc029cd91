"""
Service layer for business logic.
"""
from xr_auth.services.auth_service import AuthService

__all__ = [
    "AuthService",
]
