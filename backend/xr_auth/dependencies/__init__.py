"""
Dependencies for dependency injection in routes.
"""
from xr_auth.dependencies.auth import get_account_store, get_auth_service

__all__ = [
    "get_account_store",
    "get_auth_service",
]
