"""
Pydantic models for account records.
"""
from xr_auth.models.user import Credential, User, UserId

__all__ = [
    "Credential",
    "User",
    "UserId",
]
