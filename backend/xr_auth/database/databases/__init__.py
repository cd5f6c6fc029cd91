"""
Document database definitions and collection constants.
"""
from xr_auth.database.databases import auth_db

__all__ = ["auth_db"]
