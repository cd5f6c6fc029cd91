"""
API Routers module.
"""
from xr_auth.routers import auth, health

__all__ = ["auth", "health"]
