"""
Authentication dependencies for route handlers.
"""
from typing import Annotated

from fastapi import Depends, Request

from xr_auth.core.exceptions import BackendUnavailable
from xr_auth.services.auth_service import AuthService
from xr_auth.stores.base import AccountStore


def get_account_store(request: Request) -> AccountStore:
    """
    Dependency returning the account store built by the lifespan.

    Raises:
        BackendUnavailable: If startup could not build a store
    """
    store = getattr(request.app.state, "account_store", None)
    if store is None:
        raise BackendUnavailable("No account store is configured")
    return store


def get_auth_service(
    store: Annotated[AccountStore, Depends(get_account_store)]
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(store)
