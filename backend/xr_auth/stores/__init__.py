"""
Account stores: one implementation per persistence backend.
"""
from xr_auth.stores.base import AccountStore, generate_xr_id
from xr_auth.stores.factory import build_account_store, resolve_backend
from xr_auth.stores.memory import InMemoryAccountStore
from xr_auth.stores.mongo import MongoAccountStore
from xr_auth.stores.single_table import SingleTableAccountStore
from xr_auth.stores.two_table import TwoTableAccountStore

__all__ = [
    "AccountStore",
    "InMemoryAccountStore",
    "MongoAccountStore",
    "SingleTableAccountStore",
    "TwoTableAccountStore",
    "build_account_store",
    "generate_xr_id",
    "resolve_backend",
]
