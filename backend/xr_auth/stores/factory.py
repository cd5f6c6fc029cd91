"""
Account store selection at process startup.
"""
import logging

from xr_auth.config import Settings
from xr_auth.core.exceptions import BackendUnavailable
from xr_auth.database.connections import get_mongo_client, get_sql_engine
from xr_auth.stores.base import AccountStore
from xr_auth.stores.memory import InMemoryAccountStore
from xr_auth.stores.mongo import MongoAccountStore
from xr_auth.stores.single_table import SingleTableAccountStore
from xr_auth.stores.two_table import TwoTableAccountStore

logger = logging.getLogger(__name__)

SQL_STORES = {
    "two_table": TwoTableAccountStore,
    "single_table": SingleTableAccountStore,
}


def resolve_backend(settings: Settings) -> str:
    """Turn ``auto`` into a concrete backend name based on what is configured."""
    backend = settings.account_backend.strip().lower()
    if backend != "auto":
        return backend
    if settings.database_url:
        return "two_table"
    if settings.mongo_uri:
        return "mongo"
    return "memory"


def build_account_store(settings: Settings) -> AccountStore:
    """
    Build the account store selected by configuration.

    Raises:
        BackendUnavailable: If the backend is unknown or its connection
            setting is missing
    """
    backend = resolve_backend(settings)

    if backend == "memory":
        logger.warning("Running in MOCK MODE - no database configured, accounts are not persisted")
        return InMemoryAccountStore()

    if backend in SQL_STORES:
        if not settings.database_url:
            raise BackendUnavailable(f"DATABASE_URL is required for the {backend} backend")
        logger.info("Using %s account store", backend)
        return SQL_STORES[backend](get_sql_engine(settings.database_url), settings)

    if backend == "mongo":
        if not settings.mongo_uri:
            raise BackendUnavailable("MONGO_URI is required for the mongo backend")
        logger.info("Using mongo account store (database %s)", settings.mongo_db_name)
        client = get_mongo_client(settings.mongo_uri)
        return MongoAccountStore(client[settings.mongo_db_name], settings)

    raise BackendUnavailable(f"Unknown account backend: {settings.account_backend}")
