"""
Database module - connections, relational tables and document collections.
"""
from xr_auth.database.connections import (
    close_connections,
    get_mongo_client,
    get_sql_engine,
)
from xr_auth.database.databases import auth_db

__all__ = [
    "close_connections",
    "get_mongo_client",
    "get_sql_engine",
    "auth_db",
]
