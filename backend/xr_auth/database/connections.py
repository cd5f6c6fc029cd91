"""
Database connection management for MongoDB and SQL backends.
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

# Global connection instances
_mongo_client: Optional[AsyncIOMotorClient] = None
_sql_engine: Optional[Engine] = None


def get_mongo_client(mongo_uri: str) -> AsyncIOMotorClient:
    """Get or create MongoDB client."""
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = AsyncIOMotorClient(mongo_uri)
    return _mongo_client


def get_sql_engine(database_url: str) -> Engine:
    """Get or create the SQLAlchemy engine."""
    global _sql_engine
    if _sql_engine is None:
        _sql_engine = create_engine(database_url, pool_pre_ping=True)
    return _sql_engine


async def close_connections() -> None:
    """Close all database connections."""
    global _mongo_client, _sql_engine

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None

    if _sql_engine is not None:
        _sql_engine.dispose()
        _sql_engine = None
