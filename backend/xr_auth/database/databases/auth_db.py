"""
Auth database configuration for the hosted document backend.
Stores user identity and authentication data.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase

DB_NAME = "auth_db"


class Collections:
    """Collection names in auth_db."""
    USERS = "users"

    # Unique indexes are the source of truth for account uniqueness
    INDEXES = {
        "users": [
            {"keys": [("email", 1)], "unique": True, "name": "email_1"},
            {"keys": [("xr_id", 1)], "unique": True, "name": "xr_id_1"},
        ],
    }


async def create_auth_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create indexes for auth database collections."""
    for collection_name, indexes in Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            await collection.create_index(keys, **kwargs)
