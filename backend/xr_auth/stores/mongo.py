"""
Account store over a hosted MongoDB database.

Uniqueness is enforced by the ``email_1`` and ``xr_id_1`` unique indexes;
there is no pre-check, a duplicate insert is translated into ``Conflict``.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from xr_auth.config import Settings
from xr_auth.core.exceptions import BackendUnavailable, Conflict, CreationFailed
from xr_auth.database.databases import auth_db
from xr_auth.models.user import Credential, User, UserId
from xr_auth.stores.base import AccountStore, generate_xr_id

logger = logging.getLogger(__name__)


def duplicate_key_field(exc: DuplicateKeyError) -> Optional[str]:
    """
    Read which unique index a duplicate insert hit.

    Returns ``"email"``, ``"xr_id"`` or None when the error payload does not
    say.
    """
    details = exc.details or {}
    for key in ("keyPattern", "keyValue"):
        fields = details.get(key) or {}
        if "xr_id" in fields:
            return "xr_id"
        if "email" in fields:
            return "email"

    message = str(details.get("errmsg") or exc)
    if "xr_id" in message:
        return "xr_id"
    if "email" in message:
        return "email"
    return None


class MongoAccountStore(AccountStore):
    """Store for the hosted document backend."""

    backend_name = "mongo"

    def __init__(self, db: AsyncIOMotorDatabase, settings: Settings):
        self.db = db
        self.users_collection = db[auth_db.Collections.USERS]
        self.settings = settings

    async def _execute(self, awaitable: Awaitable[Any]) -> Any:
        try:
            return await awaitable
        except ConnectionFailure as e:
            logger.error("Account database unavailable: %s", str(e))
            raise BackendUnavailable("Account database is unavailable") from e

    @staticmethod
    def _to_user(doc: dict) -> User:
        return User(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc["email"],
            password_hash=doc.get("password_hash"),
            xr_id=doc["xr_id"],
            created_at=doc.get("created_at") or datetime.now(timezone.utc),
            status_id=doc.get("status_id"),
            type_id=doc.get("type_id"),
            rights_id=doc.get("rights_id"),
        )

    async def initialize(self) -> None:
        await self._execute(auth_db.create_auth_indexes(self.db))

    async def ping(self) -> None:
        await self._execute(self.db.command("ping"))

    async def find_by_email(self, email: str) -> Optional[User]:
        doc = await self._execute(self.users_collection.find_one({"email": email}))
        return self._to_user(doc) if doc else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        try:
            oid = ObjectId(str(user_id))
        except InvalidId:
            return None

        doc = await self._execute(self.users_collection.find_one({"_id": oid}))
        return self._to_user(doc) if doc else None

    async def find_credential(self, email: str) -> Optional[Credential]:
        user = await self.find_by_email(email)
        if user is None:
            return None
        return Credential(
            user_id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            user=user,
        )

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        xr_id: Optional[str] = None,
    ) -> User:
        user_doc = {
            "name": name,
            "email": email,
            "password_hash": password_hash,
            "xr_id": xr_id or generate_xr_id(),
            "status_id": self.settings.default_status_id,
            "type_id": self.settings.default_type_id,
            "rights_id": self.settings.default_rights_id,
            "created_at": datetime.now(timezone.utc),
        }

        try:
            result = await self._execute(self.users_collection.insert_one(user_doc))
        except DuplicateKeyError as e:
            field = duplicate_key_field(e)
            if field is None:
                taken = await self._execute(self.users_collection.find_one({"email": email}))
                field = "email" if taken else "xr_id"
            raise Conflict(field=field) from e

        created = await self.find_by_id(result.inserted_id)
        if created is None:
            raise CreationFailed("Failed to create user")
        return created
