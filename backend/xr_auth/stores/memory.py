"""
Process-local account store used in mock mode.
"""
import threading
from typing import Optional

from xr_auth.core.exceptions import Conflict
from xr_auth.models.user import Credential, User, UserId
from xr_auth.stores.base import AccountStore, generate_xr_id


class InMemoryAccountStore(AccountStore):
    """
    Dictionary-backed store keyed by email. Nothing is persisted.

    A single lock guards every read-modify-write so the store stays
    consistent when called from thread pool workers as well as the loop.
    """

    backend_name = "memory"

    def __init__(self) -> None:
        self._users_by_email: dict[str, User] = {}
        self._emails_by_xr_id: dict[str, str] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users_by_email)

    async def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user = self._users_by_email.get(email)
        return user.model_copy() if user else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        with self._lock:
            for user in self._users_by_email.values():
                if user.id == user_id:
                    return user.model_copy()
        return None

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
        with self._lock:
            if email in self._users_by_email:
                raise Conflict(field="email")

            xr_id = xr_id or generate_xr_id("XR-MOCK")
            if xr_id in self._emails_by_xr_id:
                raise Conflict(field="xr_id")

            user = User(
                id=self._next_id,
                name=name,
                email=email,
                password_hash=password_hash,
                xr_id=xr_id,
            )
            self._next_id += 1
            self._users_by_email[email] = user
            self._emails_by_xr_id[xr_id] = email

        return user.model_copy()
