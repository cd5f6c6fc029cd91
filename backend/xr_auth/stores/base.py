"""
Account store contract shared by every persistence backend.
"""
import threading
import time
from abc import ABC, abstractmethod
from typing import Optional

from xr_auth.models.user import Credential, User, UserId

_xr_lock = threading.Lock()
_last_xr_millis = 0


def generate_xr_id(prefix: str = "XR") -> str:
    """
    Build an external id from the current epoch milliseconds.

    Ids are strictly increasing within the process, so two accounts created
    in the same millisecond still get distinct values.
    """
    global _last_xr_millis
    with _xr_lock:
        millis = int(time.time() * 1000)
        if millis <= _last_xr_millis:
            millis = _last_xr_millis + 1
        _last_xr_millis = millis
    return f"{prefix}-{millis}"


class AccountStore(ABC):
    """
    Persistence of users and their credentials.

    Implementations enforce email and XR id uniqueness themselves; callers
    may pre-check with ``find_by_email`` but must treat ``Conflict`` from
    ``create`` as the authoritative answer.
    """

    backend_name: str = "abstract"

    async def initialize(self) -> None:
        """Create tables or indexes the store relies on."""

    async def ping(self) -> None:
        """Raise ``BackendUnavailable`` if the store cannot be reached."""

    async def close(self) -> None:
        """Release resources held by the store."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Return the user registered with ``email``, if any."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Return the user with ``user_id``, if any."""

    @abstractmethod
    async def find_credential(self, email: str) -> Optional[Credential]:
        """Return the credential record for ``email``, if any."""

    @abstractmethod
    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        xr_id: Optional[str] = None,
    ) -> User:
        """
        Persist a new user.

        Raises:
            Conflict: If the email or XR id is already taken
            CreationFailed: If the new user cannot be read back
        """
