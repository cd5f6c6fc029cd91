"""
Shared plumbing for the SQLAlchemy account stores.

SQLAlchemy sessions are blocking, so every public coroutine hands its work
to the thread pool and translates connectivity failures on the way out.
"""
import logging
import re
from contextlib import contextmanager
from typing import Any, Callable, Generator, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from xr_auth.config import Settings
from xr_auth.core.exceptions import BackendUnavailable, Conflict, CreationFailed
from xr_auth.database.tables import (
    UNIQUE_ACCOUNT_FIELDS,
    Base,
    DBRightsUser,
    DBStatusUser,
    DBTypeUser,
)
from xr_auth.models.user import Credential, User, UserId
from xr_auth.stores.base import AccountStore, generate_xr_id

logger = logging.getLogger(__name__)

# Driver messages naming the violated unique constraint or column
UNIQUE_VIOLATION_PATTERNS = [
    # SQLite: UNIQUE constraint failed: accessuser.email
    re.compile(r"UNIQUE constraint failed: (?P<target>[\w.]+)"),
    # PostgreSQL: duplicate key value violates unique constraint "uq_users_xr"
    re.compile(r'violates unique constraint "(?P<target>[^"]+)"'),
    # MySQL: Duplicate entry '...' for key 'accessuser.uq_accessuser_email'
    re.compile(r"Duplicate entry '.*' for key '(?P<target>[^']+)'"),
    # SQL Server: Violation of UNIQUE KEY constraint 'uq_accounts_xr'
    re.compile(r"UNIQUE KEY constraint '(?P<target>[^']+)'", re.IGNORECASE),
]


def unique_violation_target(exc: IntegrityError) -> Optional[str]:
    """
    Return the constraint or column a unique violation names.

    Returns None when the error is not a unique violation, e.g. a foreign
    key or NOT NULL failure.
    """
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    sqlstate = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    if constraint and sqlstate == "23505":
        return constraint

    # Only the first line; PostgreSQL appends a DETAIL line with the values
    message = (str(exc.orig).splitlines() or [""])[0]
    for pattern in UNIQUE_VIOLATION_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group("target")
    return None


def conflict_from_integrity_error(exc: IntegrityError) -> Optional[Conflict]:
    """
    Translate a unique violation on email or XR id into ``Conflict``.

    Any other integrity failure returns None.
    """
    target = unique_violation_target(exc)
    if target is None:
        return None

    target = target.lower()
    field = UNIQUE_ACCOUNT_FIELDS.get(target)
    if field is None:
        # Column form "table.column" or MySQL "table.constraint"
        field = UNIQUE_ACCOUNT_FIELDS.get(target.rsplit(".", 1)[-1])
    if field is None:
        return None
    return Conflict(field=field)


def as_int_id(user_id: UserId) -> Optional[int]:
    """Relational ids are integers; anything else cannot match a row."""
    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None


class SqlAccountStore(AccountStore):
    """Base class for stores backed by a SQLAlchemy engine."""

    tables: list = []

    def __init__(self, engine: Engine, settings: Settings):
        self.engine = engine
        self.settings = settings
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """Context manager for a database transaction."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError:
            # Classified and logged by the caller
            session.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error("Commit failed, rolling back: %s", str(e))
            session.rollback()
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await run_in_threadpool(func, *args)
        except OperationalError as e:
            logger.error("Account database unavailable: %s", str(e))
            raise BackendUnavailable("Account database is unavailable") from e

    def reference_ids(self, session: Session) -> tuple[int, int, int]:
        """
        Resolve status, type and rights ids by name.

        A missing reference row falls back to the configured default id
        instead of failing the sign-up.
        """
        s = self.settings
        status = (
            session.query(DBStatusUser.id)
            .filter(DBStatusUser.status == s.default_status_name)
            .first()
        )
        type_ = (
            session.query(DBTypeUser.id)
            .filter(DBTypeUser.typeuser == s.default_type_name)
            .first()
        )
        rights = (
            session.query(DBRightsUser.id)
            .filter(DBRightsUser.rights == s.default_rights_name)
            .first()
        )
        return (
            status[0] if status else s.default_status_id,
            type_[0] if type_ else s.default_type_id,
            rights[0] if rights else s.default_rights_id,
        )

    def _create_tables(self) -> None:
        Base.metadata.create_all(self.engine, tables=self.tables)

    def _ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    async def initialize(self) -> None:
        await self._run(self._create_tables)

    async def ping(self) -> None:
        await self._run(self._ping)

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._run(self._find_by_email, email)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return await self._run(self._find_by_id, user_id)

    async def find_credential(self, email: str) -> Optional[Credential]:
        return await self._run(self._find_credential, email)

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        xr_id: Optional[str] = None,
    ) -> User:
        xr_id = xr_id or generate_xr_id()
        return await self._run(self._create, name, email, password_hash, xr_id)

    def _create(self, name: str, email: str, password_hash: str, xr_id: str) -> User:
        try:
            user_id = self._insert(name, email, password_hash, xr_id)
        except IntegrityError as e:
            conflict = conflict_from_integrity_error(e)
            if conflict is None:
                logger.error("Account insert violated a constraint: %s", str(e.orig))
                raise CreationFailed("Failed to create user") from e
            logger.info("Account insert rejected, duplicate %s", conflict.field)
            raise conflict from e

        created = self._find_by_id(user_id)
        if created is None:
            raise CreationFailed("Failed to create user")
        return created

    # Implemented by each layout
    def _find_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def _find_by_id(self, user_id: UserId) -> Optional[User]:
        raise NotImplementedError

    def _find_credential(self, email: str) -> Optional[Credential]:
        raise NotImplementedError

    def _insert(self, name: str, email: str, password_hash: str, xr_id: str) -> int:
        """Insert the rows for a new account and return its id."""
        raise NotImplementedError

    def _ensure_unique(self, session: Session, email: str, xr_id: str) -> None:
        """
        Raise ``Conflict`` if the email or XR id is already taken.

        Fast path only; the unique constraints decide under concurrency.
        """
        raise NotImplementedError
