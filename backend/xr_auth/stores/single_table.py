"""
Account store over the unified ``accounts`` table.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from xr_auth.core.exceptions import Conflict
from xr_auth.database.tables import SINGLE_TABLE_LAYOUT, DBAccount
from xr_auth.models.user import Credential, User, UserId
from xr_auth.stores.sql import SqlAccountStore, as_int_id


def _to_user(account: DBAccount) -> User:
    return User(
        id=account.id,
        name=account.name,
        email=account.email,
        password_hash=account.password,
        xr_id=account.xr,
        created_at=account.created_at,
        status_id=account.status,
        type_id=account.type,
        rights_id=account.rights,
    )


class SingleTableAccountStore(SqlAccountStore):
    """Identity and credentials share one row."""

    backend_name = "single_table"
    tables = SINGLE_TABLE_LAYOUT

    def _find_by_email(self, email: str) -> Optional[User]:
        with self.transaction() as session:
            account = session.query(DBAccount).filter(DBAccount.email == email).first()
            return _to_user(account) if account else None

    def _find_by_id(self, user_id: UserId) -> Optional[User]:
        key = as_int_id(user_id)
        if key is None:
            return None
        with self.transaction() as session:
            account = session.get(DBAccount, key)
            return _to_user(account) if account else None

    def _find_credential(self, email: str) -> Optional[Credential]:
        user = self._find_by_email(email)
        if user is None:
            return None
        return Credential(
            user_id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            user=user,
        )

    def _ensure_unique(self, session: Session, email: str, xr_id: str) -> None:
        existing = (
            session.query(DBAccount.email, DBAccount.xr)
            .filter((DBAccount.email == email) | (DBAccount.xr == xr_id))
            .first()
        )
        if existing:
            field = "email" if existing.email == email else "xr_id"
            raise Conflict(field=field)

    def _insert(self, name: str, email: str, password_hash: str, xr_id: str) -> int:
        with self.transaction() as session:
            self._ensure_unique(session, email, xr_id)

            status_id, type_id, rights_id = self.reference_ids(session)

            account = DBAccount(
                name=name,
                email=email,
                password=password_hash,
                xr=xr_id,
                type=type_id,
                status=status_id,
                rights=rights_id,
                created_at=datetime.now(timezone.utc),
            )
            session.add(account)
            session.flush()
            return account.id
