"""
Account store over the ``users`` + ``accessuser`` layout.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from xr_auth.core.exceptions import Conflict
from xr_auth.database.tables import TWO_TABLE_LAYOUT, DBAccessUser, DBUser
from xr_auth.models.user import Credential, User, UserId
from xr_auth.stores.sql import SqlAccountStore, as_int_id


def _to_user(db_user: DBUser, access: DBAccessUser) -> User:
    return User(
        id=db_user.id,
        name=db_user.name,
        email=access.email,
        password_hash=access.password,
        xr_id=db_user.xr,
        created_at=db_user.timedate,
        status_id=db_user.status,
        type_id=db_user.type,
        rights_id=db_user.rights,
    )


class TwoTableAccountStore(SqlAccountStore):
    """
    Identity lives in ``users``, email and password hash in ``accessuser``.

    Credentials are returned without the user row, so sign-in performs a
    second lookup by ``userid``.
    """

    backend_name = "two_table"
    tables = TWO_TABLE_LAYOUT

    def _joined(self, session: Session):
        return session.query(DBUser, DBAccessUser).join(
            DBAccessUser, DBAccessUser.userid == DBUser.id
        )

    def _find_by_email(self, email: str) -> Optional[User]:
        with self.transaction() as session:
            row = self._joined(session).filter(DBAccessUser.email == email).first()
            return _to_user(*row) if row else None

    def _find_by_id(self, user_id: UserId) -> Optional[User]:
        key = as_int_id(user_id)
        if key is None:
            return None
        with self.transaction() as session:
            row = self._joined(session).filter(DBUser.id == key).first()
            return _to_user(*row) if row else None

    def _find_credential(self, email: str) -> Optional[Credential]:
        with self.transaction() as session:
            access = (
                session.query(DBAccessUser)
                .filter(DBAccessUser.email == email)
                .first()
            )
            if access is None:
                return None
            return Credential(
                user_id=access.userid,
                email=access.email,
                password_hash=access.password,
            )

    def _ensure_unique(self, session: Session, email: str, xr_id: str) -> None:
        taken = (
            session.query(DBAccessUser.id)
            .filter(DBAccessUser.email == email)
            .first()
        )
        if taken:
            raise Conflict(field="email")
        if session.query(DBUser.id).filter(DBUser.xr == xr_id).first():
            raise Conflict(field="xr_id")

    def _insert(self, name: str, email: str, password_hash: str, xr_id: str) -> int:
        with self.transaction() as session:
            self._ensure_unique(session, email, xr_id)

            status_id, type_id, rights_id = self.reference_ids(session)

            db_user = DBUser(
                name=name,
                xr=xr_id,
                type=type_id,
                status=status_id,
                rights=rights_id,
                timedate=datetime.now(timezone.utc),
            )
            session.add(db_user)
            session.flush()

            session.add(
                DBAccessUser(userid=db_user.id, email=email, password=password_hash)
            )
            session.flush()
            return db_user.id
