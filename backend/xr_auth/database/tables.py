"""
Relational schema for the SQL account stores.

Two layouts share the reference tables:

- two-table: ``users`` holds identity and reference links, ``accessuser``
  holds the email and password hash keyed by ``userid``
- single-table: ``accounts`` holds everything on one row
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class DBStatusUser(Base):  # type: ignore
    """Reference table of account statuses (e.g. ``Active``)."""

    __tablename__ = "statususer"

    id = Column(Integer, primary_key=True)
    status = Column(String(50), nullable=False)


class DBTypeUser(Base):  # type: ignore
    """Reference table of account types (e.g. ``Scribe``)."""

    __tablename__ = "typeuser"

    id = Column(Integer, primary_key=True)
    typeuser = Column(String(50), nullable=False)


class DBRightsUser(Base):  # type: ignore
    """Reference table of account rights (e.g. ``Provider``)."""

    __tablename__ = "rightsuser"

    id = Column(Integer, primary_key=True)
    rights = Column(String(50), nullable=False)


class DBUser(Base):  # type: ignore
    """
    Identity row of the two-table layout.

    The reference columns are plain indexed integers. A sign-up on a
    database whose reference tables are empty still stores the configured
    default ids.

    +----------+--------------+------+-----+----------------+
    | Field    | Type         | Null | Key | Extra          |
    +----------+--------------+------+-----+----------------+
    | id       | int          | NO   | PRI | auto_increment |
    | name     | varchar(255) | NO   |     |                |
    | xr       | varchar(100) | NO   | UNI |                |
    | type     | int          | YES  | MUL |                |
    | status   | int          | YES  | MUL |                |
    | rights   | int          | YES  | MUL |                |
    | timedate | datetime     | NO   |     |                |
    +----------+--------------+------+-----+----------------+
    """

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("xr", name="uq_users_xr"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    xr = Column(String(100), nullable=False)
    type = Column(Integer, nullable=True, index=True)
    status = Column(Integer, nullable=True, index=True)
    rights = Column(Integer, nullable=True, index=True)
    timedate = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class DBAccessUser(Base):  # type: ignore
    """Credential row of the two-table layout, one per ``users`` row."""

    __tablename__ = "accessuser"
    __table_args__ = (
        UniqueConstraint("userid", name="uq_accessuser_userid"),
        UniqueConstraint("email", name="uq_accessuser_email"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    userid = Column(ForeignKey("users.id"), nullable=False)
    email = Column(String(255), nullable=False)
    password = Column(String(255), nullable=True)


class DBAccount(Base):  # type: ignore
    """Unified row of the single-table layout."""

    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("email", name="uq_accounts_email"),
        UniqueConstraint("xr", name="uq_accounts_xr"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    password = Column(String(255), nullable=True)
    xr = Column(String(100), nullable=False)
    type = Column(Integer, nullable=True, index=True)
    status = Column(Integer, nullable=True, index=True)
    rights = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


# Unique constraints (by name, or by column as SQLite reports them) that
# mean the account already exists, mapped to the colliding field
UNIQUE_ACCOUNT_FIELDS = {
    "uq_users_xr": "xr_id",
    "uq_accessuser_email": "email",
    "uq_accounts_email": "email",
    "uq_accounts_xr": "xr_id",
    "email": "email",
    "xr": "xr_id",
}

REFERENCE_TABLES = [DBStatusUser.__table__, DBTypeUser.__table__, DBRightsUser.__table__]
TWO_TABLE_LAYOUT = REFERENCE_TABLES + [DBUser.__table__, DBAccessUser.__table__]
SINGLE_TABLE_LAYOUT = REFERENCE_TABLES + [DBAccount.__table__]
