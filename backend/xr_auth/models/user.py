"""
User and credential models shared by every account store.
"""
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

UserId = Union[int, str]


class User(BaseModel):
    """
    Identity record as returned by an account store.

    Relational and in-memory stores use integer ids; the document store
    uses the ObjectId as a string.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: UserId = Field(..., description="Opaque unique user id")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique email address, case-sensitive")
    password_hash: Optional[str] = Field(
        None,
        description="Bcrypt hash, absent for accounts without a password",
    )
    xr_id: str = Field(..., description="Globally unique external identifier")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Account creation timestamp",
    )

    # Reference data links, populated by relational stores
    status_id: Optional[int] = None
    type_id: Optional[int] = None
    rights_id: Optional[int] = None


class Credential(BaseModel):
    """
    Email and password hash used at sign-in.

    Stores that keep credentials on the user record attach ``user``; stores
    with a separate access table leave it unset so the caller reads the user
    row in a second lookup.
    """
    user_id: UserId
    email: str
    password_hash: Optional[str] = None
    user: Optional[User] = None
