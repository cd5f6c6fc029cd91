"""
Authentication request/response schemas.

Request fields are optional on purpose: presence and format are checked by
the credential validator so every failure has the same response shape.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from xr_auth.models.user import User, UserId


class SignUpRequest(BaseModel):
    """Sign-up request body."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="Password (min 6 characters)")
    xr_id: Optional[str] = Field(
        None,
        alias="xrId",
        description="External id, generated when omitted",
    )


class SignInRequest(BaseModel):
    """Sign-in request body."""
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


class PublicUser(BaseModel):
    """User projection returned to clients (never includes the hash)."""
    model_config = ConfigDict(populate_by_name=True)

    id: UserId = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User email")
    xr_id: str = Field(..., alias="xrId", description="External XR id")

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(id=user.id, name=user.name, email=user.email, xr_id=user.xr_id)


class AuthResult(BaseModel):
    """Outcome of a successful sign-up or sign-in."""
    user: PublicUser
    token: str = Field(..., description="Signed JWT access token")


class AuthResponse(AuthResult):
    """Envelope returned by /signup and /signin."""
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Envelope returned on failure."""
    success: bool = False
    error: str
