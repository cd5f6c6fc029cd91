"""
Error taxonomy for sign-up and sign-in.

Every error carries the message shown to the client and the HTTP status the
router answers with.
"""
from typing import Optional


class AuthError(Exception):
    """Base class for authentication failures."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(AuthError):
    """Missing or malformed request fields."""

    status_code = 400


class Conflict(AuthError):
    """Email or XR id already belongs to another account."""

    status_code = 409

    def __init__(self, message: str = "User already exists", field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidCredentials(AuthError):
    """Unknown email or wrong password. The two cases are never told apart."""

    status_code = 401


class CreationFailed(AuthError):
    """The new account could not be read back after insert."""

    status_code = 500


class UserNotFound(AuthError):
    """A credential record points at a missing user row."""

    status_code = 500


class BackendUnavailable(AuthError):
    """No usable account store is configured or reachable."""

    status_code = 503
