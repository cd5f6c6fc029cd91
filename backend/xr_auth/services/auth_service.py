"""
Authentication service for sign-up and sign-in.
"""
import logging
from typing import Optional

from xr_auth.core.exceptions import Conflict, InvalidCredentials, UserNotFound
from xr_auth.core.security import (
    create_access_token,
    hash_password_async,
    verify_password_async,
)
from xr_auth.core.validation import validate_sign_in, validate_sign_up
from xr_auth.models.user import User
from xr_auth.schemas.auth import AuthResult, PublicUser
from xr_auth.stores.base import AccountStore

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, store: AccountStore):
        """Initialize with the account store selected at startup."""
        self.store = store

    @staticmethod
    def _result(user: User) -> AuthResult:
        token = create_access_token(user_id=user.id, email=user.email, xr_id=user.xr_id)
        return AuthResult(user=PublicUser.from_user(user), token=token)

    async def sign_up(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        xr_id: Optional[str] = None,
    ) -> AuthResult:
        """
        Register a new user.

        The email pre-check only spares the hashing cost for obvious
        duplicates; the store's ``Conflict`` is the authoritative answer.

        Args:
            name: Display name
            email: Email address (must be unique)
            password: Plain text password (min 6 characters)
            xr_id: Optional external id, generated by the store if omitted

        Returns:
            AuthResult with the public user and a signed token

        Raises:
            InvalidInput: If validation fails
            Conflict: If the email or XR id already exists
            CreationFailed: If the store cannot read the new user back
        """
        validate_sign_up(name, email, password)

        if await self.store.find_by_email(email) is not None:
            logger.info("Sign-up rejected, email already registered")
            raise Conflict(field="email")

        password_hash = await hash_password_async(password)

        try:
            user = await self.store.create(name, email, password_hash, xr_id or None)
        except Conflict as e:
            logger.info("Sign-up rejected, duplicate %s", e.field or "account")
            raise

        logger.info("User %s created via %s store", user.id, self.store.backend_name)
        return self._result(user)

    async def sign_in(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Authenticate a user and issue a JWT token.

        Unknown email and wrong password raise the same error.

        Raises:
            InvalidInput: If email or password is missing
            InvalidCredentials: If the credentials do not match an account
            UserNotFound: If the credential points at a missing user row
        """
        validate_sign_in(email, password)

        credential = await self.store.find_credential(email)
        if credential is None:
            raise InvalidCredentials("Invalid credentials")

        if not credential.password_hash:
            logger.warning("Sign-in attempt on account %s without a password", credential.user_id)
            raise InvalidCredentials("Account is not password-enabled")

        if not await verify_password_async(password, credential.password_hash):
            raise InvalidCredentials("Invalid credentials")

        user = credential.user
        if user is None:
            user = await self.store.find_by_id(credential.user_id)
            if user is None:
                logger.error("Credential for user %s has no user row", credential.user_id)
                raise UserNotFound("User data not found")

        logger.info("User %s signed in", user.id)
        return self._result(user)
