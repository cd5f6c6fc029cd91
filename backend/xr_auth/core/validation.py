"""
Credential validation performed before any I/O.
"""
import re
from typing import Optional

from xr_auth.core.exceptions import InvalidInput

MIN_PASSWORD_LENGTH = 6

# local-part@domain.tld, no whitespace; matched with fullmatch
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def validate_sign_up(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> None:
    """
    Validate sign-up fields. The first failing rule wins.

    Raises:
        InvalidInput: If a field is missing, the password is too short,
            or the email is malformed
    """
    if not name or not email or not password:
        raise InvalidInput("Name, email, and password are required")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if not EMAIL_PATTERN.fullmatch(email):
        raise InvalidInput("Invalid email format")


def validate_sign_in(email: Optional[str], password: Optional[str]) -> None:
    """Check presence only; sign-in does not re-validate the email format."""
    if not email or not password:
        raise InvalidInput("Email and password are required")
