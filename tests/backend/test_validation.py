"""
Tests for credential validation (xr_auth.core.validation).
"""

import pytest

from xr_auth.core.exceptions import InvalidInput
from xr_auth.core.validation import validate_sign_in, validate_sign_up


class TestValidateSignUp:
    """Rules are applied in order and the first failure wins."""

    def test_valid_input_passes(self):
        assert validate_sign_up("Ann", "ann@example.com", "secret1") is None

    @pytest.mark.parametrize(
        "name,email,password",
        [
            ("", "ann@example.com", "secret1"),
            ("Ann", None, "secret1"),
            ("Ann", "ann@example.com", ""),
            (None, None, None),
        ],
    )
    def test_missing_field_rejected(self, name, email, password):
        with pytest.raises(InvalidInput, match="Name, email, and password are required"):
            validate_sign_up(name, email, password)

    def test_five_character_password_rejected(self):
        with pytest.raises(InvalidInput, match="at least 6 characters"):
            validate_sign_up("Ann", "ann@example.com", "12345")

    def test_six_character_password_accepted(self):
        validate_sign_up("Ann", "ann@example.com", "123456")

    def test_length_checked_before_email_format(self):
        """A short password on a bad email reports the password."""
        with pytest.raises(InvalidInput, match="at least 6 characters"):
            validate_sign_up("Ann", "not-an-email", "123")

    @pytest.mark.parametrize(
        "email",
        [
            "not-an-email",
            "ann@example",
            "ann example@example.com",
            "ann@@example.com",
            "@example.com",
            "ann@example.com\n",
        ],
    )
    def test_malformed_email_rejected(self, email):
        with pytest.raises(InvalidInput, match="Invalid email format"):
            validate_sign_up("Ann", email, "secret1")

    @pytest.mark.parametrize("email", ["a@b.co", "first.last@sub.example.org", "Ann@Example.COM"])
    def test_well_formed_email_accepted(self, email):
        validate_sign_up("Ann", email, "secret1")


class TestValidateSignIn:
    """Sign-in only checks presence."""

    def test_present_fields_pass(self):
        assert validate_sign_in("ann@example.com", "x") is None

    def test_format_not_rechecked(self):
        validate_sign_in("not-an-email", "short")

    @pytest.mark.parametrize("email,password", [("", "secret1"), ("ann@example.com", None)])
    def test_missing_field_rejected(self, email, password):
        with pytest.raises(InvalidInput, match="Email and password are required"):
            validate_sign_in(email, password)
