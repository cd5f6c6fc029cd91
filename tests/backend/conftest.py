"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing the
FastAPI routes and the auth service.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Auth Service Fixtures
# =============================================================================

@pytest.fixture
def auth_service(memory_store):
    """AuthService over a fresh in-memory store."""
    from xr_auth.services.auth_service import AuthService
    return AuthService(memory_store)


@pytest.fixture
def mock_account_store():
    """
    Create a fully mocked AccountStore.

    All methods are AsyncMock, allowing you to configure return values:

        mock_account_store.find_credential.return_value = Credential(...)
    """
    store = MagicMock()
    store.backend_name = "mock"
    store.find_by_email = AsyncMock(return_value=None)
    store.find_by_id = AsyncMock(return_value=None)
    store.find_credential = AsyncMock(return_value=None)
    store.create = AsyncMock()
    store.ping = AsyncMock()
    store.initialize = AsyncMock()
    store.close = AsyncMock()
    return store


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, error_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert data["success"] is False
        assert "error" in data
        if error_contains:
            assert error_contains.lower() in data["error"].lower()
    return _assert


@pytest.fixture
def assert_auth_response():
    """Helper to assert a successful sign-up/sign-in envelope."""
    def _assert(response, status_code: int, email: str):
        assert response.status_code == status_code
        data = response.json()
        assert data["success"] is True
        assert data["token"]
        assert data["user"]["email"] == email
        assert set(data["user"]) == {"id", "name", "email", "xrId"}
        return data
    return _assert
