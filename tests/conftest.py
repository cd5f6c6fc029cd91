"""
Global test fixtures for XR Auth.

This module provides shared fixtures for all tests including:
- Environment pinned to mock mode with a cheap bcrypt cost
- Account stores for every backend (memory, SQLite, mongomock)
- Test user factories
- FastAPI test clients
"""

import os
import sys
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

# Must be set before xr_auth.config is imported anywhere
os.environ["ACCOUNT_BACKEND"] = "memory"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("DATABASE_URL", None)
os.environ.pop("MONGO_URI", None)


# =============================================================================
# Settings
# =============================================================================

@pytest.fixture
def settings():
    """The cached application settings used by the code under test."""
    from xr_auth.config import get_settings
    return get_settings()


# =============================================================================
# Account Store Fixtures
# =============================================================================

@pytest.fixture
def memory_store():
    """A fresh in-memory account store."""
    from xr_auth.stores.memory import InMemoryAccountStore
    return InMemoryAccountStore()


@pytest.fixture
def sqlite_engine(tmp_path):
    """
    A file-backed SQLite engine.

    A file is used instead of ``:memory:`` because store work runs on
    thread pool workers, each with its own connection.
    """
    from sqlalchemy import create_engine

    engine = create_engine(
        f"sqlite:///{tmp_path / 'auth.db'}",
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()


@pytest.fixture
def fk_sqlite_engine(tmp_path):
    """A file-backed SQLite engine that enforces foreign keys."""
    from sqlalchemy import create_engine, event

    engine = create_engine(
        f"sqlite:///{tmp_path / 'auth_fk.db'}",
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    yield engine
    engine.dispose()


@pytest_asyncio.fixture
async def two_table_store(sqlite_engine, settings):
    """Two-table relational store with its schema created."""
    from xr_auth.stores.two_table import TwoTableAccountStore

    store = TwoTableAccountStore(sqlite_engine, settings)
    await store.initialize()
    yield store


@pytest_asyncio.fixture
async def single_table_store(sqlite_engine, settings):
    """Single-table relational store with its schema created."""
    from xr_auth.stores.single_table import SingleTableAccountStore

    store = SingleTableAccountStore(sqlite_engine, settings)
    await store.initialize()
    yield store


@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide mock auth_db database."""
    yield mock_async_mongo_client["auth_db"]


@pytest_asyncio.fixture
async def mongo_store(mock_auth_db, settings):
    """Document store over mongomock with unique indexes created."""
    from xr_auth.stores.mongo import MongoAccountStore

    store = MongoAccountStore(mock_auth_db, settings)
    await store.initialize()
    yield store


@pytest.fixture(params=["memory_store", "two_table_store", "single_table_store", "mongo_store"])
def any_store(request):
    """Parametrized fixture yielding each account store in turn."""
    return request.getfixturevalue(request.param)


@pytest.fixture(params=["two_table_store", "single_table_store"])
def sql_store(request):
    """Parametrized fixture yielding each relational account store in turn."""
    return request.getfixturevalue(request.param)


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for sign-up."""
    return {
        "name": "Ann",
        "email": "ann@example.com",
        "password": "secret1",
    }


@pytest.fixture
def other_user_data() -> dict:
    """A second, distinct user."""
    return {
        "name": "Bob",
        "email": "bob@example.com",
        "password": "hunter22",
    }


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app():
    """
    Create FastAPI app for testing.

    The lifespan builds an in-memory store because ACCOUNT_BACKEND is
    pinned to ``memory`` above.
    """
    from xr_auth.main import app
    return app


@pytest.fixture
def client(app, memory_store) -> Generator:
    """
    Create a TestClient whose routes use a fresh in-memory store.
    """
    from xr_auth.dependencies.auth import get_account_store

    app.dependency_overrides[get_account_store] = lambda: memory_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
