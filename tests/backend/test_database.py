"""
Tests for database connections and account store selection.

These tests cover:
- Backend resolution in auto mode
- Store construction per backend
- Connection reuse and cleanup
- Index definitions for the document backend
"""

from unittest.mock import MagicMock, patch

import pytest

from xr_auth.config import Settings
from xr_auth.core.exceptions import BackendUnavailable
from xr_auth.database.databases import auth_db
from xr_auth.stores.factory import build_account_store, resolve_backend
from xr_auth.stores.memory import InMemoryAccountStore
from xr_auth.stores.mongo import MongoAccountStore
from xr_auth.stores.single_table import SingleTableAccountStore
from xr_auth.stores.two_table import TwoTableAccountStore


def make_settings(**overrides) -> Settings:
    values = {
        "account_backend": "auto",
        "database_url": None,
        "mongo_uri": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def reset_connections():
    """Drop cached clients so every test builds its own."""
    import xr_auth.database.connections as conn_module

    conn_module._mongo_client = None
    conn_module._sql_engine = None
    yield
    conn_module._mongo_client = None
    conn_module._sql_engine = None


class TestResolveBackend:
    """Tests for auto-mode backend selection."""

    def test_nothing_configured_uses_memory(self):
        assert resolve_backend(make_settings()) == "memory"

    def test_database_url_selects_two_table(self):
        settings = make_settings(database_url="sqlite://", mongo_uri="mongodb://localhost")

        assert resolve_backend(settings) == "two_table"

    def test_mongo_uri_selects_mongo(self):
        assert resolve_backend(make_settings(mongo_uri="mongodb://localhost")) == "mongo"

    def test_explicit_backend_wins(self):
        settings = make_settings(account_backend=" Single_Table ", mongo_uri="mongodb://x")

        assert resolve_backend(settings) == "single_table"


class TestBuildAccountStore:
    """Tests for build_account_store."""

    def test_memory_store_logs_mock_mode(self, caplog):
        with caplog.at_level("WARNING"):
            store = build_account_store(make_settings(account_backend="memory"))

        assert isinstance(store, InMemoryAccountStore)
        assert "MOCK MODE" in caplog.text

    @pytest.mark.parametrize(
        "backend,store_cls",
        [("two_table", TwoTableAccountStore), ("single_table", SingleTableAccountStore)],
    )
    def test_sql_stores_share_engine(self, tmp_path, backend, store_cls):
        url = f"sqlite:///{tmp_path / 'auth.db'}"

        store = build_account_store(make_settings(account_backend=backend, database_url=url))

        assert isinstance(store, store_cls)
        assert store.backend_name == backend

    def test_mongo_store_uses_configured_database(self):
        with patch("xr_auth.database.connections.AsyncIOMotorClient") as mock_client:
            mock_client.return_value = MagicMock()

            store = build_account_store(
                make_settings(mongo_uri="mongodb://test:27017", mongo_db_name="xr_accounts")
            )

        assert isinstance(store, MongoAccountStore)
        mock_client.assert_called_once_with("mongodb://test:27017")
        mock_client.return_value.__getitem__.assert_called_with("xr_accounts")

    @pytest.mark.parametrize("backend", ["two_table", "single_table"])
    def test_sql_backend_without_url_is_unavailable(self, backend):
        with pytest.raises(BackendUnavailable, match="DATABASE_URL"):
            build_account_store(make_settings(account_backend=backend))

    def test_mongo_backend_without_uri_is_unavailable(self):
        with pytest.raises(BackendUnavailable, match="MONGO_URI"):
            build_account_store(make_settings(account_backend="mongo"))

    def test_unknown_backend_is_unavailable(self):
        with pytest.raises(BackendUnavailable, match="Unknown account backend"):
            build_account_store(make_settings(account_backend="redis"))


class TestConnections:
    """Tests for connection caching and cleanup."""

    def test_get_sql_engine_reuses_engine(self, tmp_path):
        from xr_auth.database.connections import get_sql_engine

        url = f"sqlite:///{tmp_path / 'auth.db'}"

        assert get_sql_engine(url) is get_sql_engine(url)

    def test_get_mongo_client_creates_connection_once(self):
        from xr_auth.database.connections import get_mongo_client

        with patch("xr_auth.database.connections.AsyncIOMotorClient") as mock_client:
            first = get_mongo_client("mongodb://test:27017")
            second = get_mongo_client("mongodb://test:27017")

        mock_client.assert_called_once_with("mongodb://test:27017")
        assert first is second

    @pytest.mark.asyncio
    async def test_close_connections_cleans_up(self):
        """close_connections should clean up both connections."""
        import xr_auth.database.connections as conn_module
        from xr_auth.database.connections import close_connections

        mock_mongo = MagicMock()
        mock_engine = MagicMock()
        conn_module._mongo_client = mock_mongo
        conn_module._sql_engine = mock_engine

        await close_connections()

        mock_mongo.close.assert_called_once()
        mock_engine.dispose.assert_called_once()
        assert conn_module._mongo_client is None
        assert conn_module._sql_engine is None


class TestIndexDefinitions:
    """Tests for the users collection indexes."""

    def test_email_and_xr_id_are_unique(self):
        indexes = {index["name"]: index for index in auth_db.Collections.INDEXES[auth_db.Collections.USERS]}

        assert indexes["email_1"]["unique"] is True
        assert indexes["xr_id_1"]["unique"] is True

    @pytest.mark.asyncio
    async def test_indexes_created_on_users_collection(self, mock_auth_db):
        """Users collection should have unique email and xr_id indexes."""
        await auth_db.create_auth_indexes(mock_auth_db)

        indexes = await mock_auth_db.users.index_information()

        assert indexes["email_1"]["unique"] is True
        assert indexes["xr_id_1"]["unique"] is True
