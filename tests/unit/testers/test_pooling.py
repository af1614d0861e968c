"""Unit tests for the pooling tester."""

import sqlite3
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from dbtck.config.models import PoolConfig
from dbtck.config.resolver import Settings
from dbtck.core.exceptions import ConfigError
from dbtck.testers.base import Flavor, connection
from dbtck.testers.pooling import PoolingTester
from dbtck.testers.sqlite import SQLiteTester
from dbtck.testers.wrappers import Wrapper, unwrap_connection, unwrap_cursor


@pytest.fixture
def sqlite_tester(catalog_file):
    return SQLiteTester(Mock(settings=Settings({"DBTCK_CATALOG_URL": str(catalog_file)})))


@pytest.fixture
def pooling_tester(sqlite_tester):
    tester = PoolingTester(sqlite_tester, PoolConfig(pool_size=2, max_overflow=0, timeout=0.2))
    yield tester
    tester.close()


class TestPoolingTester:
    """Test PoolingTester."""

    def test_delegates_metadata(self, pooling_tester, sqlite_tester):
        assert pooling_tester.tester is sqlite_tester
        assert pooling_tester.get_url() == sqlite_tester.get_url()
        assert pooling_tester.get_driver_class_name() == "sqlite3"
        assert pooling_tester.get_driver_url_prefix() == "sqlite://"
        assert pooling_tester.get_flavor() is Flavor.SQLITE
        assert pooling_tester.get_test_context() is sqlite_tester.get_test_context()

    def test_wrapper_is_pooling(self, pooling_tester):
        assert pooling_tester.get_wrapper() is Wrapper.POOLING

    def test_pooled_connection_runs_queries(self, pooling_tester):
        """Connections are created by the underlying tester, catalog included."""
        with connection(pooling_tester) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM sales")
            assert cursor.fetchone() == (2,)
            cursor.close()

    def test_unwrap_reaches_driver_objects(self, pooling_tester):
        with connection(pooling_tester) as conn:
            assert not isinstance(conn, sqlite3.Connection)
            raw = unwrap_connection(Wrapper.POOLING, conn, sqlite3.Connection)
            cursor = conn.cursor()
            assert unwrap_cursor(Wrapper.POOLING, cursor, sqlite3.Cursor) is cursor
            cursor.close()

        assert isinstance(raw, sqlite3.Connection)

    def test_close_returns_connection_to_pool(self, pooling_tester):
        conn = pooling_tester.create_connection()
        assert pooling_tester.get_pool_status()["checked_out"] == 1

        conn.close()

        status = pooling_tester.get_pool_status()
        assert status["checked_out"] == 0
        assert status["checked_in"] == 1
        assert status["size"] == 2

    def test_returned_connection_is_reused(self, pooling_tester):
        with connection(pooling_tester) as conn:
            first = unwrap_connection(Wrapper.POOLING, conn)
        with connection(pooling_tester) as conn:
            second = unwrap_connection(Wrapper.POOLING, conn)

        assert first is second

    def test_exhausted_pool_times_out(self, pooling_tester):
        held = [pooling_tester.create_connection() for _ in range(2)]
        try:
            with pytest.raises(PoolTimeoutError):
                pooling_tester.create_connection()
        finally:
            for conn in held:
                conn.close()

    def test_close_disposes_pool(self, sqlite_tester):
        sqlite_tester.close = Mock()
        tester = PoolingTester(sqlite_tester)

        tester.close()

        sqlite_tester.close.assert_called_once_with()
        with pytest.raises(ConfigError, match="closed"):
            tester.create_connection()

    def test_close_twice(self, pooling_tester):
        pooling_tester.close()
        pooling_tester.close()

    def test_unknown_driver_module(self):
        inner = Mock()
        inner.get_driver_class_name.return_value = "no_such_dbapi_module"

        with pytest.raises(ConfigError, match="Cannot load DB-API module"):
            PoolingTester(inner)

    def test_default_config(self, sqlite_tester):
        tester = PoolingTester(sqlite_tester)
        try:
            assert tester.config == PoolConfig()
            assert tester.get_pool_status()["size"] == 5
        finally:
            tester.close()
