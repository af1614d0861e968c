"""Unit tests for the SQLite tester."""

import sqlite3
from unittest.mock import Mock

import pytest

from dbtck.config.resolver import Settings
from dbtck.core.exceptions import ConfigError, TesterError
from dbtck.testers.base import Flavor, connection
from dbtck.testers.sqlite import SQLiteTester, catalog_path
from dbtck.testers.wrappers import Wrapper


def make_context(values):
    return Mock(settings=Settings(values))


class TestSQLiteTester:
    """Test SQLiteTester."""

    def test_requires_connect_or_catalog_url(self):
        with pytest.raises(ConfigError, match="DBTCK_CONNECT_URL"):
            SQLiteTester(make_context({}))

    def test_rejects_other_backends(self):
        with pytest.raises(ConfigError, match="Not a SQLite URL"):
            SQLiteTester(make_context({"DBTCK_CONNECT_URL": "postgresql://h/db"}))

    def test_rejects_malformed_url(self):
        with pytest.raises(ConfigError, match="Invalid SQLite URL"):
            SQLiteTester(make_context({"DBTCK_CONNECT_URL": "not a url"}))

    def test_metadata(self, catalog_file):
        context = make_context({"DBTCK_CATALOG_URL": str(catalog_file)})
        tester = SQLiteTester(context)

        assert tester.get_test_context() is context
        assert tester.get_url() == "sqlite:///:memory:"
        assert tester.get_driver_url_prefix() == "sqlite://"
        assert tester.get_driver_class_name() == "sqlite3"
        assert tester.get_flavor() is Flavor.SQLITE
        assert tester.get_wrapper() is Wrapper.NONE

    def test_catalog_loaded_into_memory_database(self, catalog_file):
        tester = SQLiteTester(make_context({"DBTCK_CATALOG_URL": str(catalog_file)}))

        with connection(tester) as conn:
            rows = conn.execute("SELECT store, amount FROM sales ORDER BY id").fetchall()

        assert rows == [("Portland", 10.5), ("Seattle", 20.0)]

    def test_each_connection_gets_fresh_catalog(self, catalog_file):
        tester = SQLiteTester(make_context({"DBTCK_CATALOG_URL": str(catalog_file)}))

        with connection(tester) as conn:
            conn.execute("DELETE FROM sales")
        with connection(tester) as conn:
            count = conn.execute("SELECT COUNT(*) FROM sales").fetchone()[0]

        assert count == 2

    def test_file_database_without_catalog(self, temp_dir):
        db = temp_dir / "test.db"
        with sqlite3.connect(db) as setup:
            setup.execute("CREATE TABLE t (x INTEGER)")
        setup.close()
        tester = SQLiteTester(make_context({"DBTCK_CONNECT_URL": f"sqlite:///{db}"}))

        with connection(tester) as conn:
            tables = conn.execute("SELECT name FROM sqlite_master").fetchall()

        assert tester.database == str(db)
        assert tables == [("t",)]

    def test_user_password_connection(self, catalog_file):
        tester = SQLiteTester(make_context({"DBTCK_CATALOG_URL": str(catalog_file)}))

        conn = tester.create_connection_with_user_password()
        try:
            assert isinstance(conn, sqlite3.Connection)
        finally:
            conn.close()

    def test_missing_catalog(self):
        tester = SQLiteTester(make_context({"DBTCK_CATALOG_URL": "dummy_catalog_url"}))

        with pytest.raises(TesterError, match="Catalog not found: dummy_catalog_url"):
            tester.create_connection()

    def test_invalid_catalog(self, temp_dir):
        bad = temp_dir / "bad.sql"
        bad.write_text("CREATE TABLE;")
        tester = SQLiteTester(make_context({"DBTCK_CATALOG_URL": str(bad)}))

        with pytest.raises(TesterError, match="Failed to load catalog"):
            tester.create_connection()


class TestCatalogPath:
    """Test catalog_path."""

    def test_plain_path(self, temp_dir):
        assert catalog_path(str(temp_dir / "c.sql")) == temp_dir / "c.sql"

    def test_file_url(self, temp_dir):
        path = temp_dir / "c.sql"

        assert catalog_path(path.as_uri()) == path
