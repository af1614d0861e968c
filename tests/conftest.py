"""Pytest configuration and fixtures."""

import shutil
import tempfile
from pathlib import Path

import pytest

from dbtck.config.resolver import Settings, reset_settings
from dbtck.context import TestContext

CATALOG_SQL = """
CREATE TABLE sales (id INTEGER PRIMARY KEY, store TEXT, amount REAL);
INSERT INTO sales (store, amount) VALUES ('Portland', 10.5);
INSERT INTO sales (store, amount) VALUES ('Seattle', 20.0);
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path).resolve()
    shutil.rmtree(temp_path)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Keep DBTCK_ variables and cached state from leaking between tests."""
    import os

    for key in list(os.environ):
        if key.startswith("DBTCK_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    TestContext.discard()
    reset_settings()


@pytest.fixture
def catalog_file(temp_dir):
    """SQL script that builds a small sales table."""
    path = temp_dir / "catalog.sql"
    path.write_text(CATALOG_SQL)
    return path


@pytest.fixture
def sqlite_settings(catalog_file):
    """Settings selecting an in-memory SQLite database seeded from the catalog."""
    return Settings(
        {
            "DBTCK_HELPER_CLASS_NAME": "sqlite",
            "DBTCK_CATALOG_URL": str(catalog_file),
        }
    )
