"""SQLite tester: the default, needs no server."""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from dbtck.config.resolver import Property
from dbtck.core.exceptions import ConfigError, TesterError
from dbtck.core.logging import get_logger
from dbtck.testers.base import Flavor, Tester

if TYPE_CHECKING:
    from dbtck.context import TestContext

logger = get_logger(__name__)

DEFAULT_URL = "sqlite:///:memory:"


def catalog_path(catalog_url: str) -> Path:
    """Convert a catalog URL (``file:`` URL or plain path) to a path."""
    if catalog_url.startswith("file:"):
        return Path(url2pathname(urlparse(catalog_url).path))
    return Path(catalog_url).expanduser()


class SQLiteTester(Tester):
    """Tester for the standard library ``sqlite3`` driver.

    The database comes from ``DBTCK_CONNECT_URL`` (an in-memory database when
    unset). If ``DBTCK_CATALOG_URL`` is set, the SQL script it names is run on
    every new connection, which is how an in-memory database gets its test
    schema and data.
    """

    def __init__(self, test_context: "TestContext"):
        self.test_context = test_context
        settings = test_context.settings
        connect_url = settings.get(Property.CONNECT_URL.path) or None
        self.catalog_url: Optional[str] = settings.get(Property.CATALOG_URL.path) or None

        if connect_url is None and self.catalog_url is None:
            raise ConfigError(
                f"SQLite tester needs {Property.CONNECT_URL.path} "
                f"or {Property.CATALOG_URL.path}"
            )
        self.url = connect_url or DEFAULT_URL
        try:
            parsed = make_url(self.url)
        except ArgumentError as e:
            raise ConfigError(f"Invalid SQLite URL '{self.url}': {e}") from e
        if parsed.get_backend_name() != "sqlite":
            raise ConfigError(f"Not a SQLite URL: '{self.url}'")
        self.database = parsed.database or ":memory:"

    def get_test_context(self) -> "TestContext":
        return self.test_context

    def create_connection(self) -> sqlite3.Connection:
        """Open a connection and load the catalog into it.

        Raises:
            TesterError: If the catalog cannot be read or fails to load
        """
        script = self._read_catalog()
        conn = sqlite3.connect(self.database, check_same_thread=False)
        if script is not None:
            try:
                conn.executescript(script)
            except sqlite3.Error as e:
                conn.close()
                raise TesterError(f"Failed to load catalog {self.catalog_url}: {e}") from e
            logger.debug(f"Loaded catalog {self.catalog_url} into {self.database}")
        return conn

    def create_connection_with_user_password(self) -> sqlite3.Connection:
        # SQLite has no authentication
        return self.create_connection()

    def _read_catalog(self) -> Optional[str]:
        if self.catalog_url is None:
            return None
        path = catalog_path(self.catalog_url)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise TesterError(f"Catalog not found: {self.catalog_url}") from e

    def get_driver_url_prefix(self) -> str:
        return "sqlite://"

    def get_driver_class_name(self) -> str:
        return "sqlite3"

    def get_url(self) -> str:
        return self.url

    def get_flavor(self) -> Flavor:
        return Flavor.SQLITE
