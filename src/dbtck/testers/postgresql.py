"""PostgreSQL testers using psycopg2."""

from typing import TYPE_CHECKING, Any, Optional

import psycopg2
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

from dbtck.config.resolver import Property
from dbtck.core.exceptions import ConfigError, TesterError
from dbtck.testers.base import Flavor, Tester

if TYPE_CHECKING:
    from dbtck.context import TestContext


def _parse_url(url: str, prop: Property) -> URL:
    try:
        parsed = make_url(url)
    except ArgumentError as e:
        raise ConfigError(f"Invalid {prop.path} '{url}': {e}") from e
    if parsed.get_backend_name() != "postgresql":
        raise ConfigError(f"{prop.path} is not a PostgreSQL URL: '{url}'")
    return parsed


class PostgreSQLTester(Tester):
    """Tester for a PostgreSQL database named by ``DBTCK_CONNECT_URL``."""

    url_property = Property.CONNECT_URL

    def __init__(self, test_context: "TestContext"):
        self.test_context = test_context
        settings = test_context.settings
        url = settings.get(self.url_property.path)
        if not url:
            raise ConfigError(f"{type(self).__name__} needs {self.url_property.path}")
        self._url = _parse_url(url, self.url_property)
        self.username: Optional[str] = self._url.username
        self.password: Optional[str] = self._url.password

    def get_test_context(self) -> "TestContext":
        return self.test_context

    def _dsn(self) -> str:
        # libpq accepts postgresql:// URIs but not SQLAlchemy driver suffixes
        return self._url.set(
            drivername="postgresql", username=None, password=None
        ).render_as_string(hide_password=False)

    def _connect(self, **kwargs: Any) -> Any:
        try:
            return psycopg2.connect(self._dsn(), **kwargs)
        except psycopg2.Error as e:
            raise TesterError(f"Cannot connect to {self.get_url()}: {e}") from e

    def create_connection(self) -> Any:
        kwargs = {}
        if self.username is not None:
            kwargs["user"] = self.username
        if self.password is not None:
            kwargs["password"] = self.password
        return self._connect(**kwargs)

    def create_connection_with_user_password(self) -> Any:
        return self._connect(user=self.username, password=self.password)

    def get_driver_url_prefix(self) -> str:
        return "postgresql://"

    def get_driver_class_name(self) -> str:
        return "psycopg2"

    def get_url(self) -> str:
        """Return the database URL with the password masked."""
        return self._url.render_as_string(hide_password=True)

    def get_flavor(self) -> Flavor:
        return Flavor.POSTGRESQL


class RemotePostgreSQLTester(PostgreSQLTester):
    """Tester for a remote server, with credentials supplied separately.

    Reads ``DBTCK_REMOTE_URL``, ``DBTCK_REMOTE_USERNAME`` and
    ``DBTCK_REMOTE_PASSWORD``; the explicit credentials take precedence over
    any embedded in the URL.
    """

    url_property = Property.REMOTE_URL

    def __init__(self, test_context: "TestContext"):
        super().__init__(test_context)
        settings = test_context.settings
        self.username = settings.get(Property.REMOTE_USERNAME.path) or self.username
        self.password = settings.get(Property.REMOTE_PASSWORD.path) or self.password

    def get_flavor(self) -> Flavor:
        return Flavor.REMOTE_POSTGRESQL
