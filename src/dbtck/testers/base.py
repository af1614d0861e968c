"""Tester interface: how the TCK reaches a specific backend."""

from abc import ABC, abstractmethod
from collections.abc import Generator
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING, Any

from dbtck.testers.wrappers import Wrapper

if TYPE_CHECKING:
    from dbtck.context import TestContext


class Flavor(Enum):
    """Family of backend a tester connects to.

    Lets the suite disable tests or expect slightly different results when
    backends differ in capabilities.
    """

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    REMOTE_POSTGRESQL = "remote-postgresql"


class Tester(ABC):
    """Abstracts the information about a driver and database instance.

    This allows the same test suite to be used for several DB-API backends.
    Implementations must have a constructor that takes a single
    ``TestContext``.
    """

    @abstractmethod
    def get_test_context(self) -> "TestContext":
        """Return the test context."""
        pass

    @abstractmethod
    def create_connection(self) -> Any:
        """Create a DB-API connection."""
        pass

    @abstractmethod
    def create_connection_with_user_password(self) -> Any:
        """Create a connection passing user name and password explicitly."""
        pass

    @abstractmethod
    def get_driver_url_prefix(self) -> str:
        """Return the prefix of URLs recognized by the driver, e.g. "sqlite://"."""
        pass

    @abstractmethod
    def get_driver_class_name(self) -> str:
        """Return the name of the DB-API module, e.g. "sqlite3"."""
        pass

    @abstractmethod
    def get_url(self) -> str:
        """Return the URL of the test database."""
        pass

    @abstractmethod
    def get_flavor(self) -> Flavor:
        """Return the family of backend this tester connects to."""
        pass

    def get_wrapper(self) -> Wrapper:
        """Return the wrapper, if any, around this tester's connections."""
        return Wrapper.NONE

    def close(self) -> None:
        """Release resources held by the tester."""
        pass


class DelegatingTester(Tester):
    """Tester that delegates every call to an underlying tester.

    Subclasses override only the calls whose behavior they change.
    """

    def __init__(self, tester: Tester):
        """Initialize delegating tester.

        Args:
            tester: Underlying tester to which calls are delegated
        """
        self.tester = tester

    def get_test_context(self) -> "TestContext":
        return self.tester.get_test_context()

    def create_connection(self) -> Any:
        return self.tester.create_connection()

    def create_connection_with_user_password(self) -> Any:
        return self.tester.create_connection_with_user_password()

    def get_driver_url_prefix(self) -> str:
        return self.tester.get_driver_url_prefix()

    def get_driver_class_name(self) -> str:
        return self.tester.get_driver_class_name()

    def get_url(self) -> str:
        return self.tester.get_url()

    def get_flavor(self) -> Flavor:
        return self.tester.get_flavor()

    def get_wrapper(self) -> Wrapper:
        return self.tester.get_wrapper()

    def close(self) -> None:
        self.tester.close()


@contextmanager
def connection(tester: Tester) -> Generator[Any, None, None]:
    """Acquire a connection from a tester and close it on exit.

    For pooled testers closing returns the connection to the pool.

    Args:
        tester: Tester to draw the connection from

    Yields:
        DB-API connection
    """
    conn = tester.create_connection()
    try:
        yield conn
    finally:
        conn.close()
