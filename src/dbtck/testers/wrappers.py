"""Wrappers that a tester may place around connections, and how to undo them."""

from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from dbtck.core.exceptions import ConfigError

T = TypeVar("T")


class Wrapper(Enum):
    """Valid values of the ``DBTCK_WRAPPER`` setting."""

    #: Connections come straight from the driver.
    NONE = "NONE"
    #: Connections are drawn from a SQLAlchemy connection pool.
    POOLING = "POOLING"

    @classmethod
    def parse(cls, name: Optional[str]) -> "Wrapper":
        """Parse a wrapper name; empty or missing means NONE.

        Raises:
            ConfigError: If the name is not a known wrapper
        """
        if name is None or name.strip() == "":
            return cls.NONE
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ConfigError(
                f"Unknown wrapper value '{name}'. "
                f"Valid values: {[w.name for w in cls]}"
            ) from None


def _identity(obj: Any) -> Any:
    return obj


def _innermost_pooled(connection: Any) -> Any:
    # SQLAlchemy pool proxies keep the driver connection here
    return connection.dbapi_connection


_CONNECTION_UNWRAPPERS: dict[Wrapper, Callable[[Any], Any]] = {
    Wrapper.NONE: _identity,
    Wrapper.POOLING: _innermost_pooled,
}

# The pool proxies connections only; cursor() returns the driver's cursor.
_CURSOR_UNWRAPPERS: dict[Wrapper, Callable[[Any], Any]] = {
    Wrapper.NONE: _identity,
    Wrapper.POOLING: _identity,
}


def _checked(obj: Any, cls: Optional[type]) -> Any:
    if cls is not None and not isinstance(obj, cls):
        raise TypeError(
            f"Unwrapped object is a {type(obj).__name__}, not a {cls.__name__}"
        )
    return obj


def unwrap_connection(wrapper: Wrapper, connection: Any, cls: Optional[type[T]] = None) -> T:
    """Remove wrappers from a connection.

    Args:
        wrapper: Wrapper in effect, from ``Tester.get_wrapper()``
        connection: Connection obtained from the tester
        cls: Optional type the driver connection must have

    Returns:
        The driver's own connection object

    Raises:
        TypeError: If the result is not an instance of ``cls``
    """
    return _checked(_CONNECTION_UNWRAPPERS[wrapper](connection), cls)


def unwrap_cursor(wrapper: Wrapper, cursor: Any, cls: Optional[type[T]] = None) -> T:
    """Remove wrappers from a cursor.

    Args:
        wrapper: Wrapper in effect, from ``Tester.get_wrapper()``
        cursor: Cursor created from a tester's connection
        cls: Optional type the driver cursor must have

    Returns:
        The driver's own cursor object
    """
    return _checked(_CURSOR_UNWRAPPERS[wrapper](cursor), cls)
