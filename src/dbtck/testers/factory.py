"""Factory for the tester that determines which backend to test.

Testers are looked up by name in a registry. Names that are not registered
are treated as import paths (``package.module:Class`` or
``package.module.Class``), so a driver can ship its own tester without
changes here.
"""
import importlib
from typing import TYPE_CHECKING

from dbtck.config.models import PoolConfig
from dbtck.config.resolver import Property, Settings
from dbtck.core.exceptions import ConfigError
from dbtck.core.logging import get_logger
from dbtck.testers.base import Tester
from dbtck.testers.pooling import PoolingTester
from dbtck.testers.postgresql import PostgreSQLTester, RemotePostgreSQLTester
from dbtck.testers.sqlite import SQLiteTester
from dbtck.testers.wrappers import Wrapper

if TYPE_CHECKING:
    from dbtck.context import TestContext

logger = get_logger(__name__)

DEFAULT_TESTER = "sqlite"
PLACEHOLDER_CATALOG_URL = "dummy_catalog_url"

# Registry of available testers
TESTER_REGISTRY: dict[str, type[Tester]] = {
    "sqlite": SQLiteTester,
    "postgresql": PostgreSQLTester,
    "remote-postgresql": RemotePostgreSQLTester,
}


def register_tester(name: str, tester_class: type) -> None:
    """Register a tester under a short name.

    Args:
        name: Name used in ``DBTCK_HELPER_CLASS_NAME``
        tester_class: Tester subclass taking a TestContext
    """
    if not (isinstance(tester_class, type) and issubclass(tester_class, Tester)):
        raise ValueError(f"Tester class must subclass Tester: {tester_class!r}")

    TESTER_REGISTRY[name] = tester_class
    logger.info(f"Registered tester: {name}")


def available_testers() -> list[str]:
    """Get list of registered tester names."""
    return list(TESTER_REGISTRY.keys())


def apply_tester_defaults(settings: Settings) -> Settings:
    """Fill in settings the default tester needs to be constructed.

    When no tester is named, the default SQLite tester is used, and it needs a
    connect URL or a catalog URL. If neither is set, a placeholder catalog URL
    lets it construct; connecting will fail until a real one is configured.

    Args:
        settings: Resolved settings

    Returns:
        ``settings`` itself, or a copy with the placeholder catalog URL
    """
    if settings.get(Property.HELPER_CLASS_NAME.path):
        return settings
    if Property.CATALOG_URL.path in settings:
        return settings
    if settings.get(Property.CONNECT_URL.path):
        return settings
    return settings.with_overrides(
        {Property.CATALOG_URL: PLACEHOLDER_CATALOG_URL}, source="tester defaults"
    )


def load_tester_class(name: str) -> type[Tester]:
    """Find a tester class by registry name or import path.

    Raises:
        ConfigError: If the class cannot be found or is not a Tester
    """
    if name in TESTER_REGISTRY:
        return TESTER_REGISTRY[name]

    if ":" in name:
        module_name, _, attr = name.partition(":")
    else:
        module_name, _, attr = name.rpartition(".")
    if not module_name or not attr:
        raise ConfigError(
            f"Unknown tester '{name}'. "
            f"Registered testers: {available_testers()}"
        )

    try:
        module = importlib.import_module(module_name)
        tester_class = getattr(module, attr)
    except Exception as e:
        # Import runs the module, so any error it raises is a loading failure
        raise ConfigError(f"Cannot load tester '{name}': {e}") from e

    if not (isinstance(tester_class, type) and issubclass(tester_class, Tester)):
        raise ConfigError(f"'{name}' is not a Tester subclass")
    return tester_class


def create_tester(test_context: "TestContext") -> Tester:
    """Create the tester described by a context's settings.

    Args:
        test_context: Context that will own the tester

    Returns:
        Tester, wrapped according to ``DBTCK_WRAPPER``

    Raises:
        ConfigError: If the tester cannot be created or the wrapper is unknown
    """
    settings = test_context.settings
    name = settings.get(Property.HELPER_CLASS_NAME.path) or DEFAULT_TESTER

    tester_class = load_tester_class(name)
    try:
        tester = tester_class(test_context)
    except ConfigError:
        raise
    except Exception as e:
        raise ConfigError(f"Cannot instantiate tester '{name}': {e}") from e

    # Parse before using the tester so a bad value fails fast
    wrapper = Wrapper.parse(settings.get(Property.WRAPPER.path))
    if wrapper is Wrapper.POOLING:
        pool_config = PoolConfig.from_settings(settings)
        tester = PoolingTester(tester, pool_config)

    logger.info(
        f"Created {type(tester).__name__} for {tester.get_url()} "
        f"(flavor={tester.get_flavor().value}, wrapper={wrapper.name})"
    )
    return tester
