"""
dbtck - DB-API compatibility test kit

Runs one suite of tests unmodified against interchangeable database backends.
"""

try:
    from importlib.metadata import version, PackageNotFoundError
    __version__ = version("dbtck")
except PackageNotFoundError:
    # Package is not installed, use development version
    __version__ = "0.0.0+dev"


# Lazy imports keep ``import dbtck`` cheap for the pytest plugin loader
def __getattr__(name):
    """Lazy import mechanism for the public API."""
    if name == "TestContext":
        from dbtck.context import TestContext
        return TestContext

    elif name in ("Tester", "Flavor", "Wrapper", "connection"):
        from dbtck import testers
        return getattr(testers, name)

    elif name in ("fold", "unfold", "assert_equals_verbose", "check_throwable"):
        from dbtck import assertions
        return getattr(assertions, name)

    elif name in ("Settings", "Property", "get_settings", "resolve_settings"):
        from dbtck import config
        return getattr(config, name)

    elif name in ("DbtckError", "ConfigError"):
        from dbtck.core import exceptions
        return getattr(exceptions, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "TestContext",
    "Tester",
    "Flavor",
    "Wrapper",
    "connection",
    "fold",
    "unfold",
    "assert_equals_verbose",
    "check_throwable",
    "Settings",
    "Property",
    "get_settings",
    "resolve_settings",
    "DbtckError",
    "ConfigError",
    "__version__",
]
