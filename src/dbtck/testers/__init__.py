"""Testers: pluggable handles on the backend under test."""

from dbtck.testers.base import DelegatingTester, Flavor, Tester, connection
from dbtck.testers.factory import (
    TESTER_REGISTRY,
    apply_tester_defaults,
    available_testers,
    create_tester,
    load_tester_class,
    register_tester,
)
from dbtck.testers.pooling import PoolingTester
from dbtck.testers.postgresql import PostgreSQLTester, RemotePostgreSQLTester
from dbtck.testers.sqlite import SQLiteTester
from dbtck.testers.wrappers import Wrapper, unwrap_connection, unwrap_cursor

__all__ = [
    "DelegatingTester",
    "Flavor",
    "PoolingTester",
    "PostgreSQLTester",
    "RemotePostgreSQLTester",
    "SQLiteTester",
    "TESTER_REGISTRY",
    "Tester",
    "Wrapper",
    "apply_tester_defaults",
    "available_testers",
    "connection",
    "create_tester",
    "load_tester_class",
    "register_tester",
    "unwrap_connection",
    "unwrap_cursor",
]
