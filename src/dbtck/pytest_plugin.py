"""pytest plugin exposing the TCK context as fixtures.

Enabled through the ``pytest11`` entry point. Settings are resolved from
``--tck-start-dir`` (default: the pytest root directory); ``--tck-helper``
and ``--tck-wrapper`` override what the files say, so one checkout can run
against several backends::

    pytest --tck-helper=postgresql --tck-wrapper=POOLING
"""

from collections.abc import Generator
from typing import Any

import pytest

from dbtck.config.resolver import Property, Settings, resolve_settings
from dbtck.context import TestContext
from dbtck.testers.base import Flavor, Tester, connection


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("dbtck", "database compatibility kit")
    group.addoption(
        "--tck-start-dir",
        dest="tck_start_dir",
        default=None,
        help="Directory to start the test.properties search from (default: rootdir)",
    )
    group.addoption(
        "--tck-helper",
        dest="tck_helper",
        default=None,
        help="Tester to use, overriding DBTCK_HELPER_CLASS_NAME",
    )
    group.addoption(
        "--tck-wrapper",
        dest="tck_wrapper",
        default=None,
        help="Connection wrapper (NONE or POOLING), overriding DBTCK_WRAPPER",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "requires_flavor(*flavors): run only against the named backend flavors",
    )


def _resolve(config: pytest.Config) -> Settings:
    start_dir = config.getoption("tck_start_dir") or config.rootpath
    settings = resolve_settings(start_dir)
    overrides = {}
    if config.getoption("tck_helper") is not None:
        overrides[Property.HELPER_CLASS_NAME] = config.getoption("tck_helper")
    if config.getoption("tck_wrapper") is not None:
        overrides[Property.WRAPPER] = config.getoption("tck_wrapper")
    if overrides:
        settings = settings.with_overrides(overrides, source="command line")
    return settings


@pytest.fixture(scope="session")
def tck_settings(pytestconfig: pytest.Config) -> Settings:
    """Settings resolved for this test session."""
    return _resolve(pytestconfig)


@pytest.fixture(scope="session")
def tck_context(tck_settings: Settings) -> Generator[TestContext, None, None]:
    """Context for this session's worker, closed when the session ends."""
    with TestContext.scoped(tck_settings) as context:
        yield context


@pytest.fixture
def tester(tck_context: TestContext) -> Tester:
    """The tester for the backend under test."""
    return tck_context.get_tester()


@pytest.fixture
def tck_connection(tester: Tester) -> Generator[Any, None, None]:
    """A connection from the tester, closed after the test."""
    with connection(tester) as conn:
        yield conn


@pytest.fixture(autouse=True)
def _tck_flavor_marker(request: pytest.FixtureRequest) -> None:
    marker = request.node.get_closest_marker("requires_flavor")
    if marker is None:
        return
    wanted = {Flavor(name) if isinstance(name, str) else name for name in marker.args}
    flavor = request.getfixturevalue("tester").get_flavor()
    if flavor not in wanted:
        pytest.skip(f"requires flavor {sorted(f.value for f in wanted)}, backend is {flavor.value}")
