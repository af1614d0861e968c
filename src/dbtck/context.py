"""Context for TCK tests.

A ``TestContext`` owns the resolved settings and the tester built from them.
Each thread gets its own context, created on first use of
``TestContext.instance()``; a suite that runs against explicit settings uses
``TestContext.scoped()`` instead.
"""

import threading
from collections.abc import Generator
from contextlib import contextmanager
from typing import Optional

from dbtck.config.resolver import Settings, get_settings
from dbtck.core.logging import get_logger
from dbtck.testers.base import Tester
from dbtck.testers.factory import apply_tester_defaults, create_tester

logger = get_logger(__name__)

_thread_state = threading.local()


class TestContext:
    """Settings plus the tester that determines which backend to test."""

    # Not a test class, despite the name
    __test__ = False

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize test context.

        Args:
            settings: Settings to use; defaults to the process-wide resolved
                settings

        Raises:
            ConfigError: If the tester cannot be created
        """
        if settings is None:
            settings = get_settings()
        self._settings = apply_tester_defaults(settings)
        self._tester = create_tester(self)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def tester(self) -> Tester:
        return self._tester

    def get_properties(self) -> Settings:
        return self._settings

    def get_tester(self) -> Tester:
        """Return this context's tester."""
        return self._tester

    def close(self) -> None:
        """Release the tester's resources, such as its connection pool."""
        self._tester.close()

    @classmethod
    def instance(cls) -> "TestContext":
        """Return the current thread's context, creating it on first use."""
        context = getattr(_thread_state, "context", None)
        if context is None:
            context = cls()
            _thread_state.context = context
            logger.debug(f"Created test context for thread {threading.current_thread().name}")
        return context

    @classmethod
    def discard(cls) -> None:
        """Drop and close the current thread's context, if any."""
        context = getattr(_thread_state, "context", None)
        if context is not None:
            _thread_state.context = None
            context.close()

    @classmethod
    @contextmanager
    def scoped(cls, settings: Settings) -> Generator["TestContext", None, None]:
        """Install a context built from ``settings`` for the current thread.

        The previous context, if any, is restored on exit and the scoped one
        is closed.

        Args:
            settings: Settings, in the same form as ``test.properties``

        Yields:
            The installed context
        """
        context = cls(settings)
        previous = getattr(_thread_state, "context", None)
        _thread_state.context = context
        try:
            yield context
        finally:
            _thread_state.context = previous
            context.close()
