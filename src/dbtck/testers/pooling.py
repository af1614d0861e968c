"""Tester decorator that draws connections from a connection pool."""
import importlib
from typing import Any, Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from dbtck.config.models import PoolConfig
from dbtck.core.exceptions import ConfigError
from dbtck.core.logging import get_logger
from dbtck.testers.base import DelegatingTester, Tester
from dbtck.testers.wrappers import Wrapper

logger = get_logger(__name__)


class PoolingTester(DelegatingTester):
    """Multiplexes connection creation through a SQLAlchemy ``QueuePool``.

    The engine is configured from the underlying tester's URL and DB-API
    module; raw connections are still opened by the underlying tester, so
    any per-connection setup it does applies to pooled connections too.
    Connections handed out are pool proxies: closing one returns it to the
    pool, and ``unwrap_connection(Wrapper.POOLING, conn)`` reaches the
    driver connection inside.
    """

    def __init__(self, tester: Tester, config: Optional[PoolConfig] = None):
        """Initialize pooling tester.

        Args:
            tester: Tester whose connections are pooled
            config: Pool configuration

        Raises:
            ConfigError: If the driver module cannot be imported
        """
        super().__init__(tester)
        self.config = config or PoolConfig()
        self._engine: Optional[Engine] = self._create_engine()

    def _create_engine(self) -> Engine:
        driver_name = self.tester.get_driver_class_name()
        try:
            module = importlib.import_module(driver_name)
        except ImportError as e:
            raise ConfigError(f"Cannot load DB-API module '{driver_name}': {e}") from e

        engine = create_engine(
            self.tester.get_url(),
            module=module,
            creator=self.tester.create_connection,
            poolclass=QueuePool,
            pool_size=self.config.pool_size,
            max_overflow=self.config.max_overflow,
            pool_timeout=self.config.timeout,
            pool_recycle=self.config.recycle,
            pool_pre_ping=self.config.pre_ping,
        )
        logger.info(
            f"Initialized connection pool for {self.tester.get_url()} "
            f"(size={self.config.pool_size}, overflow={self.config.max_overflow})"
        )
        return engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise ConfigError("Connection pool has been closed")
        return self._engine

    def create_connection(self) -> Any:
        """Check a connection out of the pool."""
        return self.engine.raw_connection()

    def get_wrapper(self) -> Wrapper:
        return Wrapper.POOLING

    def get_pool_status(self) -> Dict[str, Any]:
        """Get current pool status."""
        pool = self.engine.pool
        return {
            'size': pool.size(),
            'checked_out': pool.checkedout(),
            'checked_in': pool.checkedin(),
            'overflow': pool.overflow(),
        }

    def close(self) -> None:
        """Dispose of the pool, then close the underlying tester."""
        if self._engine is not None:
            logger.info("Closing connection pool")
            self._engine.dispose()
            self._engine = None
        super().close()
