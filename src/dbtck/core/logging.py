"""Logging configuration for dbtck.

This module provides centralized logging configuration using loguru.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Global logger configuration
_configured = False
# Ids of the handlers added by configure_logging; other handlers are left alone
_handler_ids: list[int] = []


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format: Optional[str] = None
) -> None:
    """Configure logging for dbtck.

    Level and file default to ``DBTCK_LOGGING_LEVEL`` / ``DBTCK_LOGGING_FILE``.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging
        format: Optional custom format string
    """
    global _configured

    if _configured:
        return
    _configured = True

    from dbtck.config.models import LoggingSettings

    env = LoggingSettings()
    level = (level or env.level).upper()
    log_file = log_file or env.file

    if format is None:
        format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )

    _handler_ids.append(logger.add(
        sys.stderr,
        format=format,
        level="WARNING",
        colorize=True,
        filter="dbtck",
    ))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        _handler_ids.append(logger.add(
            log_file,
            format=format,
            level=level,
            rotation="10 MB",
            retention="7 days",
            enqueue=True,
        ))
        # Pool checkout/invalidation events land in the same file
        intercept_standard_logging("sqlalchemy.pool")


def get_logger(name: str) -> "logger":
    """Get a logger instance for the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    if not _configured:
        configure_logging()

    # Loguru uses a single logger instance, but we can bind context
    return logger.bind(name=name)


def intercept_standard_logging(*names: str) -> None:
    """Redirect standard library loggers into loguru.

    SQLAlchemy reports pool checkouts and invalidations through ``logging``;
    calling this with ``"sqlalchemy.pool"`` routes them to the same sinks.

    Args:
        names: Logger names to intercept. All loggers when empty.
    """

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame and frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    if not names:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
        return

    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


__all__ = ["logger", "get_logger", "configure_logging", "intercept_standard_logging"]
