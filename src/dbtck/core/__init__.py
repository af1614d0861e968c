"""Core functionality for dbtck."""

from .exceptions import (
    DbtckError,
    ConfigError,
    TesterError,
    AssertionFailure,
    ComparisonFailure,
)
from .logging import (
    logger,
    get_logger,
    configure_logging,
    intercept_standard_logging,
)

__all__ = [
    # Exceptions
    'DbtckError',
    'ConfigError',
    'TesterError',
    'AssertionFailure',
    'ComparisonFailure',
    # Logging
    'logger',
    'get_logger',
    'configure_logging',
    'intercept_standard_logging',
]
