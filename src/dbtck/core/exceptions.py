"""dbtck exception classes."""

from typing import Optional


class DbtckError(Exception):
    """Base exception for all dbtck errors."""
    pass


class ConfigError(DbtckError):
    """Harness configuration errors.

    Raised while building the test context: unknown wrapper, a tester that
    cannot be found or constructed, invalid pool options.
    """
    pass


class TesterError(DbtckError):
    """A tester could not reach its backend."""
    pass


class AssertionFailure(AssertionError):
    """Failure raised by the assertion helpers to abort the calling test."""
    pass


class ComparisonFailure(AssertionFailure):
    """Two strings differed.

    Carries both original strings so callers can diff them programmatically.
    """

    def __init__(
        self,
        text: str,
        expected: Optional[str],
        actual: Optional[str],
        message: Optional[str] = None,
        literal: Optional[str] = None,
    ):
        super().__init__(text)
        self._expected = expected
        self._actual = actual
        self._message = message
        self._literal = literal

    @property
    def expected(self) -> Optional[str]:
        return self._expected

    @property
    def actual(self) -> Optional[str]:
        return self._actual

    @property
    def message(self) -> Optional[str]:
        """Caller-supplied message, if any."""
        return self._message

    @property
    def literal(self) -> Optional[str]:
        """Source-literal rendering of the actual value, if requested."""
        return self._literal
