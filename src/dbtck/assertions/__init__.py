"""Assertion helpers with platform-independent string comparison."""

from dbtck.assertions.checks import (
    assert_equals_safe,
    assert_equals_verbose,
    check_throwable,
    format_stack_trace,
    quote_pattern,
)
from dbtck.assertions.folding import NL, SafeString, fold, unfold
from dbtck.assertions.literal import to_literal

__all__ = [
    "NL",
    "SafeString",
    "assert_equals_safe",
    "assert_equals_verbose",
    "check_throwable",
    "fold",
    "format_stack_trace",
    "quote_pattern",
    "to_literal",
    "unfold",
]
