"""String and exception assertions for TCK tests."""

import re
import traceback
from typing import Optional, Union

from dbtck.assertions import folding
from dbtck.assertions.folding import SafeString, fold
from dbtck.assertions.literal import to_literal
from dbtck.core.exceptions import AssertionFailure, ComparisonFailure


def assert_equals_verbose(
    expected: Union[str, SafeString, None],
    actual: Optional[str],
    literal: bool = True,
    message: Optional[str] = None,
) -> None:
    """Check that an actual string matches an expected string.

    The expected string uses "\\n" line endings and is folded before the
    comparison, so expectations can be written once for every platform.

    Args:
        expected: Expected string with "\\n" line endings
        actual: Actual string returned by the test case
        literal: Whether to print the actual value as a literal on mismatch
        message: Message to print if the strings differ

    Raises:
        ComparisonFailure: If the strings differ
    """
    if not isinstance(expected, SafeString):
        expected = fold(expected)
    assert_equals_safe(expected, actual, literal, message)


def assert_equals_safe(
    safe_expected: Optional[SafeString],
    actual: Optional[str],
    literal: bool = True,
    message: Optional[str] = None,
) -> None:
    """Check that an actual string matches an already folded expected string.

    On mismatch the failure text shows both values and, if ``literal`` is
    set, the actual value as a literal that can be pasted into the test.
    That block is labelled ``Actual literal:``; harnesses in other languages
    call the same block ``Actual java:``, and the rendered literal is Python
    source here.

    Args:
        safe_expected: Expected string, line endings already folded
        actual: Actual string returned by the test case
        literal: Whether to print the actual value as a literal on mismatch
        message: Message to print if the strings differ

    Raises:
        ComparisonFailure: If the strings differ
    """
    expected = None if safe_expected is None else safe_expected.s
    if expected is None and actual is None:
        return
    if expected is not None and expected == actual:
        return

    nl = folding.NL
    text = "" if message is None else message + nl
    text += (
        "Expected:" + nl + str(expected) + nl
        + "Actual:" + nl + str(actual) + nl
    )
    rendered = None
    if literal:
        rendered = to_literal(actual)
        text += "Actual literal:" + nl + rendered + nl
    raise ComparisonFailure(text, expected, actual, message, rendered)


def format_stack_trace(exc: BaseException) -> str:
    """Format an exception and its cause chain as traceback text."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def check_throwable(exc: Optional[BaseException], pattern: str) -> None:
    """Check that an exception is not None and its trace contains a string.

    Args:
        exc: Exception raised by the code under test
        pattern: Substring to look for in the formatted trace

    Raises:
        AssertionFailure: If there is no exception or the trace does not
            contain ``pattern``
    """
    if exc is None:
        raise AssertionFailure("query did not yield an exception")
    stack_trace = format_stack_trace(exc)
    if pattern not in stack_trace:
        raise AssertionFailure(
            f"error does not match pattern '{pattern}'; error is [{stack_trace}]"
        )


def quote_pattern(s: str) -> str:
    """Quote a string so it matches literally inside a regular expression."""
    return re.escape(s)
