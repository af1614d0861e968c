"""Render strings as Python literals that can be pasted into a test."""

import re
from typing import Optional

from dbtck.assertions import folding

_INDENT = " " * 16
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
# Tab and line breaks have their own rules
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def to_literal(s: Optional[str]) -> str:
    """Convert a string (which may contain quotes and newlines) into a literal.

    For example::

        string with "quotes" split
        across lines

    becomes::

        fold(
                        "string with \\"quotes\\" split\\n"
                        "across lines")

    Multi-line values are wrapped in ``fold(...)`` so that the pasted
    expectation matches on any platform.

    Args:
        s: String to render

    Returns:
        Source text of a literal
    """
    if s is None:
        return "None"
    nl = folding.NL
    continuation = '\\n"' + nl + _INDENT + '"'

    s = s.replace("\\", "\\\\")
    s = s.replace('"', '\\"')
    s = _LINE_BREAK.sub(lambda m: continuation, s)
    s = s.replace("\t", "\\t")
    s = _CONTROL.sub(lambda m: f"\\x{ord(m.group()):02x}", s)
    s = '"' + s + '"'

    spurious = nl + _INDENT + '""'
    if s.endswith(spurious):
        s = s[:-len(spurious)]
    if continuation in s:
        s = "fold(" + nl + _INDENT + s + ")"
    return s
