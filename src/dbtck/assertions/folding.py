"""Conversion between "\\n" line endings and the platform's line separator."""

import os
from typing import Optional

#: Platform line separator: CR+LF on Windows, LF elsewhere.
NL = os.linesep


class SafeString:
    """A string whose line endings are platform line separators.

    Only ``fold`` creates these, so an unfolded expectation cannot be
    compared against platform output by accident.
    """

    __slots__ = ("_s",)

    def __init__(self, s: str):
        self._s = s

    @property
    def s(self) -> str:
        return self._s

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeString):
            return self._s == other._s
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._s)

    def __repr__(self) -> str:
        return f"SafeString({self._s!r})"


def fold(string: Optional[str]) -> Optional[SafeString]:
    """Convert a string constant into platform-specific line endings.

    Args:
        string: String where line endings are represented as linefeed "\\n"

    Returns:
        SafeString where all linefeeds have been converted to the platform
        separator, or None if ``string`` is None
    """
    if string is None:
        return None
    if NL != "\n":
        string = string.replace("\n", NL)
    return SafeString(string)


def unfold(string: Optional[str]) -> Optional[str]:
    """Reverse the effect of ``fold``.

    Args:
        string: String with platform-specific line endings

    Returns:
        String where line endings are represented as linefeed "\\n"
    """
    if string is None:
        return None
    if NL != "\n":
        string = string.replace(NL, "\n")
    return string
