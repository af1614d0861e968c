"""Reader for Java-style ``.properties`` files."""

from pathlib import Path
from typing import Iterator

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"


def _logical_lines(text: str) -> Iterator[str]:
    """Join physical lines ending in an odd number of backslashes."""
    pending = None
    for raw in text.splitlines():
        line = raw.lstrip(_WHITESPACE) if pending is not None else raw
        if pending is None and line.lstrip(_WHITESPACE)[:1] in ("#", "!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = (pending or "") + line[:-1]
            continue
        yield (pending or "") + line
        pending = None
    if pending is not None:
        yield pending


def _unescape(s: str) -> str:
    out = []
    i = 0
    while i < len(s):
        c = s[i]
        if c != "\\" or i + 1 == len(s):
            out.append(c)
            i += 1
            continue
        nxt = s[i + 1]
        if nxt == "u" and i + 6 <= len(s):
            try:
                out.append(chr(int(s[i + 2:i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    line = line.lstrip(_WHITESPACE)
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest[:1] and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """Parse the contents of a ``.properties`` file.

    Supports ``#`` and ``!`` comments, ``=``, ``:`` or whitespace between key
    and value, backslash line continuations and the ``\\t \\n \\r \\f
    \\uXXXX`` escapes. When a key repeats, the last value wins.

    Args:
        text: File contents

    Returns:
        Mapping of keys to values, in file order
    """
    entries: dict[str, str] = {}
    for line in _logical_lines(text):
        if not line.strip(_WHITESPACE):
            continue
        key, value = _split_entry(line)
        entries[key] = value
    return entries


def load_properties(path: Path) -> dict[str, str]:
    """Read and parse a ``.properties`` file.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not UTF-8
    """
    return parse_properties(Path(path).read_text(encoding="utf-8"))
