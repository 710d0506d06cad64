"""
Reader and writer for flat ``key=value`` properties files.

Follows the java.util.Properties line format, which is what Gradle sees when a
build script loads key.properties:

- ``#`` and ``!`` start a comment line
- a key ends at the first unescaped ``=``, ``:`` or whitespace
- a trailing odd number of backslashes continues the line
- ``\\t \\n \\r \\f \\uXXXX`` escapes are decoded, any other escaped char is kept
- files are read as ISO-8859-1, like ``Properties.load(InputStream)``
"""

import re
import string
from pathlib import Path
from typing import Mapping, Optional

from droidsign.core.errors import PropertiesError


PROPERTIES_ENCODING = "iso-8859-1"

_WHITESPACE = " \t\f"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_REVERSE_ESCAPES = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f", "\\": "\\\\"}


def _logical_lines(text: str):
    """Yield logical lines with comments dropped and continuations joined."""
    pending: Optional[str] = None

    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE)

        if pending is None and (not line or line[0] in "#!"):
            continue

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = (pending or "") + line[:-1]
            continue

        yield (pending or "") + line
        pending = None

    if pending:
        yield pending


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    chars = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "\\":
            chars.append(char)
            index += 1
            continue

        index += 1
        if index >= len(text):
            break
        char = text[index]

        if char == "u":
            digits = text[index + 1:index + 5]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise PropertiesError(f"Malformed \\uXXXX escape: \\u{digits}")
            chars.append(chr(int(digits, 16)))
            index += 5
            continue

        chars.append(_ESCAPES.get(char, char))
        index += 1

    decoded = "".join(chars)
    try:
        # surrogate pair escapes become one code point
        return decoded.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError:
        return decoded


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text into a dict. Later duplicates win."""
    properties = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        properties[_unescape(raw_key)] = _unescape(raw_value)
    return properties


def load_properties(path: Path, encoding: str = PROPERTIES_ENCODING) -> dict[str, str]:
    """Read and parse a properties file."""
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding)
    except OSError as e:
        raise PropertiesError(f"Could not read {path}: {e}") from e
    return parse_properties(text)


def _escape(text: str, is_key: bool) -> str:
    out = []
    for index, char in enumerate(text):
        if char in _REVERSE_ESCAPES:
            out.append(_REVERSE_ESCAPES[char])
        elif char == " " and (is_key or index == 0):
            out.append("\\ ")
        elif char in "=:#!":
            out.append("\\" + char)
        elif ord(char) < 0x20 or ord(char) > 0xFF:
            units = char.encode("utf-16-be")
            for offset in range(0, len(units), 2):
                out.append(f"\\u{int.from_bytes(units[offset:offset + 2], 'big'):04X}")
        else:
            out.append(char)
    return "".join(out)


def dump_properties(properties: Mapping[str, str], comments: Optional[str] = None) -> str:
    """Render a mapping as properties text, one ``key=value`` per line."""
    lines = []
    if comments:
        lines.extend(f"# {line}" for line in _LINE_BREAK.split(comments))
    for key, value in properties.items():
        lines.append(f"{_escape(key, is_key=True)}={_escape(str(value), is_key=False)}")
    return "\n".join(lines) + "\n"


def write_properties(
    path: Path,
    properties: Mapping[str, str],
    comments: Optional[str] = None,
) -> Path:
    """Write a properties file readable by both droidsign and Gradle."""
    path = Path(path)
    path.write_text(dump_properties(properties, comments), encoding=PROPERTIES_ENCODING)
    return path
