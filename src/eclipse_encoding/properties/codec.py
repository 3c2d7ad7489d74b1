"""
Low-level functions for reading and writing the "properties" text format.

Eclipse stores project preferences as Java-style properties files: one
key=value pair per line, ISO-8859-1 bytes, with any character outside
printable ASCII written as a \\uXXXX escape.

Important: these functions deal with text only. File access lives in
storage.prefs_file.
"""

import logging
from typing import Dict, Mapping

logger = logging.getLogger(__name__)

FILE_CHARSET = "iso-8859-1"
LINE_SEPARATOR = "\n"

_HEX_DIGITS = "0123456789ABCDEF"
_WHITESPACE = " \t\f"
_KEY_TERMINATORS = "=:"
_SPECIAL_CHARS = "=:#!"
_CONTROL_ESCAPES = {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}
_CONTROL_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class PropertiesFormatError(ValueError):
    """Raised when properties text contains a malformed escape sequence."""


def _escape(text: str, *, escape_space: bool) -> str:
    """
    Escapes a key or value for writing.

    Keys escape every space; values escape a leading space only, so that the
    parser does not swallow it as separator whitespace.
    """
    out: list[str] = []
    for index, char in enumerate(text):
        code = ord(char)
        if char == " ":
            if index == 0 or escape_space:
                out.append("\\ ")
            else:
                out.append(" ")
        elif char == "\\":
            out.append("\\\\")
        elif char in _CONTROL_ESCAPES:
            out.append("\\" + _CONTROL_ESCAPES[char])
        elif char in _SPECIAL_CHARS:
            out.append("\\" + char)
        elif 0x20 <= code <= 0x7E:
            out.append(char)
        elif code > 0xFFFF:
            # Characters above the BMP are written as a UTF-16 surrogate pair
            code -= 0x10000
            out.append(_unicode_escape(0xD800 + (code >> 10)))
            out.append(_unicode_escape(0xDC00 + (code & 0x3FF)))
        else:
            out.append(_unicode_escape(code))
    return "".join(out)


def _unicode_escape(code: int) -> str:
    return "\\u" + "".join(
        _HEX_DIGITS[(code >> shift) & 0xF] for shift in (12, 8, 4, 0)
    )


def escape_key(key: str) -> str:
    """Escapes a property key (spaces are always escaped)."""
    return _escape(key, escape_space=True)


def escape_value(value: str) -> str:
    """Escapes a property value (only a leading space is escaped)."""
    return _escape(value, escape_space=False)


def format_properties(entries: Mapping[str, str], sort_keys: bool = True) -> str:
    """
    Formats entries as properties text.

    No timestamp comment is written, so the same entries always produce the
    same text.

    Args:
        entries: Key/value pairs to write.
        sort_keys: Write entries ordered by key (default) or in mapping order.

    Returns:
        Properties text, one entry per line, each line ending with "\\n".
    """
    keys = sorted(entries) if sort_keys else list(entries)
    lines = [f"{escape_key(key)}={escape_value(entries[key])}" for key in keys]
    if not lines:
        return ""
    return LINE_SEPARATOR.join(lines) + LINE_SEPARATOR


def _logical_lines(text: str) -> list[str]:
    """
    Splits text into logical lines.

    Comment and blank lines are dropped. A line ending in an odd number of
    backslashes continues on the next line, whose leading whitespace is skipped.
    """
    physical = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    logical: list[str] = []
    pending = ""
    continuing = False
    for raw in physical:
        line = raw.lstrip(_WHITESPACE)
        if not continuing and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continuing = True
            continue
        logical.append(pending + line)
        pending = ""
        continuing = False
    if continuing:
        logical.append(pending)
    return logical


def _split_key_value(line: str) -> tuple[str, str]:
    """Splits a logical line at the first unescaped separator."""
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _KEY_TERMINATORS or char in _WHITESPACE:
            break
        index += 1
    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def unescape(text: str) -> str:
    """
    Decodes backslash escapes in a key or value.

    Raises:
        PropertiesFormatError: If a \\u escape is not followed by four hex digits.
    """
    out: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        index += 1
        if char != "\\" or index >= length:
            if char != "\\":
                out.append(char)
            continue
        char = text[index]
        index += 1
        if char == "u":
            digits = text[index : index + 4]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise PropertiesFormatError(
                    f"Malformed \\uxxxx encoding: {text[index - 2 : index + 4]!r}"
                )
            out.append(chr(int(digits, 16)))
            index += 4
        else:
            out.append(_CONTROL_UNESCAPES.get(char, char))
    decoded = "".join(out)
    # Join any surrogate pairs produced by \uD8xx\uDCxx escapes
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parses properties text into an insertion-ordered dict.

    Later duplicates of a key replace earlier ones, as in Java's Properties.

    Args:
        text: Properties text (already decoded from bytes).

    Returns:
        Dict of unescaped key -> unescaped value.

    Raises:
        PropertiesFormatError: On malformed escapes.
    """
    entries: Dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        entries[unescape(raw_key)] = unescape(raw_value)
    logger.debug(f"Parsed {len(entries)} properties entries")
    return entries


def read_properties_bytes(data: bytes) -> Dict[str, str]:
    """Decodes ISO-8859-1 bytes and parses them as properties."""
    return parse_properties(data.decode(FILE_CHARSET))


def properties_to_bytes(text: str) -> bytes:
    """Encodes formatted properties text as ISO-8859-1 bytes."""
    return text.encode(FILE_CHARSET)
