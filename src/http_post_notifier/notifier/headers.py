"""Header block parsing for notification requests.

Operators configure extra request headers as free text, one ``Key: Value``
pair per line. This module turns that block into header pairs and reports
malformed lines so they can be rejected when the configuration is saved,
never when a notification is sent.

Example:
    >>> parse_headers("Authorization: Bearer abc\\nX-Team:  ios ")
    [('Authorization', 'Bearer abc'), ('X-Team', 'ios')]
    >>> validate_headers("no colon here")
    'Unexpected header: no colon here'
"""

from __future__ import annotations

import re

# Lines are separated by LF or CRLF
LINE_SEPARATOR = re.compile(r"\r?\n")

# Header values never shown to the operator or written to the build console
MASKED_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie"})
MASK = "***"


class HeaderParseError(ValueError):
    """A header line could not be parsed.

    Attributes:
        line: The offending line as configured.
        message: Error description.
    """

    def __init__(self, message: str, line: str) -> None:
        super().__init__(message)
        self.message = message
        self.line = line


def split_header_lines(block: str | None) -> list[str]:
    """Split a header block into its non-blank lines."""
    if not block:
        return []
    return [line for line in LINE_SEPARATOR.split(block) if line.strip()]


def _check_name(name: str, line: str) -> None:
    if not name:
        raise HeaderParseError(f"Header name is empty: {line}", line)
    for i, ch in enumerate(name):
        if not "!" <= ch <= "~":
            raise HeaderParseError(
                f"Unexpected char {ord(ch):#04x} at {i} in header name: {name}", line
            )


def _check_value(name: str, value: str, line: str) -> None:
    for i, ch in enumerate(value):
        if ch != "\t" and not " " <= ch <= "~":
            raise HeaderParseError(
                f"Unexpected char {ord(ch):#04x} at {i} in {name} value: {value}", line
            )


def parse_header_line(line: str) -> tuple[str, str]:
    """Parse a single ``Key: Value`` line.

    The line is split on its first colon and both sides are trimmed, so
    values may themselves contain colons (``Host: example.com:8080``).

    Raises:
        HeaderParseError: If the line has no colon or contains characters
            that are not allowed in an HTTP header.
    """
    index = line.find(":")
    if index == -1:
        raise HeaderParseError(f"Unexpected header: {line}", line)

    name = line[:index].strip()
    value = line[index + 1 :].strip()
    _check_name(name, line)
    _check_value(name, value, line)
    return name, value


def parse_headers(block: str | None) -> list[tuple[str, str]]:
    """Parse a header block into ``(name, value)`` pairs in configured order.

    Raises:
        HeaderParseError: On the first malformed line.
    """
    return [parse_header_line(line) for line in split_header_lines(block)]


def validate_headers(block: str | None) -> str | None:
    """Validate a header block.

    Returns:
        None if every line parses, otherwise the error message for the first
        malformed line.
    """
    try:
        parse_headers(block)
    except HeaderParseError as e:
        return e.message
    return None


def mask_header_value(name: str, value: str) -> str:
    """Return the value for display, hiding credentials."""
    return MASK if name.lower() in MASKED_HEADERS else value


def mask_header_block(block: str | None) -> str:
    """Render a valid header block for display with credential values hidden."""
    return "\n".join(
        f"{name}: {mask_header_value(name, value)}" for name, value in parse_headers(block)
    )


__all__ = [
    "HeaderParseError",
    "MASK",
    "MASKED_HEADERS",
    "mask_header_block",
    "mask_header_value",
    "parse_header_line",
    "parse_headers",
    "split_header_lines",
    "validate_headers",
]
