"""Notifier configuration model with Pydantic validation.

The operator sets the endpoint URL and an optional block of extra headers
once; every notification reads them. Both values are validated when the
configuration is built, so a bad URL or header line is rejected at save time
and never reaches the send path.

An empty URL is a valid, unconfigured state: the build step skips sending
when it sees one. Saving through the CLI additionally requires a URL (see
``check_url``).

Example:
    >>> config = NotifierConfig(
    ...     url="https://talk.example.com/api/send",
    ...     headers="Authorization: Bearer abc",
    ... )
    >>> config.header_items
    [('Authorization', 'Bearer abc')]
    >>> check_url("ftp://example.com")
    'URL must start with http:// or https://'
"""

from __future__ import annotations

import ipaddress
import re
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from http_post_notifier.notifier.headers import parse_headers, validate_headers

# Characters RFC 3986 never allows unescaped in a URI
ILLEGAL_URL_CHARS = frozenset('<>"{}|\\^`')
BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
HOST_LABEL = re.compile(r"^(?!-)[A-Za-z0-9_-]{1,63}(?<!-)$")


# =============================================================================
# Form-style Checks
# =============================================================================


def check_url(value: str | None) -> str | None:
    """Validate an endpoint URL the way the configuration form does.

    Args:
        value: The URL as entered by the operator.

    Returns:
        None if the URL is acceptable, otherwise an error message.
    """
    if not value:
        return "URL must not be empty"

    if not value.startswith(("http://", "https://")):
        return "URL must start with http:// or https://"

    if any(ch.isspace() for ch in value):
        return f"Illegal whitespace in URL: {value!r}"

    for i, ch in enumerate(value):
        if ch in ILLEGAL_URL_CHARS or not " " < ch <= "~":
            return f"Illegal character {ch!r} at index {i} in URL: {value}"

    match = BAD_PERCENT_ESCAPE.search(value)
    if match:
        return f"Malformed escape pair at index {match.start()} in URL: {value}"

    try:
        parsed = httpx.URL(value)
    except httpx.InvalidURL as e:
        return str(e)

    if not parsed.host:
        return f"URL has no host: {value}"
    if not _is_valid_host(parsed.raw_host.decode("ascii")):
        return f"Invalid host in URL: {value}"
    return None


def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        labels = host.removesuffix(".").split(".")
        return all(HOST_LABEL.match(label) for label in labels)
    return True


def check_headers(value: str | None) -> str | None:
    """Validate a raw header block; None when every line parses."""
    return validate_headers(value)


# =============================================================================
# NotifierConfig Model
# =============================================================================


class NotifierConfig(BaseModel):
    """Operator configuration for the HTTP POST notifier.

    Instances are immutable and are passed explicitly to the build step.

    Attributes:
        url: Notification endpoint (http:// or https://). Empty means the
            notifier is not configured and sending is skipped.
        headers: Raw header block, newline-separated ``Key: Value`` lines.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str = Field(
        default="",
        description="Notification endpoint URL (must be http:// or https://).",
    )
    headers: str = Field(
        default="",
        description="Extra request headers, one 'Key: Value' per line.",
    )

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, v: Any) -> str:
        """Reject URLs that are set but not valid http(s) URIs.

        Raises:
            ValueError: If the URL is set and fails ``check_url``.
        """
        if v is None:
            return ""
        v = str(v).strip()
        if not v:
            return v
        error = check_url(v)
        if error:
            raise ValueError(error)
        return v

    @field_validator("headers", mode="before")
    @classmethod
    def validate_header_block(cls, v: Any) -> str:
        """Reject header blocks containing a malformed line.

        Raises:
            ValueError: If any line fails to parse.
        """
        if v is None:
            return ""
        v = str(v)
        error = validate_headers(v)
        if error:
            raise ValueError(error)
        return v

    @property
    def is_configured(self) -> bool:
        """Whether an endpoint URL has been set."""
        return bool(self.url)

    @property
    def header_items(self) -> list[tuple[str, str]]:
        """Parsed header pairs in configured order."""
        return parse_headers(self.headers)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NotifierConfig:
        """Create a NotifierConfig from a dictionary.

        Raises:
            ValidationError: If the data is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return self.model_dump()

    def __str__(self) -> str:
        """Return human-readable string representation."""
        if not self.is_configured:
            return "HTTP POST notifier: not configured"
        count = len(self.header_items)
        return f"HTTP POST notifier: {self.url} [{count} headers]"


__all__ = [
    "NotifierConfig",
    "check_headers",
    "check_url",
]
