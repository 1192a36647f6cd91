"""Tests for header block parsing.

Tests cover:
- Parsing well-formed blocks (LF and CRLF, trimming, colons in values)
- Rejection of lines without a colon
- Header name and value character checks
- validate_headers error reporting
"""

from __future__ import annotations

import random

import pytest

from http_post_notifier.notifier.headers import (
    HeaderParseError,
    mask_header_block,
    mask_header_value,
    parse_header_line,
    parse_headers,
    split_header_lines,
    validate_headers,
)

# =============================================================================
# Test: Well-formed Blocks
# =============================================================================


class TestParseHeaders:
    """Tests for parse_headers with valid input."""

    def test_single_header(self) -> None:
        """Test a one-line block."""
        assert parse_headers("X-Token: abc") == [("X-Token", "abc")]

    def test_trims_key_and_value(self) -> None:
        """Test that whitespace around key and value is removed."""
        assert parse_headers("  X-Token  :   abc  ") == [("X-Token", "abc")]

    def test_splits_on_first_colon_only(self) -> None:
        """Test that values may contain colons."""
        assert parse_headers("Host: example.com:8080") == [("Host", "example.com:8080")]

    def test_lf_and_crlf_line_endings(self) -> None:
        """Test both LF and CRLF separators."""
        block = "A: 1\r\nB: 2\nC: 3"

        assert parse_headers(block) == [("A", "1"), ("B", "2"), ("C", "3")]

    def test_empty_and_none_block(self) -> None:
        """Test that an empty block yields no headers."""
        assert parse_headers("") == []
        assert parse_headers(None) == []

    def test_blank_lines_ignored(self) -> None:
        """Test that blank lines and a trailing newline are skipped."""
        assert parse_headers("A: 1\n\n   \nB: 2\n") == [("A", "1"), ("B", "2")]

    def test_empty_value_allowed(self) -> None:
        """Test a header with an empty value."""
        assert parse_headers("X-Empty:") == [("X-Empty", "")]

    def test_arbitrary_count_and_order(self) -> None:
        """Test that any set of well-formed lines parses to exactly those pairs."""
        rng = random.Random(1234)
        for _ in range(20):
            count = rng.randint(1, 12)
            pairs = {f"X-Header-{i}": f"value {rng.randint(0, 999)}" for i in range(count)}
            lines = [
                f"{' ' * rng.randint(0, 3)}{k}{' ' * rng.randint(0, 2)}:  {v} "
                for k, v in pairs.items()
            ]
            rng.shuffle(lines)
            separator = rng.choice(["\n", "\r\n"])

            parsed = parse_headers(separator.join(lines))

            assert dict(parsed) == pairs
            assert len(parsed) == len(pairs)


class TestSplitHeaderLines:
    """Tests for split_header_lines."""

    def test_keeps_line_content(self) -> None:
        """Test that lines are returned untrimmed."""
        assert split_header_lines(" A: 1 \r\nB: 2") == [" A: 1 ", "B: 2"]


# =============================================================================
# Test: Malformed Lines
# =============================================================================


class TestMalformedHeaders:
    """Tests for rejection of malformed lines."""

    def test_missing_colon_raises(self) -> None:
        """Test that a line without a colon is rejected."""
        with pytest.raises(HeaderParseError, match="Unexpected header: no colon"):
            parse_headers("A: 1\nno colon")

    def test_error_carries_line(self) -> None:
        """Test that the error names the offending line."""
        with pytest.raises(HeaderParseError) as exc_info:
            parse_header_line("broken")

        assert exc_info.value.line == "broken"

    def test_parse_error_is_value_error(self) -> None:
        """Test that HeaderParseError can be handled as ValueError."""
        assert issubclass(HeaderParseError, ValueError)

    def test_empty_name_raises(self) -> None:
        """Test that a line starting with a colon is rejected."""
        with pytest.raises(HeaderParseError, match="name is empty"):
            parse_header_line(": value")

    def test_space_in_name_raises(self) -> None:
        """Test that header names cannot contain spaces."""
        with pytest.raises(HeaderParseError, match="in header name"):
            parse_header_line("X Token: abc")

    def test_non_ascii_value_raises(self) -> None:
        """Test that header values must be ASCII."""
        with pytest.raises(HeaderParseError, match="X-Name value"):
            parse_header_line("X-Name: café")

    def test_tab_in_value_allowed(self) -> None:
        """Test that tabs inside a value are accepted."""
        assert parse_header_line("X-Tab: a\tb") == ("X-Tab", "a\tb")


class TestValidateHeaders:
    """Tests for validate_headers."""

    def test_valid_block_returns_none(self) -> None:
        """Test that a valid block has no error."""
        assert validate_headers("A: 1\nB: 2") is None

    def test_empty_block_returns_none(self) -> None:
        """Test that an empty block is valid."""
        assert validate_headers("") is None

    def test_first_error_returned(self) -> None:
        """Test that the first malformed line is reported."""
        assert validate_headers("A: 1\nfirst\nsecond") == "Unexpected header: first"


class TestMasking:
    """Tests for credential masking in displayed headers."""

    @pytest.mark.parametrize("name", ["Authorization", "proxy-authorization", "COOKIE"])
    def test_credential_values_masked(self, name: str) -> None:
        """Test that credential headers are hidden regardless of case."""
        assert mask_header_value(name, "secret") == "***"

    def test_other_values_shown(self) -> None:
        """Test that ordinary headers are shown as configured."""
        assert mask_header_value("X-Team", "ios") == "ios"

    def test_mask_block(self) -> None:
        """Test that a block is rendered one normalized line per header."""
        block = "Authorization:  Bearer abc\r\nX-Team: ios\n"

        assert mask_header_block(block) == "Authorization: ***\nX-Team: ios"

    def test_mask_empty_block(self) -> None:
        """Test that an empty block stays empty."""
        assert mask_header_block("") == ""
