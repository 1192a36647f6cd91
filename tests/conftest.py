"""Pytest configuration and fixtures for http-post-notifier tests."""

from collections.abc import Generator
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

import pytest

from http_post_notifier.core.build import BuildOutcome, BuildResult
from http_post_notifier.core.console import BuildConsole
from http_post_notifier.notifier.config import NotifierConfig

ENDPOINT_URL = "https://talk.example.com/api/send"

# =============================================================================
# Directory Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep configuration overrides from the outer environment out of tests."""
    monkeypatch.delenv("HTTP_POST_URL", raising=False)
    monkeypatch.delenv("HTTP_POST_HEADERS", raising=False)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def notifier_config() -> NotifierConfig:
    """Provide a configured notifier with two extra headers."""
    return NotifierConfig(
        url=ENDPOINT_URL,
        headers="Authorization: Bearer secret-token\nX-Team: ios",
    )


@pytest.fixture
def empty_config() -> NotifierConfig:
    """Provide an unconfigured notifier."""
    return NotifierConfig()


# =============================================================================
# Build Fixtures
# =============================================================================


@pytest.fixture
def failed_build() -> BuildOutcome:
    """Provide a failed build."""
    return BuildOutcome(
        job_name="ios-app",
        build_number=42,
        absolute_url="https://ci.example.com/job/ios-app/42/",
        result=BuildResult.FAILURE,
    )


@pytest.fixture
def finished_build() -> BuildOutcome:
    """Provide a successful build with deployment variables."""
    return BuildOutcome(
        job_name="ios-app",
        build_number=43,
        absolute_url="https://ci.example.com/job/ios-app/43/",
        result=BuildResult.SUCCESS,
        variables={
            "phase": "test",
            "scheme": "NCS-Debug",
            "branch": "develop",
            "service": "ncs",
        },
    )


@pytest.fixture
def console() -> BuildConsole:
    """Provide a non-echoing build console."""
    return BuildConsole()


# =============================================================================
# HTTP Fixtures
# =============================================================================


def _mock_response(status_code: int = 200, text: str = "", reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason_phrase = reason
    response.text = text
    return response


@pytest.fixture
def make_response():
    """Provide a factory for mock httpx responses."""
    return _mock_response


@pytest.fixture
def ok_response() -> MagicMock:
    """Provide a 200 response with a JSON body."""
    return _mock_response(200, '{"code":"success"}')


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_runner():
    """Provide a Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
