"""Configuration Loader - operator configuration file with env var support.

This module stores the notifier configuration for the command-line host:
1. Loads configuration from `.http-post/config.json` in the working directory
2. Falls back to an unconfigured default if the file is missing
3. Merges with environment variable overrides

Each call returns a fresh immutable NotifierConfig; there is no global
configuration object.

Usage:
    from http_post_notifier.core.config_loader import get_config, save_config_to_file

    config = get_config()
    save_config_to_file(NotifierConfig(url="https://talk.example.com/api/send"))

Environment Variable Overrides:
- HTTP_POST_URL -> config.url
- HTTP_POST_HEADERS -> config.headers
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError

from http_post_notifier.notifier.config import NotifierConfig

# =============================================================================
# Constants
# =============================================================================

# Default state directory name (relative to working directory)
STATE_DIR_NAME = ".http-post"
CONFIG_FILE_NAME = "config.json"

# Environment variable mappings: (env_var_name, config_field)
ENV_VAR_MAPPINGS: list[tuple[str, str]] = [
    ("HTTP_POST_URL", "url"),
    ("HTTP_POST_HEADERS", "headers"),
]


class ConfigFileError(Exception):
    """The configuration file could not be read.

    Attributes:
        path: The configuration file path.
    """

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


# =============================================================================
# Path Utilities
# =============================================================================


def get_state_dir(working_dir: Path | None = None) -> Path:
    """Get the state directory path.

    Args:
        working_dir: Optional working directory. If None, uses cwd.
    """
    if working_dir is None:
        working_dir = Path.cwd()
    return working_dir / STATE_DIR_NAME


def get_config_file_path(working_dir: Path | None = None) -> Path:
    """Get the configuration file path."""
    return get_state_dir(working_dir) / CONFIG_FILE_NAME


def config_file_exists(working_dir: Path | None = None) -> bool:
    """Check if configuration file exists."""
    return get_config_file_path(working_dir).exists()


# =============================================================================
# File Operations
# =============================================================================


def load_config_from_file(config_path: Path) -> NotifierConfig:
    """Load configuration from a JSON file.

    Args:
        config_path: Path to the config.json file.

    Returns:
        NotifierConfig object.

    Raises:
        ConfigFileError: If the file is not valid JSON or fails validation.
    """
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigFileError(config_path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigFileError(config_path, "expected a JSON object")

    try:
        return NotifierConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigFileError(config_path, str(e)) from e


def save_config_to_file(
    config: NotifierConfig,
    config_path: Path | None = None,
    create_dir: bool = True,
) -> Path:
    """Save configuration to a JSON file.

    Args:
        config: Configuration object to save.
        config_path: Path to save to. If None, uses default location.
        create_dir: Whether to create the parent directory if missing.

    Returns:
        Path where the config was saved.
    """
    if config_path is None:
        config_path = get_config_file_path()

    if create_dir:
        config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        f.write(config.model_dump_json(indent=2))
        f.write("\n")  # Trailing newline for POSIX compliance

    return config_path


# =============================================================================
# Environment Variable Override
# =============================================================================


def apply_env_overrides(config: NotifierConfig) -> NotifierConfig:
    """Apply environment variable overrides to configuration.

    Only non-empty environment variables are applied.

    Raises:
        ValidationError: If an override is not a valid value.
    """
    config_dict = config.model_dump()

    for env_var, field_name in ENV_VAR_MAPPINGS:
        env_value = os.environ.get(env_var)
        if env_value:
            config_dict[field_name] = env_value

    return NotifierConfig.model_validate(config_dict)


def get_env_overrides() -> dict[str, str]:
    """Get all environment variable overrides that are currently set."""
    overrides = {}
    for env_var, _field in ENV_VAR_MAPPINGS:
        value = os.environ.get(env_var)
        if value:
            overrides[env_var] = value
    return overrides


# =============================================================================
# Public API
# =============================================================================


def get_config(working_dir: Path | None = None) -> NotifierConfig:
    """Load the current configuration.

    Reads `.http-post/config.json` if it exists (otherwise starts from an
    unconfigured default) and applies environment overrides.

    Args:
        working_dir: Optional working directory. If None, uses cwd.

    Raises:
        ConfigFileError: If the file exists but cannot be loaded.
        ValidationError: If an environment override is invalid.
    """
    config_path = get_config_file_path(working_dir)

    if config_path.exists():
        config = load_config_from_file(config_path)
    else:
        config = NotifierConfig()

    return apply_env_overrides(config)


__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigFileError",
    "ENV_VAR_MAPPINGS",
    "STATE_DIR_NAME",
    "apply_env_overrides",
    "config_file_exists",
    "get_config",
    "get_config_file_path",
    "get_env_overrides",
    "get_state_dir",
    "load_config_from_file",
    "save_config_to_file",
]
