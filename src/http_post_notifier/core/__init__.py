"""Core module - build facts, console and configuration storage."""

from http_post_notifier.core import console
from http_post_notifier.core.build import BuildOutcome, BuildResult
from http_post_notifier.core.config_loader import (
    ConfigFileError,
    get_config,
    get_config_file_path,
    save_config_to_file,
)
from http_post_notifier.core.console import BuildConsole

__all__ = [
    "BuildConsole",
    "BuildOutcome",
    "BuildResult",
    "ConfigFileError",
    "console",
    "get_config",
    "get_config_file_path",
    "save_config_to_file",
]
