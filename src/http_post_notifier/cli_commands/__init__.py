"""CLI command modules for the HTTP POST notifier."""

from .config import register_config_commands

__all__ = [
    "register_config_commands",
]
