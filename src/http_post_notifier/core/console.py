"""Build console output with colored prefixes.

The build console is the job log the operator reads after a build. Every
line written by the notifier is kept in order so callers can inspect or
persist it; when echo is on, lines are also printed with a prefix:

- [httppost HH:MM:SS] cyan - notifier messages
- errors in red, skipped-step notices in yellow
"""

from __future__ import annotations

import traceback
from datetime import datetime

# ANSI color codes
CYAN = "\033[36m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"


def _prefix() -> str:
    """Generate notifier prefix [httppost] with timestamp."""
    timestamp = datetime.now().strftime("%H:%M:%S")
    return f"{CYAN}{BOLD}[httppost {timestamp}]{RESET}"


class BuildConsole:
    """Line-oriented build log.

    Attributes:
        lines: Every line written so far, without color codes.
        echo: Whether lines are also printed to stdout.
    """

    def __init__(self, echo: bool = False) -> None:
        self.lines: list[str] = []
        self.echo = echo

    def _emit(self, message: str, color: str = "") -> None:
        for line in message.splitlines() or [""]:
            self.lines.append(line)
            if self.echo:
                if color:
                    print(f"{_prefix()} {color}{line}{RESET}", flush=True)
                else:
                    print(f"{_prefix()} {line}", flush=True)

    def println(self, message: str) -> None:
        """Write a plain line."""
        self._emit(message)

    def success(self, message: str) -> None:
        """Write a success line (green)."""
        self._emit(message, GREEN)

    def warning(self, message: str) -> None:
        """Write a warning line (yellow)."""
        self._emit(message, YELLOW)

    def error(self, message: str) -> None:
        """Write an error line (red)."""
        self._emit(message, RED)

    def detail(self, message: str) -> None:
        """Write a secondary line (dim)."""
        self._emit(message, DIM)

    def print_exception(self, exc: BaseException) -> None:
        """Write the exception's traceback, like a stack trace in a job log."""
        text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self._emit(text.rstrip("\n"), RED)

    @property
    def text(self) -> str:
        """The whole log as a single string."""
        return "\n".join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)
