# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing diagnostic logging on stderr with optional colour and emoji."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Protocol

from rich.console import Console
from rich.text import Text


class LintLogger(Protocol):
    """Destination for human-readable progress and failure narration."""

    def info(self, message: str) -> None: ...

    def ok(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def fail(self, message: str) -> None: ...

    def usage(self, text: str) -> None: ...


def detect_tty() -> bool:
    """Return ``True`` when stderr appears to be backed by a terminal."""

    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


@dataclass(slots=True)
class DiagnosticLogger:
    """Render diagnostics through a Rich console bound to stderr.

    Messages are wrapped in :class:`rich.text.Text` so file paths containing
    square brackets are never parsed as markup.
    """

    console: Console
    use_emoji: bool = False
    use_color: bool = False

    def _print(self, message: str, *, style: str | None, symbol: str) -> None:
        text = Text(f"{emoji(symbol, self.use_emoji)}{message}")
        if style and self.use_color:
            text.stylize(style)
        self.console.print(text)

    def info(self, message: str) -> None:
        """Emit an informational message."""

        self._print(message, style=None, symbol="ℹ️ ")

    def ok(self, message: str) -> None:
        """Emit a success message."""

        self._print(message, style="green", symbol="✅ ")

    def warn(self, message: str) -> None:
        """Emit a warning message."""

        self._print(message, style="yellow", symbol="⚠️ ")

    def fail(self, message: str) -> None:
        """Emit an error message."""

        self._print(message, style="red", symbol="❌ ")

    def usage(self, text: str) -> None:
        """Write usage text verbatim."""

        self.console.print(Text(text.rstrip("\n")))


def build_diagnostic_logger(*, use_emoji: bool = False, no_color: bool = False) -> DiagnosticLogger:
    """Return a :class:`DiagnosticLogger` writing to the process stderr.

    Args:
        use_emoji: Whether log lines may carry emoji prefixes.
        no_color: Disable colour even when stderr is a terminal.

    Returns:
        DiagnosticLogger: Logger bound to a stderr Rich console.
    """

    color = detect_tty() and not no_color
    console = Console(
        stderr=True,
        soft_wrap=True,
        highlight=False,
        emoji=use_emoji,
        no_color=not color,
        color_system="auto" if color else None,
    )
    return DiagnosticLogger(console=console, use_emoji=use_emoji, use_color=color)


__all__ = ["DiagnosticLogger", "LintLogger", "build_diagnostic_logger", "detect_tty", "emoji"]
