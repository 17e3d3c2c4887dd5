# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import cache
from typing import Literal

from rich.console import Console
from rich.rule import Rule
from rich.text import Text


def detect_tty(*, stderr: bool = False) -> bool:
    """Return ``True`` when the selected stream appears to be a terminal."""

    stream = sys.stderr if stderr else sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Provision Rich :class:`Console` instances keyed by presentation flags."""

    def __init__(self) -> None:
        self._cache: dict[tuple[bool, bool, bool, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return a console configured for ``color``, ``emoji`` and target stream.

        Args:
            color: ``True`` when ANSI colour output should be enabled.
            emoji: ``True`` when Rich should render emoji glyphs.
            stderr: ``True`` to write to standard error instead of standard output.

        Returns:
            Console: Cached or newly constructed console matching the preferences.
        """

        tty = detect_tty(stderr=stderr)
        key = (color, emoji, stderr, tty)
        if key not in self._cache:
            color_system: Literal["auto", "standard", "256", "truecolor", "windows"] | None = (
                "auto" if color and tty else None
            )
            self._cache[key] = Console(
                color_system=color_system,
                force_terminal=tty,
                no_color=not (color and tty),
                emoji=emoji,
                soft_wrap=True,
                stderr=stderr,
                highlight=False,
            )
        return self._cache[key]


@cache
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str | None, use_emoji: bool, stderr: bool = False) -> None:
    color_enabled = detect_tty(stderr=stderr)
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji, stderr=stderr)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def section(title: str, *, use_emoji: bool) -> None:
    """Render a section header to delineate console output blocks.

    Args:
        title: Section title displayed to the user.
        use_emoji: Flag indicating whether emoji output is desired.
    """

    use_color = detect_tty()
    console = get_console_manager().get(color=use_color, emoji=use_emoji)
    if use_color:
        console.print()
        console.print(Rule(Text(title)))
    else:
        console.print(Text(f"\n--- {title} ---"))


def info(msg: str, *, use_emoji: bool) -> None:
    """Emit an informational message."""

    _print_line(f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji)


def ok(msg: str, *, use_emoji: bool) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji)


def warn(msg: str, *, use_emoji: bool) -> None:
    """Emit a warning message."""

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji)


def fail(msg: str, *, use_emoji: bool) -> None:
    """Emit an error message on standard error."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, stderr=True)


@dataclass(slots=True)
class CLILogger:
    """Adapter binding emoji and debug preferences to the logging helpers."""

    use_emoji: bool
    debug_enabled: bool = False

    def info(self, message: str) -> None:
        info(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        ok(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji)

    def fail(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji)

    def section(self, title: str) -> None:
        section(title, use_emoji=self.use_emoji)

    def debug(self, message: str) -> None:
        """Emit ``message`` only when debug output was requested."""

        if self.debug_enabled:
            console = get_console_manager().get(color=detect_tty(), emoji=self.use_emoji)
            text = Text("[debug] ", style="bold cyan")
            text.append(message, style="dim")
            console.print(text)

    @property
    def console(self) -> Console:
        return get_console_manager().get(color=detect_tty(), emoji=self.use_emoji)


__all__ = [
    "CLILogger",
    "RichConsoleManager",
    "detect_tty",
    "emoji",
    "fail",
    "get_console_manager",
    "info",
    "ok",
    "section",
    "warn",
]
