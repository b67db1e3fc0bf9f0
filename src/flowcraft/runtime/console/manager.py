# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for flowcraft status output."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsoleSettings:
    """Presentation flags that identify one shared console."""

    color: bool
    emoji: bool
    tty: bool

    @property
    def styled(self) -> bool:
        """Return whether ANSI styling may be emitted."""

        return self.color and self.tty

    def build(self) -> Console:
        """Return a new console honouring these settings.

        The console has no fixed ``file`` so output follows the current
        ``sys.stdout``, which keeps capture by test runners working.
        """

        return Console(
            color_system="auto" if self.styled else None,
            force_terminal=self.tty,
            no_color=not self.styled,
            emoji=self.emoji,
            soft_wrap=True,
        )


class RichConsoleManager:
    """Hand out one cached console per distinct :class:`ConsoleSettings`."""

    def __init__(self) -> None:
        self._consoles: dict[ConsoleSettings, Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for ``color`` and ``emoji`` on the current stdout.

        Args:
            color: Whether colour output is wanted.
            emoji: Whether Rich should render emoji glyphs.

        Returns:
            Console: Shared console matching the requested settings.
        """

        settings = ConsoleSettings(color=color, emoji=emoji, tty=detect_tty())
        console = self._consoles.get(settings)
        if console is None:
            console = self._consoles[settings] = settings.build()
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["ConsoleSettings", "RichConsoleManager", "detect_tty", "get_console_manager"]
