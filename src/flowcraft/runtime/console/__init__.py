# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles used by status output."""

from __future__ import annotations

from .manager import ConsoleSettings, RichConsoleManager, detect_tty, get_console_manager

__all__ = ["ConsoleSettings", "RichConsoleManager", "detect_tty", "get_console_manager"]
