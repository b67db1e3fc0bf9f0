# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for console status helpers."""

from __future__ import annotations

import pytest

from flowcraft.cli.shared import build_cli_logger
from flowcraft.logging import emoji, fail, info, ok, section, warn


def test_emoji_toggle() -> None:
    assert emoji("✅ ", True) == "✅ "
    assert emoji("✅ ", False) == ""


def test_status_lines_without_emoji(capsys: pytest.CaptureFixture[str]) -> None:
    info("starting", use_emoji=False, use_color=False)
    ok("done", use_emoji=False, use_color=False)
    warn("careful", use_emoji=False, use_color=False)
    fail("broken", use_emoji=False, use_color=False)

    assert capsys.readouterr().out.splitlines() == ["starting", "done", "careful", "broken"]


def test_status_lines_with_emoji(capsys: pytest.CaptureFixture[str]) -> None:
    ok("done", use_emoji=True, use_color=False)

    assert capsys.readouterr().out.strip() == "✅ done"


def test_cli_logger_debug_respects_verbosity(capsys: pytest.CaptureFixture[str]) -> None:
    build_cli_logger(emoji=False, debug=False).debug("hidden")
    build_cli_logger(emoji=False, debug=True, no_color=True).debug("shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "[debug] shown" in out


def test_section_without_color(capsys: pytest.CaptureFixture[str]) -> None:
    section("Workflow", use_color=False)

    assert capsys.readouterr().out == "\n--- Workflow ---\n"


def test_cli_logger_section_honours_no_color(capsys: pytest.CaptureFixture[str]) -> None:
    logger = build_cli_logger(emoji=False, no_color=True)

    logger.section("Dry run")

    assert logger.use_color is False
    assert capsys.readouterr().out == "\n--- Dry run ---\n"
