# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring global options and commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from .. import __version__
from .commands import register_commands
from .options import (
    CONFIG_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    FORCE_OPTION,
    NO_COLOR_OPTION,
    ROOT_OPTION,
    VERBOSE_OPTION,
    GlobalOptions,
)
from .typer_ext import create_typer

PACKAGE_LOGGER = logging.getLogger("flowcraft")

app = create_typer(
    name="flowcraft",
    help="Generate and maintain trunk-based CI/CD workflows.",
    no_args_is_help=True,
    add_completion=False,
)


def _ensure_verbose_logger() -> None:
    """Stream debug records from library modules to stderr."""

    if getattr(PACKAGE_LOGGER, "_flowcraft_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    PACKAGE_LOGGER.addHandler(handler)
    PACKAGE_LOGGER.setLevel(logging.DEBUG)
    PACKAGE_LOGGER.propagate = False
    setattr(PACKAGE_LOGGER, "_flowcraft_verbose_configured", True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"flowcraft {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    root: ROOT_OPTION = None,
    config: CONFIG_OPTION = None,
    verbose: VERBOSE_OPTION = False,
    force: FORCE_OPTION = False,
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = True,
    no_color: NO_COLOR_OPTION = False,
    show_version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the flowcraft version and exit."),
    ] = False,
) -> None:
    """CLI tool for managing trunk-based development workflows."""

    if verbose:
        _ensure_verbose_logger()
    ctx.obj = GlobalOptions(
        root=(root or Path.cwd()).resolve(),
        config=config,
        verbose=verbose,
        force=force,
        dry_run=dry_run,
        emoji=emoji,
        no_color=no_color,
    )


register_commands(app)

__all__ = ["app"]
