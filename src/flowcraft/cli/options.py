# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared option declarations and the global options carried on the context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ..config.loader import LoadedConfig, load_config
from .shared import CLILogger, build_cli_logger

ROOT_OPTION = Annotated[Path | None, typer.Option("--root", "-r", help="Project root (defaults to the current directory).")]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Configuration file (searched upward from the root when omitted)."),
]
VERBOSE_OPTION = Annotated[bool, typer.Option("--verbose", "-v", help="Print debug details.")]
FORCE_OPTION = Annotated[bool, typer.Option("--force", "-f", help="Overwrite files and skip change detection.")]
DRY_RUN_OPTION = Annotated[bool, typer.Option("--dry-run", help="Show what would change without writing files.")]
EMOJI_OPTION = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in output.")]
NO_COLOR_OPTION = Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")]


@dataclass(slots=True)
class GlobalOptions:
    """Options given before the command name and shared by every command."""

    root: Path
    config: Path | None = None
    verbose: bool = False
    force: bool = False
    dry_run: bool = False
    emoji: bool = True
    no_color: bool = False

    def logger(self) -> CLILogger:
        """Return a CLI logger honouring the emoji, colour and verbosity flags."""

        return build_cli_logger(emoji=self.emoji, debug=self.verbose, no_color=self.no_color)

    def load(self) -> LoadedConfig:
        """Load the configuration selected by ``--config`` or discovery.

        Raises:
            ConfigError: If no configuration is found or it is invalid.
        """

        return load_config(self.config, root=self.root)


def global_options(ctx: typer.Context) -> GlobalOptions:
    """Return the :class:`GlobalOptions` stored by the application callback."""

    options = ctx.find_object(GlobalOptions)
    if options is None:
        options = GlobalOptions(root=Path.cwd())
        ctx.obj = options
    return options


__all__ = [
    "CONFIG_OPTION",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "FORCE_OPTION",
    "GlobalOptions",
    "NO_COLOR_OPTION",
    "ROOT_OPTION",
    "VERBOSE_OPTION",
    "global_options",
]
