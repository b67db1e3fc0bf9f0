# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``flowcraft verify``: confirm configuration and workflow are in place."""

from __future__ import annotations

import typer

from ...config.models import ConfigError, validate_config
from ...config.sources import search_config, source_for
from ...generator import workflow_path
from ..options import global_options
from ..shared import CLIError


def verify_command(ctx: typer.Context) -> None:
    """Verify that flowcraft is properly set up."""

    options = global_options(ctx)
    logger = options.logger()

    if options.config is not None:
        candidate = options.config if options.config.is_absolute() else options.root / options.config
        source = source_for(candidate)
        found = source if source.exists() else None
    else:
        found = search_config(options.root)
    if found is None:
        logger.warn('No configuration file found. Run "flowcraft init" to get started.')
        raise typer.Exit(code=1)
    logger.ok(f"Found configuration at: {found.path}")

    try:
        config = validate_config(found.load())
    except ConfigError as exc:
        logger.abort(CLIError(f"Verification failed: {exc}"))
    logger.ok("Configuration is valid!")

    target = workflow_path(config, root=options.root)
    if target.is_file():
        logger.ok("GitHub Actions workflows exist!")
    else:
        logger.warn('GitHub Actions workflows not found. Run "flowcraft generate" to create them.')


def register(app: typer.Typer) -> None:
    """Register the ``verify`` command on ``app``."""

    app.command(name="verify")(verify_command)


__all__ = ["register", "verify_command"]
