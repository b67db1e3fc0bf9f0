# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``flowcraft validate``: check the configuration file."""

from __future__ import annotations

import typer

from ...config.models import ConfigError
from ..options import global_options
from ..shared import CLIError


def validate_command(ctx: typer.Context) -> None:
    """Validate configuration file."""

    options = global_options(ctx)
    logger = options.logger()
    try:
        loaded = options.load()
    except ConfigError as exc:
        logger.abort(CLIError(f"Configuration validation failed: {exc}"))
    logger.debug(f"validated {loaded.source}")
    logger.ok("Configuration is valid!")


def register(app: typer.Typer) -> None:
    """Register the ``validate`` command on ``app``."""

    app.command(name="validate")(validate_command)


__all__ = ["register", "validate_command"]
