# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``flowcraft init``: write a starter configuration file."""

from __future__ import annotations

from typing import Annotated

import typer

from ...config.loader import DEFAULT_CONFIG_NAME, default_config, render_config, write_config
from ...config.models import ConfigError, FlowcraftConfig
from ..options import global_options
from ..shared import CLIError

FORCE_HELP = "Overwrite an existing configuration file."
INTERACTIVE_HELP = "Prompt for branch names and versioning."
VERSIONING_HELP = "Enable semantic version management."


def _prompt_config(*, with_versioning: bool) -> FlowcraftConfig:
    main_branch = typer.prompt("Main branch", default="main").strip()
    flow = typer.prompt("Branch flow (comma separated, lowest first)", default=f"develop,{main_branch}")
    branches = [branch.strip() for branch in flow.split(",") if branch.strip()]
    versioning = typer.confirm("Enable version management?", default=with_versioning)
    return default_config(main_branch=main_branch, branch_flow=branches, with_versioning=versioning)


def init_command(
    ctx: typer.Context,
    force: Annotated[bool, typer.Option("--force", "-f", help=FORCE_HELP)] = False,
    interactive: Annotated[bool, typer.Option("--interactive", "-i", help=INTERACTIVE_HELP)] = False,
    with_versioning: Annotated[bool, typer.Option("--with-versioning", help=VERSIONING_HELP)] = False,
) -> None:
    """Initialize flowcraft configuration."""

    options = global_options(ctx)
    logger = options.logger()
    target = options.config or options.root / DEFAULT_CONFIG_NAME
    if not target.is_absolute():
        target = options.root / target

    try:
        if interactive:
            config = _prompt_config(with_versioning=with_versioning)
        else:
            config = default_config(with_versioning=with_versioning)
        if options.dry_run:
            logger.info(f"Dry run: would write {target}")
            logger.echo(render_config(config).rstrip())
            return
        write_config(target, config, force=force or options.force)
    except ConfigError as exc:
        logger.abort(CLIError(f"Failed to initialize configuration: {exc}"))

    logger.debug(f"wrote {target}")
    if config.versioning.enabled:
        logger.ok("Version management setup completed!")
    logger.ok("Configuration initialized successfully!")


def register(app: typer.Typer) -> None:
    """Register the ``init`` command on ``app``."""

    app.command(name="init")(init_command)


__all__ = ["init_command", "register"]
