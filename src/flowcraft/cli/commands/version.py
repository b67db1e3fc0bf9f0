# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``flowcraft version``: report and tag semantic versions."""

from __future__ import annotations

from typing import Annotated

import typer

from ...config.models import ConfigError
from ...logging import emoji
from ...versioning.manager import BumpType, VersioningError, VersionManager
from ..options import global_options
from ..shared import CLIError

CHECK_HELP = "Show the current and next version (default)."
BUMP_HELP = "Create a tag for the next version."


def version_command(
    ctx: typer.Context,
    check: Annotated[bool, typer.Option("--check", help=CHECK_HELP)] = False,
    bump: Annotated[bool, typer.Option("--bump", help=BUMP_HELP)] = False,
) -> None:
    """Version management commands."""

    options = global_options(ctx)
    logger = options.logger()
    marker = emoji("📦 ", options.emoji)

    try:
        config = options.load().config
        manager = VersionManager(config, root=options.root)
        current = manager.get_current_version()
        upcoming = manager.calculate_next_version()
        if check or not bump:
            valid = manager.validate_conventional_commits()
            logger.echo(f"{marker}Current version: {current}")
            logger.echo(f"{marker}Next version: {upcoming.version} ({upcoming.type.value})")
            logger.echo(f"{emoji('📝 ', options.emoji)}Conventional commits: {'valid' if valid else 'invalid'}")
        if not bump:
            return
        if upcoming.type is BumpType.NONE:
            logger.info(f"No release-worthy commits since {current}.")
            return
        tag_name = f"{config.versioning.tag_prefix}{upcoming.version}"
        if options.dry_run:
            logger.info(f"Dry run: would create tag {tag_name}")
            return
        manager.create_tag(upcoming.version)
    except (ConfigError, VersioningError) as exc:
        logger.abort(CLIError(f"Version command failed: {exc}"))
    logger.ok(f"Created tag {tag_name}")


def register(app: typer.Typer) -> None:
    """Register the ``version`` command on ``app``."""

    app.command(name="version")(version_command)


__all__ = ["register", "version_command"]
