# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``flowcraft generate``: merge the pipeline template into the workflow file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...cache.idempotency import IdempotencyManager
from ...config.models import ConfigError
from ...document.errors import DocumentParseError
from ...generator import GenerationResult, generate_pipeline, workflow_path
from ..options import global_options
from ..shared import CLIError, CLILogger

OUTPUT_HELP = "Directory for the generated workflow (defaults to workflows.outputDir)."
FORCE_HELP = "Regenerate even when nothing changed."
DRY_RUN_HELP = "Print the merged workflow instead of writing it."
SKIP_UNCHANGED_HELP = "Check for changes before generating, also on a dry run."


def generate_command(
    ctx: typer.Context,
    output: Annotated[Path | None, typer.Option("--output", "-o", help=OUTPUT_HELP)] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help=FORCE_HELP)] = False,
    dry_run: Annotated[bool, typer.Option("--dry-run", help=DRY_RUN_HELP)] = False,
    skip_unchanged: Annotated[bool, typer.Option("--skip-unchanged", help=SKIP_UNCHANGED_HELP)] = False,
) -> None:
    """Generate CI/CD workflows from configuration."""

    options = global_options(ctx)
    logger = options.logger()
    force = force or options.force
    dry_run = dry_run or options.dry_run

    try:
        loaded = options.load()
        logger.debug(f"Reading config from: {loaded.source}")
        config = loaded.config
        target = workflow_path(config, root=options.root, output_dir=output)
        manager = IdempotencyManager(config, root=options.root, output_path=target)
        if not force and (skip_unchanged or not dry_run):
            if not manager.has_changes():
                logger.info("No changes detected. Use --force to regenerate anyway.")
                return
            logger.debug("Changes detected, regenerating workflows...")
        result = generate_pipeline(config, root=options.root, output_dir=output, dry_run=dry_run)
    except (ConfigError, DocumentParseError, OSError) as exc:
        logger.abort(CLIError(f"Failed to generate workflows: {exc}"))

    _report(result, root=options.root, dry_run=dry_run, logger=logger)
    if dry_run:
        return
    manager.update_cache()


def _report(result: GenerationResult, *, root: Path, dry_run: bool, logger: CLILogger) -> None:
    for warning in result.merge.warnings:
        logger.warn(f"{warning.path}: {warning.reason}")
    location = _display_path(result.path, root)
    if dry_run and result.changed:
        logger.info(f"Dry run: would write {location} ({result.merge.merge_status.value})")
        logger.section(location)
        logger.echo(result.merge.content.rstrip("\n"))
    elif result.written:
        logger.ok(f"Generated workflows in: {location}")
    else:
        logger.info(f"Workflow already up to date: {location}")


def _display_path(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def register(app: typer.Typer) -> None:
    """Register the ``generate`` command on ``app``."""

    app.command(name="generate")(generate_command)


__all__ = ["generate_command", "register"]
