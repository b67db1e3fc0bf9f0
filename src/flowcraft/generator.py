# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the pipeline workflow for a project and write it to disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config.models import FlowcraftConfig
from .merge.executor import merge_document
from .merge.models import MergeResult
from .templates.pipeline import build_pipeline_plan

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of one generation run."""

    path: Path
    merge: MergeResult
    changed: bool
    written: bool


def workflow_path(config: FlowcraftConfig, *, root: Path, output_dir: Path | None = None) -> Path:
    """Return the workflow file location for ``config``.

    Args:
        config: Validated configuration.
        root: Project root directory.
        output_dir: Optional directory overriding ``workflows.outputDir``;
            relative values are resolved against ``root``.

    Returns:
        Path: Location of the generated workflow file.
    """

    directory = output_dir if output_dir is not None else Path(config.workflows.output_dir)
    if not directory.is_absolute():
        directory = root / directory
    return directory / config.workflows.file_name


def generate_pipeline(
    config: FlowcraftConfig,
    *,
    root: Path,
    output_dir: Path | None = None,
    dry_run: bool = False,
) -> GenerationResult:
    """Merge the pipeline template into the project's workflow file.

    Args:
        config: Validated configuration.
        root: Project root directory.
        output_dir: Optional output directory override.
        dry_run: Compute the result without writing it.

    Returns:
        GenerationResult: Target path, merge result and write status.

    Raises:
        DocumentParseError: If the existing workflow file is not valid YAML.
    """

    target = workflow_path(config, root=root, output_dir=output_dir)
    try:
        existing = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        existing = None
    plan = build_pipeline_plan(config)
    result = merge_document(
        existing_content=existing,
        base_template=plan.base_template,
        instructions=plan.instructions,
    )
    changed = result.content != existing
    written = False
    if changed and not dry_run:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.content, encoding="utf-8")
        written = True
    LOGGER.debug("generated %s (status=%s changed=%s written=%s)", target, result.merge_status.value, changed, written)
    return GenerationResult(path=target, merge=result, changed=changed, written=written)


__all__ = ["GenerationResult", "generate_pipeline", "workflow_path"]
