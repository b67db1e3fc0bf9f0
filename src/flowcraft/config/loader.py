# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve, validate and persist flowcraft configuration files."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .models import ConfigError, FlowcraftConfig, validate_config
from .sources import DEFAULT_CONFIG_NAME, SEARCH_PLACES, search_config, source_for


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    """Validated configuration together with the file it came from."""

    config: FlowcraftConfig
    source: Path


def load_config(path: Path | None = None, *, root: Path) -> LoadedConfig:
    """Load and validate the configuration for ``root``.

    Args:
        path: Explicit configuration file. Relative paths are resolved
            against ``root``. When ``None`` the file is discovered by
            searching ``root`` and its parents.
        root: Project root directory.

    Returns:
        LoadedConfig: Validated configuration and its source path.

    Raises:
        ConfigError: If no file is found or its content is invalid.
    """

    if path is not None:
        candidate = path if path.is_absolute() else root / path
        source = source_for(candidate)
        if not source.exists():
            raise ConfigError(f"configuration file not found: {candidate}")
    else:
        found = search_config(root)
        if found is None:
            places = ", ".join(SEARCH_PLACES)
            raise ConfigError(f"no configuration file found in {root} or its parents (looked for {places})")
        source = found
    return LoadedConfig(config=validate_config(source.load()), source=source.path)


def default_config(
    *,
    main_branch: str = "main",
    branch_flow: Sequence[str] | None = None,
    with_versioning: bool = False,
) -> FlowcraftConfig:
    """Return the configuration written by ``flowcraft init``.

    Args:
        main_branch: Trunk branch name.
        branch_flow: Ordered promotion branches; defaults to ``develop`` then
            ``main_branch``.
        with_versioning: Whether semantic version management is enabled.

    Returns:
        FlowcraftConfig: Validated default configuration.

    Raises:
        ConfigError: If the branch names do not form a valid flow.
    """

    flow = list(branch_flow) if branch_flow else ["develop", main_branch]
    if main_branch not in flow:
        flow.append(main_branch)
    return validate_config(
        {"mainBranch": main_branch, "branchFlow": flow, "versioning": {"enabled": with_versioning}},
    )


def render_config(config: FlowcraftConfig) -> str:
    """Return ``config`` as the JSON text written to configuration files."""

    return json.dumps(config.to_payload(), indent=2) + "\n"


def write_config(path: Path, config: FlowcraftConfig, *, force: bool = False) -> Path:
    """Write ``config`` as JSON to ``path``.

    Args:
        path: Destination file.
        config: Configuration to persist.
        force: Overwrite an existing file when ``True``.

    Returns:
        Path: The written file.

    Raises:
        ConfigError: If ``path`` exists and ``force`` is ``False``.
    """

    if path.exists() and not force:
        raise ConfigError(f"configuration already exists at {path}; use --force to overwrite")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_config(config), encoding="utf-8")
    return path


__all__ = ["DEFAULT_CONFIG_NAME", "LoadedConfig", "default_config", "load_config", "render_config", "write_config"]
