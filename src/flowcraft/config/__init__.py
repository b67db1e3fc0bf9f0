# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration loading for the flowcraft pipeline generator."""

from __future__ import annotations

from .loader import DEFAULT_CONFIG_NAME, LoadedConfig, default_config, load_config, render_config, write_config
from .models import (
    ConfigError,
    DomainConfig,
    FlowcraftConfig,
    MergeRuleConfig,
    VersioningConfig,
    WorkflowConfig,
    validate_config,
)
from .sources import search_config

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_NAME",
    "DomainConfig",
    "FlowcraftConfig",
    "LoadedConfig",
    "MergeRuleConfig",
    "VersioningConfig",
    "WorkflowConfig",
    "default_config",
    "load_config",
    "render_config",
    "search_config",
    "validate_config",
    "write_config",
]
