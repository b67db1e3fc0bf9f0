# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from flowcraft.config.sources import DEFAULT_CONFIG_NAME


@pytest.fixture
def config_payload() -> dict[str, Any]:
    """Return a configuration with two domains and versioning enabled."""

    return {
        "ciProvider": "github",
        "mainBranch": "main",
        "branchFlow": ["develop", "staging", "main"],
        "domains": {
            "api": {"paths": ["api/**"], "testCommand": "make -C api test"},
            "web": {"paths": ["web/**", "shared/**"], "buildCommand": "npm ci", "testCommand": "npm test"},
        },
        "versioning": {"enabled": True},
    }


@pytest.fixture
def project(tmp_path: Path, config_payload: dict[str, Any]) -> Path:
    """Return a project root holding a JSON configuration file."""

    (tmp_path / DEFAULT_CONFIG_NAME).write_text(json.dumps(config_payload, indent=2), encoding="utf-8")
    return tmp_path
