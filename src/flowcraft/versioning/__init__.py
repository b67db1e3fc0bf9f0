# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Semantic version management from commit history."""

from __future__ import annotations

from .manager import (
    BumpType,
    ConventionalCommit,
    NextVersion,
    VersionManager,
    VersioningError,
    bump_version,
    parse_commit_message,
)

__all__ = [
    "BumpType",
    "ConventionalCommit",
    "NextVersion",
    "VersionManager",
    "VersioningError",
    "bump_version",
    "parse_commit_message",
]
