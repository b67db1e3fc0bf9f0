# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Merge engine combining template instructions with user documents."""

from __future__ import annotations

from .executor import ExecutorState, ExecutorStateError, MergePlanExecutor, merge_document
from .models import MergeInstruction, MergeOperation, MergeResult, MergeStatus, MergeWarning, WarningKind
from .operator import MergeOperator, should_apply
from .paths import InvalidPathError, Location, resolve, split_path

__all__ = [
    "ExecutorState",
    "ExecutorStateError",
    "InvalidPathError",
    "Location",
    "MergeInstruction",
    "MergeOperation",
    "MergeOperator",
    "MergePlanExecutor",
    "MergeResult",
    "MergeStatus",
    "MergeWarning",
    "WarningKind",
    "merge_document",
    "resolve",
    "should_apply",
    "split_path",
]
