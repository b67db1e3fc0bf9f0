# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Document tree primitives shared by the merge engine."""

from __future__ import annotations

from .errors import DocumentParseError, StructuralConflictError
from .tree import (
    MISSING,
    MissingType,
    Node,
    create_yaml,
    describe_node,
    node_equals,
    normalize_tree,
    parse_document,
    serialize_document,
    to_node,
)

__all__ = [
    "MISSING",
    "DocumentParseError",
    "MissingType",
    "Node",
    "StructuralConflictError",
    "create_yaml",
    "describe_node",
    "node_equals",
    "normalize_tree",
    "parse_document",
    "serialize_document",
    "to_node",
]
