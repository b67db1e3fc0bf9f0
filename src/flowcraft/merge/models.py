# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value objects describing merge plans and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .paths import split_path


class MergeOperation(str, Enum):
    """Enumerate how an instruction treats an existing value."""

    SET = "set"
    MERGE = "merge"
    OVERWRITE = "overwrite"
    PRESERVE = "preserve"


class MergeStatus(str, Enum):
    """Describe whether user content existed before instructions ran."""

    MERGED = "merged"
    OVERWRITTEN = "overwritten"


class WarningKind(str, Enum):
    """Enumerate recoverable conditions reported by the executor."""

    STRUCTURAL_CONFLICT = "structural_conflict"
    UNSUPPORTED_MERGE_SHAPE = "unsupported_merge_shape"


@dataclass(frozen=True, slots=True)
class MergeInstruction:
    """Describe one desired effect on a document tree.

    Attributes:
        path: Dotted map-key address of the target entry.
        operation: Merge semantics applied at ``path``.
        value: Desired template value. ``None`` on an optional instruction
            means the template supplies no default.
        required: When ``False`` the instruction may be skipped for an
            absent path that has no default value.
    """

    path: str
    operation: MergeOperation
    value: object = None
    required: bool = True

    def __post_init__(self) -> None:
        split_path(self.path)
        object.__setattr__(self, "operation", MergeOperation(self.operation))

    @property
    def segments(self) -> tuple[str, ...]:
        """Return the key segments addressed by the instruction."""

        return split_path(self.path)


@dataclass(frozen=True, slots=True)
class MergeWarning:
    """Recoverable problem encountered while applying an instruction."""

    path: str
    reason: str
    kind: WarningKind

    def to_dict(self) -> dict[str, str]:
        """Return the ``{path, reason}`` payload exposed to callers."""

        return {"path": self.path, "reason": self.reason}


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Serialised merge output plus its status and warnings."""

    content: str
    merge_status: MergeStatus
    warnings: tuple[MergeWarning, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-compatible view of the result."""

        return {
            "content": self.content,
            "mergeStatus": self.merge_status.value,
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


__all__ = [
    "MergeInstruction",
    "MergeOperation",
    "MergeResult",
    "MergeStatus",
    "MergeWarning",
    "WarningKind",
]
