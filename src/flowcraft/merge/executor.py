# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Apply ordered merge instructions to a single document tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import cast

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from ..document.errors import StructuralConflictError
from ..document.tree import (
    MISSING,
    MissingType,
    Node,
    create_yaml,
    detach,
    node_equals,
    normalize_tree,
    parse_document,
    serialize_document,
    shared_nodes,
)
from .models import MergeInstruction, MergeResult, MergeStatus, MergeWarning, WarningKind
from .operator import MergeOperator, should_apply
from .paths import Location, resolve

LOGGER = logging.getLogger(__name__)


class ExecutorState(str, Enum):
    """Lifecycle states of a :class:`MergePlanExecutor`."""

    UNINITIALIZED = "uninitialized"
    BUILT = "built"
    FINALIZED = "finalized"


class ExecutorStateError(RuntimeError):
    """Raised when executor operations are called out of order."""


class MergePlanExecutor:
    """Build a document tree once, mutate it per instruction, then serialise it."""

    def __init__(self, *, yaml: YAML | None = None) -> None:
        """Initialise an executor in the ``UNINITIALIZED`` state.

        Args:
            yaml: Optional YAML instance used for parsing and serialisation.
        """

        self._yaml = yaml or create_yaml()
        self._state = ExecutorState.UNINITIALIZED
        self._tree: CommentedMap | None = None
        self._status: MergeStatus | None = None
        self._operator = MergeOperator()
        self._warnings: list[MergeWarning] = []

    @property
    def state(self) -> ExecutorState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def warnings(self) -> tuple[MergeWarning, ...]:
        """Return warnings recorded so far, in the order they occurred."""

        return tuple(self._warnings)

    def build(
        self,
        *,
        existing_content: str | None = None,
        existing_tree: Mapping[object, object] | None = None,
        base_template: str = "",
    ) -> None:
        """Construct the document tree and fix the merge status.

        Non-empty text takes precedence over a non-empty tree; the base
        template is used only when neither is supplied.

        Args:
            existing_content: Raw text of the user's current document.
            existing_tree: Already-parsed structure of the user's document.
            base_template: Text used to synthesise a fresh document.

        Raises:
            ExecutorStateError: If the executor was already built.
            DocumentParseError: If the selected text cannot be parsed.
            TypeError: If ``existing_tree`` holds unsupported values.
        """

        if self._state is not ExecutorState.UNINITIALIZED:
            raise ExecutorStateError(f"cannot build an executor in state '{self._state.value}'")
        if existing_content is not None and existing_content.strip():
            self._tree = parse_document(existing_content, yaml=self._yaml)
            self._status = MergeStatus.MERGED
        elif existing_tree:
            self._tree = normalize_tree(existing_tree)
            self._status = MergeStatus.MERGED
        else:
            self._tree = parse_document(base_template, yaml=self._yaml)
            self._status = MergeStatus.OVERWRITTEN
        self._state = ExecutorState.BUILT
        LOGGER.debug("built document tree (%s)", self._status.value)

    def apply(self, instruction: MergeInstruction) -> None:
        """Apply one instruction to the tree in place.

        Nodes that YAML aliases or ``<<`` merge keys reference from several
        places are copied before they change, so an instruction only affects
        the entry its path names.

        Args:
            instruction: Instruction to evaluate.

        Raises:
            ExecutorStateError: If the executor is not in the ``BUILT`` state.
        """

        tree = self._require_tree()
        location = resolve(tree, instruction.path)
        conflict = False
        try:
            existing = location.get()
        except StructuralConflictError as exc:
            self._warnings.append(
                MergeWarning(path=instruction.path, reason=str(exc), kind=WarningKind.STRUCTURAL_CONFLICT),
            )
            existing = MISSING
            conflict = True

        if not should_apply(existing, instruction.value, required=instruction.required):
            LOGGER.debug("skipped optional instruction for %s", instruction.path)
            return

        shared = shared_nodes(tree)
        before = len(self._operator.warnings)
        if location.crosses(shared):
            self._apply_below_shared(location, existing, instruction, shared=shared, conflict=conflict)
        else:
            parent = location.ensure(replace_conflicts=conflict)
            self._operator.apply(
                parent,
                location.key,
                existing,
                instruction.value,
                instruction.operation,
                path=instruction.path,
                shared=shared,
            )
        self._warnings.extend(self._operator.warnings[before:])

    def _apply_below_shared(
        self,
        location: Location,
        existing: Node | MissingType,
        instruction: MergeInstruction,
        *,
        shared: frozenset[int],
        conflict: bool,
    ) -> None:
        scratch = CommentedMap()
        current = existing if existing is MISSING else detach(existing)
        result = self._operator.apply(
            scratch,
            location.key,
            current,
            instruction.value,
            instruction.operation,
            path=instruction.path,
            shared=shared,
        )
        if existing is not MISSING and node_equals(result, existing):
            return
        parent = location.ensure(replace_conflicts=conflict, shared=shared)
        parent[location.key] = result
        LOGGER.debug("detached shared parents of %s", instruction.path)

    def apply_all(self, instructions: Iterable[MergeInstruction]) -> None:
        """Apply ``instructions`` sequentially in the given order."""

        for instruction in instructions:
            self.apply(instruction)

    def finalize(self) -> MergeResult:
        """Serialise the tree and close the executor.

        Returns:
            MergeResult: Rendered document, merge status and warnings.

        Raises:
            ExecutorStateError: If the executor is not in the ``BUILT`` state.
        """

        tree = self._require_tree()
        status = cast(MergeStatus, self._status)
        content = serialize_document(tree, yaml=self._yaml)
        self._state = ExecutorState.FINALIZED
        return MergeResult(content=content, merge_status=status, warnings=tuple(self._warnings))

    @property
    def tree(self) -> CommentedMap:
        """Return the live document tree while the executor is built."""

        return self._require_tree()

    def _require_tree(self) -> CommentedMap:
        if self._state is not ExecutorState.BUILT or self._tree is None:
            raise ExecutorStateError(f"executor must be built first (state '{self._state.value}')")
        return self._tree


def merge_document(
    *,
    existing_content: str | None = None,
    existing_tree: Mapping[object, object] | None = None,
    base_template: str = "",
    instructions: Iterable[MergeInstruction] = (),
) -> MergeResult:
    """Run a full build, apply and finalize cycle.

    Args:
        existing_content: Raw text of the user's document, if any.
        existing_tree: Pre-parsed user document, if any.
        base_template: Fallback text when no existing document is supplied.
        instructions: Ordered merge instructions.

    Returns:
        MergeResult: Serialised output, merge status and warnings.
    """

    executor = MergePlanExecutor()
    executor.build(existing_content=existing_content, existing_tree=existing_tree, base_template=base_template)
    executor.apply_all(instructions)
    return executor.finalize()


__all__ = [
    "ExecutorState",
    "ExecutorStateError",
    "MergePlanExecutor",
    "merge_document",
]
