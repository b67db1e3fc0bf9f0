# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-entry merge semantics for the four instruction operations.

The operator never decides *whether* an instruction runs; that is the job of
:func:`should_apply`. Once the gate passes, :meth:`MergeOperator.apply`
dispatches on the operation and on the presence of an existing value, and
every combination is reachable.

=============  ======================  ==================
operation      existing present        existing absent
=============  ======================  ==================
``set``        replace with desired    write desired
``overwrite``  replace with desired    write desired
``merge``      structural merge        write desired
``preserve``   keep existing           write desired
=============  ======================  ==================
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence

from ..document.tree import (
    MISSING,
    MissingType,
    Node,
    describe_node,
    detach,
    is_mapping,
    is_sequence,
    node_equals,
    to_node,
)
from .models import MergeOperation, MergeWarning, WarningKind
from .paths import PATH_SEPARATOR

LOGGER = logging.getLogger(__name__)


def should_apply(existing: Node | MissingType, desired: object, *, required: bool) -> bool:
    """Return whether an instruction is evaluated at all.

    Only optional instructions that target an absent entry and carry no
    default value are skipped.

    Args:
        existing: Current value at the target path or :data:`MISSING`.
        desired: Template value carried by the instruction.
        required: Instruction's ``required`` flag.

    Returns:
        bool: ``True`` when the operation table must run.
    """

    return required or existing is not MISSING or desired is not None


class MergeOperator:
    """Apply merge operations and collect recoverable shape warnings."""

    def __init__(self) -> None:
        """Initialise the operator with an empty warning log."""

        self.warnings: list[MergeWarning] = []

    def apply(
        self,
        parent: MutableMapping[object, Node],
        key: str,
        existing: Node | MissingType,
        desired: object,
        operation: MergeOperation,
        *,
        path: str,
        shared: frozenset[int] = frozenset(),
    ) -> Node:
        """Resolve the value for ``parent[key]`` and store it.

        Args:
            parent: Container that holds the target entry.
            key: Map key of the target entry.
            existing: Current value or :data:`MISSING`.
            desired: Template value.
            operation: Operation requested by the instruction.
            path: Dotted path used in warnings.
            shared: Ids of containers that aliases or merge keys reference
                from more than one place; see :func:`shared_nodes`.

        Returns:
            Node: Value stored at ``parent[key]`` after the operation.
        """

        if existing is MISSING:
            result = to_node(desired)
        elif operation is MergeOperation.PRESERVE:
            result = existing
        elif operation is MergeOperation.MERGE:
            result = self.merge(existing, desired, path=path, shared=shared)
        else:
            result = self._replace(existing, desired)

        if result is not existing:
            parent[key] = result
        LOGGER.debug("applied %s at %s", operation.value, path)
        return result

    def merge(self, existing: Node, desired: object, *, path: str, shared: frozenset[int] = frozenset()) -> Node:
        """Structurally merge ``desired`` into ``existing``.

        A shared container is never changed in place: the merge runs on a
        detached copy, which is returned only when it differs from
        ``existing``.

        Args:
            existing: Value already present in the document.
            desired: Template value.
            path: Dotted path of ``existing`` used in warnings.
            shared: Ids of containers referenced from more than one place.

        Returns:
            Node: ``existing`` updated in place for matching containers, a
            merged copy of a shared container, or a fresh copy of ``desired``
            when the shapes cannot be combined.
        """

        if id(existing) in shared:
            merged = self._merge_node(detach(existing), desired, path=path, shared=shared)
            if node_equals(merged, existing):
                return existing
            LOGGER.debug("detached shared node at %s", path)
            return merged
        return self._merge_node(existing, desired, path=path, shared=shared)

    def _merge_node(self, existing: Node, desired: object, *, path: str, shared: frozenset[int]) -> Node:
        if isinstance(existing, MutableSequence) and is_sequence(desired):
            return self._merge_sequences(existing, desired)
        if isinstance(existing, MutableMapping) and is_mapping(desired):
            return self._merge_mappings(existing, desired, path=path, shared=shared)
        if node_equals(existing, desired):
            return existing
        self.warnings.append(
            MergeWarning(
                path=path,
                reason=(
                    f"cannot merge {describe_node(desired)} into {describe_node(existing)}; template value replaces it"
                ),
                kind=WarningKind.UNSUPPORTED_MERGE_SHAPE,
            ),
        )
        return to_node(desired)

    def _merge_sequences(self, existing: MutableSequence[Node], desired: Sequence[object]) -> Node:
        for item in desired:
            if not any(node_equals(current, item) for current in existing):
                existing.append(to_node(item))
        return existing

    def _merge_mappings(
        self,
        existing: MutableMapping[object, Node],
        desired: Mapping[object, object],
        *,
        path: str,
        shared: frozenset[int],
    ) -> Node:
        for key, value in desired.items():
            if key not in existing:
                existing[key] = to_node(value)
                continue
            current = existing[key]
            merged = self.merge(current, value, path=f"{path}{PATH_SEPARATOR}{key}", shared=shared)
            if merged is not current:
                existing[key] = merged
        return existing

    @staticmethod
    def _replace(existing: Node, desired: object) -> Node:
        if node_equals(existing, desired):
            return existing
        return to_node(desired)


__all__ = ["MergeOperator", "should_apply"]
