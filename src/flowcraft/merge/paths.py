# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dotted path resolution over document trees."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Final, cast

from ruamel.yaml.comments import CommentedMap

from ..document.errors import StructuralConflictError
from ..document.tree import MISSING, MissingType, Node, describe_node, detach

PATH_SEPARATOR: Final[str] = "."


class InvalidPathError(ValueError):
    """Raised when a dotted path expression is malformed."""


def split_path(path: str) -> tuple[str, ...]:
    """Return the map-key segments addressed by ``path``.

    Args:
        path: Dotted expression such as ``on.pull_request.branches``.

    Returns:
        tuple[str, ...]: Non-empty key segments in traversal order.

    Raises:
        InvalidPathError: If ``path`` is empty or contains empty segments.
    """

    segments = tuple(path.split(PATH_SEPARATOR))
    if not path or any(not segment for segment in segments):
        raise InvalidPathError(f"invalid document path: {path!r}")
    return segments


@dataclass(slots=True)
class Location:
    """Address of one map entry inside a document tree.

    Attributes:
        root: Root mapping of the document.
        segments: Key segments leading to the addressed entry.
        replaced: Path prefixes whose non-mapping nodes were replaced by
            :meth:`ensure` while recovering from a structural conflict.
    """

    root: MutableMapping[object, Node]
    segments: tuple[str, ...]
    replaced: list[str] = field(default_factory=list)

    @property
    def path(self) -> str:
        """Return the dotted path of the addressed entry."""

        return PATH_SEPARATOR.join(self.segments)

    @property
    def key(self) -> str:
        """Return the final segment, the key under which the value lives."""

        return self.segments[-1]

    def get(self) -> Node | MissingType:
        """Return the value stored at the location.

        Returns:
            Node | MissingType: Existing value, which may be ``None`` for an
            explicit YAML null, or :data:`MISSING` when any segment is absent.

        Raises:
            StructuralConflictError: If an intermediate node is not a mapping.
        """

        container = self._walk(create=False, replace_conflicts=False)
        if container is None or self.key not in container:
            return MISSING
        return container[self.key]

    def crosses(self, shared: frozenset[int]) -> bool:
        """Return ``True`` when an existing intermediate node is in ``shared``.

        Writing below such a node would also change every alias of it.
        """

        container: object = self.root
        for segment in self.segments[:-1]:
            if not isinstance(container, MutableMapping) or segment not in container:
                return False
            container = container[segment]
            if id(container) in shared:
                return True
        return False

    def ensure(
        self,
        *,
        replace_conflicts: bool = False,
        shared: frozenset[int] = frozenset(),
    ) -> MutableMapping[object, Node]:
        """Create missing intermediate mappings and return the leaf's parent.

        The leaf entry itself is never written.

        Args:
            replace_conflicts: When ``True`` a non-mapping intermediate node is
                replaced with an empty mapping instead of raising.
            shared: Ids of containers referenced from more than one place.
                Such intermediates are replaced by detached copies so the
                caller can write below them.

        Returns:
            MutableMapping[object, Node]: Container that holds (or will hold)
            the addressed value.

        Raises:
            StructuralConflictError: If an intermediate node is not a mapping
                and ``replace_conflicts`` is ``False``.
        """

        container = self._walk(create=True, replace_conflicts=replace_conflicts, shared=shared)
        return cast(MutableMapping[object, Node], container)

    def _walk(
        self,
        *,
        create: bool,
        replace_conflicts: bool,
        shared: frozenset[int] = frozenset(),
    ) -> MutableMapping[object, Node] | None:
        container = self.root
        for depth, segment in enumerate(self.segments[:-1], start=1):
            if segment not in container:
                if not create:
                    return None
                container[segment] = CommentedMap()
            child = container[segment]
            if not isinstance(child, MutableMapping):
                prefix = PATH_SEPARATOR.join(self.segments[:depth])
                if not replace_conflicts:
                    raise StructuralConflictError(self.path, prefix, describe_node(child))
                child = CommentedMap()
                container[segment] = child
                self.replaced.append(prefix)
            elif id(child) in shared:
                child = cast(MutableMapping[object, Node], detach(child))
                container[segment] = child
            container = child
        return container


def resolve(tree: MutableMapping[object, Node], path: str) -> Location:
    """Return a :class:`Location` for ``path`` inside ``tree``.

    Args:
        tree: Root mapping of the document.
        path: Dotted key path.

    Returns:
        Location: Navigable handle for the addressed entry.
    """

    return Location(root=tree, segments=split_path(path))


__all__ = ["InvalidPathError", "Location", "PATH_SEPARATOR", "resolve", "split_path"]
