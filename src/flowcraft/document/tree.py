# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Round-trip document tree built on :mod:`ruamel.yaml` commented nodes.

Maps are :class:`~ruamel.yaml.comments.CommentedMap`, sequences are
:class:`~ruamel.yaml.comments.CommentedSeq` and everything else is a scalar.
The commented containers carry the comments, key order, quoting and flow
style of the source text, so nodes that are not touched by a merge serialise
exactly as they were read.
"""

from __future__ import annotations

import copy
import datetime
import io
from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias, TypeGuard, cast

from ruamel.yaml import YAML
from ruamel.yaml.comments import Comment, CommentedMap, CommentedSeq, Format
from ruamel.yaml.error import MarkedYAMLError, YAMLError

from .errors import DocumentParseError

Scalar: TypeAlias = str | int | float | bool | datetime.date | None
Node: TypeAlias = CommentedMap | CommentedSeq | Scalar

YAML_WIDTH: Final[int] = 4096
MAPPING_INDENT: Final[int] = 2
SEQUENCE_INDENT: Final[int] = 4
SEQUENCE_DASH_OFFSET: Final[int] = 2

_SCALAR_TYPES: Final[tuple[type, ...]] = (str, int, float, bool, datetime.date, type(None))


class _Missing:
    """Sentinel type marking an absent map entry."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()
MissingType: TypeAlias = _Missing


def create_yaml() -> YAML:
    """Return a round-trip YAML instance with the fixed output layout.

    Returns:
        YAML: Configured ``ruamel.yaml`` round-trip loader and dumper.
    """

    yaml = YAML(typ="rt")
    yaml.preserve_quotes = True
    yaml.width = YAML_WIDTH
    yaml.default_flow_style = False
    yaml.indent(mapping=MAPPING_INDENT, sequence=SEQUENCE_INDENT, offset=SEQUENCE_DASH_OFFSET)
    return yaml


def parse_document(text: str, *, yaml: YAML | None = None) -> CommentedMap:
    """Parse ``text`` into a document tree rooted at a mapping.

    Args:
        text: Raw YAML source.
        yaml: Optional pre-configured YAML instance.

    Returns:
        CommentedMap: Root mapping of the parsed document. Empty input
        yields an empty mapping; comment-only input yields an empty mapping
        that carries those comments as its start comment.

    Raises:
        DocumentParseError: If ``text`` is not well-formed YAML or its root
            is not a mapping.
    """

    loader = yaml or create_yaml()
    try:
        data = loader.load(text)
    except MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        message = exc.problem or exc.context or str(exc)
        if mark is None:
            raise DocumentParseError(message) from exc
        raise DocumentParseError(message, line=mark.line + 1, column=mark.column + 1) from exc
    except YAMLError as exc:
        raise DocumentParseError(str(exc)) from exc
    if data is None:
        return _comment_only_document(text)
    if not isinstance(data, CommentedMap):
        raise DocumentParseError(f"document root must be a mapping, found {describe_node(data)}")
    return data


def _comment_only_document(text: str) -> CommentedMap:
    tree = CommentedMap()
    lines = [line.strip() for line in text.strip().splitlines()]
    comment = "\n".join(line for line in lines if not line or line.startswith("#")).strip()
    if comment:
        tree.yaml_set_start_comment(comment)
    return tree


def normalize_tree(structure: Mapping[object, object]) -> CommentedMap:
    """Convert a pre-parsed mapping into a freshly owned document tree.

    Args:
        structure: Plain mapping or commented mapping supplied by a caller.

    Returns:
        CommentedMap: Deep copy of ``structure`` using commented containers.

    Raises:
        TypeError: If ``structure`` is not a mapping or contains values that
            cannot be represented in a document tree.
    """

    if not isinstance(structure, Mapping):
        raise TypeError(f"document root must be a mapping, got {type(structure).__name__}")
    return cast(CommentedMap, to_node(structure))


def to_node(value: object) -> Node:
    """Return a document node equivalent to ``value`` that shares no containers.

    Commented containers are deep-copied with their comment metadata; plain
    mappings and sequences are rebuilt as commented containers without any.

    Args:
        value: Arbitrary mapping, sequence or scalar.

    Returns:
        Node: Independent document node.

    Raises:
        TypeError: If ``value`` (or a nested value) is not representable.
    """

    if isinstance(value, (CommentedMap, CommentedSeq)):
        return copy.deepcopy(value)
    if isinstance(value, Mapping):
        mapping = CommentedMap()
        for key, item in value.items():
            if not isinstance(key, _SCALAR_TYPES):
                raise TypeError(f"mapping keys must be scalars, got {type(key).__name__}")
            mapping[key] = to_node(item)
        return mapping
    if is_sequence(value):
        return CommentedSeq(to_node(item) for item in value)
    if isinstance(value, _SCALAR_TYPES):
        return value
    raise TypeError(f"unsupported document value of type {type(value).__name__}")


def shared_nodes(root: Node) -> frozenset[int]:
    """Return the ids of containers reachable through more than one path.

    YAML aliases and ``<<`` merge keys make several map entries refer to the
    same container object, so mutating it in place changes every one of them.

    Args:
        root: Node to scan, normally the document root.

    Returns:
        frozenset[int]: ``id()`` of every container visited more than once.
    """

    seen: set[int] = set()
    shared: set[int] = set()
    pending: list[object] = [root]
    while pending:
        node = pending.pop()
        if is_mapping(node):
            children: list[object] = list(node.values())
        elif is_sequence(node):
            children = list(node)
        else:
            continue
        if id(node) in seen:
            shared.add(id(node))
            continue
        seen.add(id(node))
        pending.extend(children)
    return frozenset(shared)


def detach(node: Node) -> Node:
    """Return a private copy of ``node`` that no alias refers to.

    Comments and flow style are copied, anchors are not. Entries a map
    inherits through ``<<`` keep pointing at the anchored source.

    Args:
        node: Node that may be referenced from several places.

    Returns:
        Node: Copy safe to mutate, or ``node`` itself for scalars.
    """

    if isinstance(node, CommentedMap):
        clone = CommentedMap()
        for key, item in node.non_merged_items():
            clone[key] = detach(item)
        if node.merge:
            clone.add_yaml_merge(list(node.merge))
        return _copy_layout(node, clone)
    if isinstance(node, CommentedSeq):
        return _copy_layout(node, CommentedSeq(detach(item) for item in node))
    return node


def _copy_layout(source: CommentedMap | CommentedSeq, target: CommentedMap | CommentedSeq) -> Node:
    for attribute in (Comment.attrib, Format.attrib):
        if hasattr(source, attribute):
            setattr(target, attribute, copy.deepcopy(getattr(source, attribute)))
    return target


def serialize_document(tree: CommentedMap, *, yaml: YAML | None = None) -> str:
    """Render ``tree`` back to YAML text.

    Args:
        tree: Root mapping to serialise.
        yaml: Optional pre-configured YAML instance.

    Returns:
        str: YAML text produced with the fixed output layout.
    """

    dumper = yaml or create_yaml()
    stream = io.StringIO()
    dumper.dump(tree, stream)
    return stream.getvalue()


def is_mapping(value: object) -> TypeGuard[Mapping[object, object]]:
    """Return ``True`` when ``value`` is a map node."""

    return isinstance(value, Mapping)


def is_sequence(value: object) -> TypeGuard[Sequence[object]]:
    """Return ``True`` when ``value`` is a sequence node (strings excluded)."""

    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def describe_node(value: object) -> str:
    """Return ``mapping``, ``sequence`` or ``scalar`` for ``value``."""

    if is_mapping(value):
        return "mapping"
    if is_sequence(value):
        return "sequence"
    return "scalar"


def node_equals(left: object, right: object) -> bool:
    """Compare two nodes by value, ignoring formatting and map key order.

    Booleans never compare equal to numbers, so ``true`` and ``1`` are
    distinct sequence members.

    Args:
        left: First node.
        right: Second node.

    Returns:
        bool: ``True`` when both nodes hold the same value.
    """

    if is_mapping(left) and is_mapping(right):
        if left.keys() != right.keys():
            return False
        return all(node_equals(left[key], right[key]) for key in left)
    if is_sequence(left) and is_sequence(right):
        if len(left) != len(right):
            return False
        return all(node_equals(a, b) for a, b in zip(left, right))
    if is_mapping(left) or is_mapping(right) or is_sequence(left) or is_sequence(right):
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


def to_plain(value: object) -> object:
    """Return ``value`` converted to plain ``dict``/``list``/scalar data."""

    if is_mapping(value):
        return {key: to_plain(item) for key, item in value.items()}
    if is_sequence(value):
        return [to_plain(item) for item in value]
    return value


__all__ = [
    "MISSING",
    "MissingType",
    "Node",
    "Scalar",
    "create_yaml",
    "describe_node",
    "detach",
    "is_mapping",
    "is_sequence",
    "node_equals",
    "normalize_tree",
    "parse_document",
    "serialize_document",
    "shared_nodes",
    "to_node",
    "to_plain",
]
