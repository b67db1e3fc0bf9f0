# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the round-trip document tree helpers."""

from __future__ import annotations

import pytest
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from flowcraft.document import (
    MISSING,
    DocumentParseError,
    describe_node,
    node_equals,
    normalize_tree,
    parse_document,
    serialize_document,
    to_node,
)
from flowcraft.document.tree import detach, shared_nodes, to_plain


def test_parse_empty_and_comment_only_documents() -> None:
    assert parse_document("") == {}
    tree = parse_document("# nothing here yet\n")
    assert isinstance(tree, CommentedMap)
    assert len(tree) == 0


def test_parse_rejects_non_mapping_root() -> None:
    with pytest.raises(DocumentParseError, match="document root must be a mapping, found sequence"):
        parse_document("- a\n- b\n")


def test_parse_error_reports_line_and_column() -> None:
    with pytest.raises(DocumentParseError) as excinfo:
        parse_document("key: value\n  bad: indent\n")

    error = excinfo.value
    assert error.line == 2
    assert error.column is not None
    assert str(error).startswith("line 2, column ")


def test_round_trip_keeps_comments_and_quotes() -> None:
    text = (
        "# header comment\n"
        "name: 'CI'\n"
        "on:\n"
        "  push:\n"
        "    branches:\n"
        "      - main  # trunk\n"
    )

    assert serialize_document(parse_document(text)) == text


def test_to_node_copies_plain_structures() -> None:
    source = {"jobs": {"build": {"steps": [{"run": "make"}]}}}

    node = to_node(source)

    assert isinstance(node, CommentedMap)
    assert isinstance(node["jobs"]["build"]["steps"], CommentedSeq)
    node["jobs"]["build"]["steps"].append({"run": "make test"})
    assert source["jobs"]["build"]["steps"] == [{"run": "make"}]


def test_to_node_rejects_unsupported_values() -> None:
    with pytest.raises(TypeError, match="unsupported document value"):
        to_node({"when": object()})


def test_normalize_tree_requires_mapping() -> None:
    with pytest.raises(TypeError, match="document root must be a mapping"):
        normalize_tree(["not", "a", "map"])  # type: ignore[arg-type]


def test_node_equals_ignores_key_order_but_not_types() -> None:
    assert node_equals({"a": 1, "b": [1, 2]}, to_node({"b": [1, 2], "a": 1}))
    assert not node_equals([1, 2], [2, 1])
    assert not node_equals(True, 1)
    assert not node_equals({"a": 1}, [("a", 1)])
    assert node_equals(None, None)


def test_describe_node_and_missing_sentinel() -> None:
    assert describe_node(CommentedMap()) == "mapping"
    assert describe_node(["x"]) == "sequence"
    assert describe_node("text") == "scalar"
    assert not MISSING
    assert repr(MISSING) == "MISSING"


def test_to_plain_unwraps_commented_containers() -> None:
    tree = parse_document("a:\n  b:\n    - 1\n    - two\n")

    plain = to_plain(tree)

    assert plain == {"a": {"b": [1, "two"]}}
    assert type(plain) is dict


def test_comment_only_document_keeps_comments_as_header() -> None:
    tree = parse_document("# first\n\n# second\n")
    tree["name"] = "CI"

    assert serialize_document(tree) == "# first\n\n# second\nname: CI\n"


def test_shared_nodes_finds_aliases_and_merged_values() -> None:
    tree = parse_document(
        "x-env: &env {CI: 'true'}\n"
        "x-base: &base\n  env: *env\n  steps: [make]\n"
        "jobs:\n  build:\n    <<: *base\n  lint:\n    runs-on: ubuntu-latest\n",
    )

    shared = shared_nodes(tree)

    assert id(tree["x-env"]) in shared
    assert id(tree["x-base"]["steps"]) in shared
    assert id(tree["x-base"]) not in shared
    assert id(tree["jobs"]["lint"]) not in shared


def test_detach_copies_layout_but_not_anchor() -> None:
    tree = parse_document("a: &list [x, y]  # inline\nb: *list\n")

    clone = detach(tree["a"])

    assert clone == ["x", "y"]
    assert clone is not tree["a"]
    assert clone.fa.flow_style()
    assert tree["a"].anchor.value == "list"
    assert clone.anchor.value is None
    assert detach("scalar") == "scalar"
