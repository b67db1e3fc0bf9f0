# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for per-entry merge semantics."""

from __future__ import annotations

import pytest
from ruamel.yaml.comments import CommentedMap

from flowcraft.document import MISSING, parse_document, to_node
from flowcraft.merge import MergeOperation, MergeOperator, WarningKind, should_apply


def _apply(existing: object, desired: object, operation: MergeOperation) -> tuple[CommentedMap, MergeOperator]:
    parent = CommentedMap()
    if existing is not MISSING:
        parent["value"] = to_node(existing)
    operator = MergeOperator()
    operator.apply(parent, "value", parent.get("value", MISSING), desired, operation, path="value")
    return parent, operator


@pytest.mark.parametrize("operation", list(MergeOperation))
def test_absent_entry_is_written_for_every_operation(operation: MergeOperation) -> None:
    parent, operator = _apply(MISSING, {"a": [1]}, operation)

    assert parent["value"] == {"a": [1]}
    assert operator.warnings == []


@pytest.mark.parametrize("operation", [MergeOperation.SET, MergeOperation.OVERWRITE])
def test_set_and_overwrite_replace_existing(operation: MergeOperation) -> None:
    parent, _ = _apply({"keep": "me"}, {"new": True}, operation)

    assert parent["value"] == {"new": True}


def test_preserve_keeps_existing_value() -> None:
    parent, _ = _apply("user", "template", MergeOperation.PRESERVE)

    assert parent["value"] == "user"


def test_replace_with_equal_value_keeps_existing_node() -> None:
    tree = parse_document("value: [a, b]  # inline\n")
    original = tree["value"]
    operator = MergeOperator()

    operator.apply(tree, "value", original, ["a", "b"], MergeOperation.SET, path="value")

    assert tree["value"] is original


def test_merge_sequences_appends_missing_items_in_order() -> None:
    parent, _ = _apply(["develop", "feature"], ["main", "develop", "release"], MergeOperation.MERGE)

    assert parent["value"] == ["develop", "feature", "main", "release"]


def test_merge_sequences_compares_mappings_by_value() -> None:
    parent, _ = _apply(
        [{"uses": "actions/checkout@v4"}],
        [{"uses": "actions/checkout@v4"}, {"run": "make"}],
        MergeOperation.MERGE,
    )

    assert parent["value"] == [{"uses": "actions/checkout@v4"}, {"run": "make"}]


def test_merge_mappings_recurses_and_keeps_user_keys() -> None:
    parent, operator = _apply(
        {"a": 1, "b": {"x": 1}, "c": 3},
        {"b": {"y": 2}, "d": 4},
        MergeOperation.MERGE,
    )

    assert parent["value"] == {"a": 1, "b": {"x": 1, "y": 2}, "c": 3, "d": 4}
    assert list(parent["value"]) == ["a", "b", "c", "d"]
    assert operator.warnings == []


def test_merge_equal_scalars_is_silent() -> None:
    parent, operator = _apply({"runs-on": "ubuntu-latest"}, {"runs-on": "ubuntu-latest"}, MergeOperation.MERGE)

    assert parent["value"] == {"runs-on": "ubuntu-latest"}
    assert operator.warnings == []


def test_merge_mismatched_shapes_warns_with_nested_path() -> None:
    parent, operator = _apply({"steps": "make"}, {"steps": ["make", "test"]}, MergeOperation.MERGE)

    assert parent["value"] == {"steps": ["make", "test"]}
    assert len(operator.warnings) == 1
    warning = operator.warnings[0]
    assert warning.path == "value.steps"
    assert warning.kind is WarningKind.UNSUPPORTED_MERGE_SHAPE
    assert "cannot merge sequence into scalar" in warning.reason


def test_merge_different_scalars_takes_template_value() -> None:
    parent, operator = _apply("ubuntu-22.04", "ubuntu-latest", MergeOperation.MERGE)

    assert parent["value"] == "ubuntu-latest"
    assert operator.warnings[0].kind is WarningKind.UNSUPPORTED_MERGE_SHAPE


def test_should_apply_skips_only_optional_absent_without_default() -> None:
    assert should_apply(MISSING, None, required=True)
    assert should_apply("x", None, required=False)
    assert should_apply(MISSING, "default", required=False)
    assert not should_apply(MISSING, None, required=False)


def test_merge_copies_shared_container_before_changing_it() -> None:
    tree = parse_document("a: &list [x]\nb: *list\n")
    shared_list = tree["a"]
    operator = MergeOperator()

    operator.apply(tree, "b", shared_list, ["y"], MergeOperation.MERGE, path="b", shared=frozenset({id(shared_list)}))

    assert tree["a"] is shared_list
    assert tree["a"] == ["x"]
    assert tree["b"] == ["x", "y"]


def test_merge_keeps_shared_container_when_nothing_changes() -> None:
    tree = parse_document("a: &list [x, y]\nb: *list\n")
    shared_list = tree["a"]
    operator = MergeOperator()

    operator.apply(tree, "b", shared_list, ["y"], MergeOperation.MERGE, path="b", shared=frozenset({id(shared_list)}))

    assert tree["b"] is shared_list
