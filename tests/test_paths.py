# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for dotted path resolution."""

from __future__ import annotations

import pytest
from ruamel.yaml.comments import CommentedMap

from flowcraft.document import MISSING, StructuralConflictError, parse_document
from flowcraft.document.tree import shared_nodes
from flowcraft.merge import InvalidPathError, resolve, split_path


@pytest.mark.parametrize("path", ["", ".", "a..b", "a.", ".a"])
def test_split_path_rejects_empty_segments(path: str) -> None:
    with pytest.raises(InvalidPathError):
        split_path(path)


def test_split_path_returns_segments() -> None:
    assert split_path("on.pull_request.branches") == ("on", "pull_request", "branches")


def test_get_returns_missing_for_absent_entries() -> None:
    tree = parse_document("on:\n  push: {}\n")

    assert resolve(tree, "on.push.branches").get() is MISSING
    assert resolve(tree, "jobs.test").get() is MISSING


def test_get_distinguishes_explicit_null_from_missing() -> None:
    tree = parse_document("on:\n  workflow_dispatch:\n")

    assert resolve(tree, "on.workflow_dispatch").get() is None


def test_get_raises_on_scalar_intermediate() -> None:
    tree = parse_document("on: push\n")

    with pytest.raises(StructuralConflictError) as excinfo:
        resolve(tree, "on.push.branches").get()

    assert excinfo.value.segment == "on"
    assert excinfo.value.found == "scalar"


def test_ensure_creates_intermediate_mappings_only() -> None:
    tree = CommentedMap()
    location = resolve(tree, "jobs.testing.steps")

    parent = location.ensure()

    assert tree == {"jobs": {"testing": {}}}
    assert parent is tree["jobs"]["testing"]
    assert "steps" not in parent


def test_ensure_replaces_conflicts_when_asked() -> None:
    tree = parse_document("jobs:\n  - build\n")
    location = resolve(tree, "jobs.test")

    with pytest.raises(StructuralConflictError):
        location.ensure()
    parent = location.ensure(replace_conflicts=True)

    assert parent == {}
    assert tree["jobs"] is parent
    assert location.replaced == ["jobs"]


def test_ensure_detaches_shared_intermediates() -> None:
    tree = parse_document("base: &base\n  runs-on: ubuntu-latest\ntest: *base\n")
    original = tree["base"]
    shared = shared_nodes(tree)
    location = resolve(tree, "test.steps")

    assert location.crosses(shared)
    parent = location.ensure(shared=shared)

    assert parent is tree["test"]
    assert parent is not original
    assert parent == {"runs-on": "ubuntu-latest"}
    assert tree["base"] is original
    assert not resolve(tree, "base.steps").crosses(shared_nodes(tree))
