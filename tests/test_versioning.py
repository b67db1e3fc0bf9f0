# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for semantic version calculation from commit history."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from flowcraft.config import default_config, validate_config
from flowcraft.versioning import BumpType, VersioningError, VersionManager, bump_version, parse_commit_message


class FakeGit:
    """Answer git invocations from canned output and record them."""

    def __init__(self, *, tag: str | None, messages: Sequence[str]) -> None:
        self.tag = tag
        self.messages = list(messages)
        self.calls: list[list[str]] = []

    def __call__(self, args: Sequence[str], cwd: Path) -> str:
        command = list(args)
        self.calls.append(command)
        if command[:2] == ["git", "describe"]:
            if self.tag is None:
                raise subprocess.CalledProcessError(128, command)
            return f"{self.tag}\n"
        if command[:2] == ["git", "log"]:
            return "".join(f"{message}\n\x1e\n" for message in self.messages)
        if command[:2] == ["git", "tag"]:
            return ""
        raise AssertionError(f"unexpected command {command}")


@pytest.mark.parametrize(
    ("message", "expected_type", "bump"),
    [
        ("feat(api): add endpoint", "feat", BumpType.MINOR),
        ("fix: handle nulls", "fix", BumpType.PATCH),
        ("perf: faster merge", "perf", BumpType.PATCH),
        ("docs: typo", "docs", BumpType.NONE),
        ("refactor!: drop legacy flag", "refactor", BumpType.MAJOR),
        ("chore: deps\n\nBREAKING CHANGE: requires python 3.12", "chore", BumpType.MAJOR),
    ],
)
def test_parse_commit_message(message: str, expected_type: str, bump: BumpType) -> None:
    commit = parse_commit_message(message)

    assert commit is not None
    assert commit.type == expected_type
    assert commit.bump is bump


def test_parse_commit_message_rejects_free_text() -> None:
    assert parse_commit_message("Update README") is None
    assert parse_commit_message("feat:missing space") is None


@pytest.mark.parametrize(
    ("current", "bump", "expected"),
    [
        ("1.2.3", BumpType.MAJOR, "2.0.0"),
        ("1.2.3", BumpType.MINOR, "1.3.0"),
        ("1.2.3", BumpType.PATCH, "1.2.4"),
        ("1.2", BumpType.NONE, "1.2.0"),
    ],
)
def test_bump_version(current: str, bump: BumpType, expected: str) -> None:
    assert bump_version(current, bump) == expected


def test_bump_version_rejects_invalid_input() -> None:
    with pytest.raises(VersioningError, match="invalid version"):
        bump_version("not-a-version", BumpType.PATCH)


def test_current_version_strips_tag_prefix(tmp_path: Path) -> None:
    manager = VersionManager(default_config(), root=tmp_path, runner=FakeGit(tag="v1.4.0", messages=[]))

    assert manager.get_current_version() == "1.4.0"


def test_current_version_without_tags(tmp_path: Path) -> None:
    manager = VersionManager(default_config(), root=tmp_path, runner=FakeGit(tag=None, messages=[]))

    assert manager.latest_tag() is None
    assert manager.get_current_version() == "0.0.0"


def test_next_version_uses_strongest_commit(tmp_path: Path) -> None:
    git = FakeGit(tag="v1.4.0", messages=["fix: a", "feat: b", "docs: c"])
    manager = VersionManager(default_config(), root=tmp_path, runner=git)

    upcoming = manager.calculate_next_version()

    assert upcoming.version == "1.5.0"
    assert upcoming.type is BumpType.MINOR
    assert ["git", "log", "--no-merges", "--format=%B\x1e", "v1.4.0..HEAD"] in git.calls


def test_next_version_without_conventional_commits_policy(tmp_path: Path) -> None:
    config = validate_config({"versioning": {"enabled": True, "conventionalCommits": False}})
    manager = VersionManager(config, root=tmp_path, runner=FakeGit(tag="v2.0.0", messages=["whatever"]))

    assert manager.calculate_next_version().version == "2.0.1"


def test_validate_conventional_commits(tmp_path: Path) -> None:
    good = VersionManager(default_config(), root=tmp_path, runner=FakeGit(tag=None, messages=["feat: a", "ci: b"]))
    bad = VersionManager(default_config(), root=tmp_path, runner=FakeGit(tag=None, messages=["feat: a", "wip"]))
    unknown = VersionManager(default_config(), root=tmp_path, runner=FakeGit(tag=None, messages=["feature: a"]))

    assert good.validate_conventional_commits()
    assert not bad.validate_conventional_commits()
    assert not unknown.validate_conventional_commits()


def test_create_tag_uses_prefix(tmp_path: Path) -> None:
    config = validate_config({"versioning": {"tagPrefix": "release-"}})
    git = FakeGit(tag=None, messages=[])

    tag = VersionManager(config, root=tmp_path, runner=git).create_tag("1.0.0")

    assert tag == "release-1.0.0"
    assert git.calls[-1] == ["git", "tag", "-a", "release-1.0.0", "-m", "Release release-1.0.0"]


def test_history_errors_raise_versioning_error(tmp_path: Path) -> None:
    def broken(args: Sequence[str], cwd: Path) -> str:
        raise subprocess.CalledProcessError(128, list(args))

    manager = VersionManager(default_config(), root=tmp_path, runner=broken)

    with pytest.raises(VersioningError, match="cannot read git history"):
        manager.commit_messages()
