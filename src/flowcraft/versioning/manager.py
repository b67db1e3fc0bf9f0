# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Semantic version proposals derived from conventional commit history."""

from __future__ import annotations

import re
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from packaging.version import InvalidVersion, Version

from ..config.models import FlowcraftConfig
from ..process import run_command

GitRunner = Callable[[Sequence[str], Path], str]

INITIAL_VERSION: Final[str] = "0.0.0"
RECORD_SEPARATOR: Final[str] = "\x1e"
COMMIT_TYPES: Final[frozenset[str]] = frozenset(
    {"build", "chore", "ci", "docs", "feat", "fix", "perf", "refactor", "revert", "style", "test"},
)
HEADER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[^()\r\n]+)\))?(?P<breaking>!)?: (?P<subject>\S.*)$",
)
BREAKING_FOOTER: Final[re.Pattern[str]] = re.compile(r"^BREAKING[ -]CHANGE: ", re.MULTILINE)


class VersioningError(RuntimeError):
    """Raised when commit history cannot be inspected."""


class BumpType(str, Enum):
    """Enumerate semantic version increments."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ConventionalCommit:
    """Parsed header and footer information of one commit message."""

    type: str
    scope: str | None
    subject: str
    breaking: bool

    @property
    def bump(self) -> BumpType:
        """Return the increment implied by this commit alone."""

        if self.breaking:
            return BumpType.MAJOR
        if self.type == "feat":
            return BumpType.MINOR
        if self.type in {"fix", "perf"}:
            return BumpType.PATCH
        return BumpType.NONE


@dataclass(frozen=True, slots=True)
class NextVersion:
    """Proposed version and the increment that produced it."""

    version: str
    type: BumpType


def parse_commit_message(message: str) -> ConventionalCommit | None:
    """Return the conventional commit described by ``message``, if any.

    Args:
        message: Full commit message (header, body and footers).

    Returns:
        ConventionalCommit | None: Parsed commit, or ``None`` when the header
        does not follow the conventional commit format.
    """

    header, _, body = message.strip().partition("\n")
    match = HEADER_PATTERN.match(header.strip())
    if match is None:
        return None
    return ConventionalCommit(
        type=match.group("type").lower(),
        scope=match.group("scope"),
        subject=match.group("subject"),
        breaking=bool(match.group("breaking")) or bool(BREAKING_FOOTER.search(body)),
    )


def bump_version(current: str, bump: BumpType) -> str:
    """Return ``current`` incremented by ``bump``.

    Raises:
        VersioningError: If ``current`` is not a valid version.
    """

    try:
        parsed = Version(current)
    except InvalidVersion as exc:
        raise VersioningError(f"invalid version '{current}'") from exc
    major, minor, patch = (list(parsed.release) + [0, 0, 0])[:3]
    if bump is BumpType.MAJOR:
        return f"{major + 1}.0.0"
    if bump is BumpType.MINOR:
        return f"{major}.{minor + 1}.0"
    if bump is BumpType.PATCH:
        return f"{major}.{minor}.{patch + 1}"
    return f"{major}.{minor}.{patch}"


def _default_runner(args: Sequence[str], cwd: Path) -> str:
    return run_command(list(args), cwd=cwd, capture_output=True).stdout


class VersionManager:
    """Inspect git history to report and tag semantic versions."""

    def __init__(self, config: FlowcraftConfig, *, root: Path, runner: GitRunner | None = None) -> None:
        """Create a version manager.

        Args:
            config: Configuration providing the tag prefix and commit policy.
            root: Repository root where git commands run.
            runner: Optional command runner returning stdout; git is invoked
                through :func:`run_command` when omitted.
        """

        self._settings = config.versioning
        self._root = root
        self._runner = runner or _default_runner

    def latest_tag(self) -> str | None:
        """Return the most recent tag reachable from ``HEAD``, if any."""

        try:
            output = self._runner(["git", "describe", "--tags", "--abbrev=0"], self._root)
        except subprocess.CalledProcessError:
            return None
        except FileNotFoundError as exc:
            raise VersioningError(str(exc)) from exc
        tag = output.strip()
        return tag or None

    def get_current_version(self) -> str:
        """Return the version of the latest tag with its prefix removed."""

        tag = self.latest_tag()
        if tag is None:
            return INITIAL_VERSION
        candidate = tag.removeprefix(self._settings.tag_prefix)
        try:
            return str(Version(candidate))
        except InvalidVersion:
            return INITIAL_VERSION

    def commit_messages(self) -> list[str]:
        """Return messages of non-merge commits since the latest tag, newest first.

        Raises:
            VersioningError: If git history cannot be read.
        """

        tag = self.latest_tag()
        command = ["git", "log", "--no-merges", f"--format=%B{RECORD_SEPARATOR}"]
        if tag is not None:
            command.append(f"{tag}..HEAD")
        try:
            output = self._runner(command, self._root)
        except (subprocess.CalledProcessError, FileNotFoundError) as exc:
            raise VersioningError(f"cannot read git history in {self._root}: {exc}") from exc
        return [record.strip() for record in output.split(RECORD_SEPARATOR) if record.strip()]

    def calculate_next_version(self) -> NextVersion:
        """Return the version implied by the commits since the latest tag."""

        current = self.get_current_version()
        messages = self.commit_messages()
        if not self._settings.conventional_commits:
            bump = BumpType.PATCH if messages else BumpType.NONE
            return NextVersion(version=bump_version(current, bump), type=bump)
        bump = BumpType.NONE
        for message in messages:
            commit = parse_commit_message(message)
            if commit is None:
                continue
            bump = _stronger(bump, commit.bump)
        return NextVersion(version=bump_version(current, bump), type=bump)

    def validate_conventional_commits(self) -> bool:
        """Return ``True`` when every commit since the latest tag is conventional."""

        for message in self.commit_messages():
            commit = parse_commit_message(message)
            if commit is None or commit.type not in COMMIT_TYPES:
                return False
        return True

    def create_tag(self, version: str) -> str:
        """Create an annotated tag for ``version`` and return its name.

        Raises:
            VersioningError: If git refuses to create the tag.
        """

        tag = f"{self._settings.tag_prefix}{version}"
        try:
            self._runner(["git", "tag", "-a", tag, "-m", f"Release {tag}"], self._root)
        except (subprocess.CalledProcessError, FileNotFoundError) as exc:
            raise VersioningError(f"cannot create tag {tag}: {exc}") from exc
        return tag


_BUMP_ORDER: Final[tuple[BumpType, ...]] = (BumpType.NONE, BumpType.PATCH, BumpType.MINOR, BumpType.MAJOR)


def _stronger(left: BumpType, right: BumpType) -> BumpType:
    return left if _BUMP_ORDER.index(left) >= _BUMP_ORDER.index(right) else right


__all__ = [
    "BumpType",
    "ConventionalCommit",
    "NextVersion",
    "VersionManager",
    "VersioningError",
    "bump_version",
    "parse_commit_message",
]
