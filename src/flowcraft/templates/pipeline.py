# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expand a :class:`FlowcraftConfig` into a GitHub Actions merge plan."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final

from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.scalarstring import LiteralScalarString

from ..config.models import DomainConfig, FlowcraftConfig
from ..document.tree import serialize_document
from ..merge.models import MergeInstruction, MergeOperation

HEADER_COMMENT: Final[str] = (
    "Generated by flowcraft. Keys managed by flowcraft are merged on every run;\n"
    "everything else in this file is left as you wrote it."
)
CHECKOUT_ACTION: Final[str] = "actions/checkout@v4"
PATHS_FILTER_ACTION: Final[str] = "dorny/paths-filter@v3"
DEFAULT_RUNNER: Final[str] = "ubuntu-latest"
CHANGES_JOB: Final[str] = "changes"
FALLBACK_TEST_JOB: Final[str] = "test"
VERSION_JOB: Final[str] = "version"


@dataclass(frozen=True, slots=True)
class PipelinePlan:
    """Base document and ordered instructions for one workflow file."""

    base_template: str
    instructions: tuple[MergeInstruction, ...]


def build_pipeline_plan(config: FlowcraftConfig) -> PipelinePlan:
    """Return the merge plan that renders the pipeline for ``config``.

    Args:
        config: Validated flowcraft configuration.

    Returns:
        PipelinePlan: Base template text and instructions in application order.
    """

    return PipelinePlan(
        base_template=render_base_template(config),
        instructions=tuple(_iter_instructions(config)),
    )


def render_base_template(config: FlowcraftConfig) -> str:
    """Return the document used when no workflow file exists yet."""

    tree = CommentedMap()
    tree["name"] = config.workflows.name
    tree.yaml_set_start_comment(HEADER_COMMENT)
    return serialize_document(tree)


def pipeline_test_jobs(config: FlowcraftConfig) -> list[str]:
    """Return the ids of the test jobs generated for ``config``."""

    if not config.domains:
        return [FALLBACK_TEST_JOB]
    return [f"test-{name}" for name in config.domains]


def _iter_instructions(config: FlowcraftConfig) -> Iterator[MergeInstruction]:
    branches = list(config.branch_flow)
    yield MergeInstruction("name", MergeOperation.PRESERVE, config.workflows.name)
    yield MergeInstruction("on.push.branches", MergeOperation.MERGE, branches)
    yield MergeInstruction("on.pull_request.branches", MergeOperation.MERGE, branches)
    yield MergeInstruction("on.workflow_dispatch", MergeOperation.PRESERVE, {})
    yield MergeInstruction("permissions.contents", MergeOperation.PRESERVE, "read")
    yield MergeInstruction(
        "concurrency",
        MergeOperation.PRESERVE,
        {"group": "${{ github.workflow }}-${{ github.ref }}", "cancel-in-progress": True},
    )
    yield MergeInstruction("env.FLOWCRAFT_MAIN_BRANCH", MergeOperation.SET, config.main_branch)

    if config.domains:
        yield MergeInstruction(f"jobs.{CHANGES_JOB}", MergeOperation.OVERWRITE, _changes_job(config))
        for name, domain in config.domains.items():
            yield MergeInstruction(f"jobs.test-{name}", MergeOperation.MERGE, _domain_test_job(name, domain))
    else:
        yield MergeInstruction(f"jobs.{FALLBACK_TEST_JOB}", MergeOperation.MERGE, _fallback_test_job())

    if config.versioning.enabled:
        yield MergeInstruction(f"jobs.{VERSION_JOB}", MergeOperation.SET, _version_job(config))

    for rule in config.merge_rules:
        yield rule.to_instruction()


def _changes_job(config: FlowcraftConfig) -> dict[str, object]:
    filters = "".join(
        f"{name}:\n" + "".join(f"  - '{pattern}'\n" for pattern in domain.paths)
        for name, domain in config.domains.items()
    )
    return {
        "runs-on": DEFAULT_RUNNER,
        "outputs": {name: f"${{{{ steps.filter.outputs.{name} }}}}" for name in config.domains},
        "steps": [
            {"uses": CHECKOUT_ACTION},
            {"id": "filter", "uses": PATHS_FILTER_ACTION, "with": {"filters": LiteralScalarString(filters)}},
        ],
    }


def _domain_test_job(name: str, domain: DomainConfig) -> dict[str, object]:
    steps: list[dict[str, object]] = [{"uses": CHECKOUT_ACTION}]
    if domain.build_command:
        steps.append({"name": "Build", "run": domain.build_command})
    steps.append({"name": "Test", "run": domain.test_command})
    return {
        "name": f"Test {name}",
        "needs": [CHANGES_JOB],
        "if": f"needs.{CHANGES_JOB}.outputs.{name} == 'true'",
        "runs-on": domain.runs_on,
        "steps": steps,
    }


def _fallback_test_job() -> dict[str, object]:
    return {
        "name": "Test",
        "runs-on": DEFAULT_RUNNER,
        "steps": [{"uses": CHECKOUT_ACTION}, {"name": "Test", "run": "make test"}],
    }


def _version_job(config: FlowcraftConfig) -> dict[str, object]:
    main_ref = f"refs/heads/{config.main_branch}"
    return {
        "name": "Version",
        "needs": pipeline_test_jobs(config),
        "if": f"${{{{ !failure() && !cancelled() && github.event_name == 'push' && github.ref == '{main_ref}' }}}}",
        "runs-on": DEFAULT_RUNNER,
        "steps": [
            {"uses": CHECKOUT_ACTION, "with": {"fetch-depth": 0}},
            {"name": "Compute next version", "run": "pipx run flowcraft version --check"},
        ],
    }


__all__ = ["PipelinePlan", "build_pipeline_plan", "render_base_template", "pipeline_test_jobs"]
