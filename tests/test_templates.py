# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the pipeline template plan."""

from __future__ import annotations

from typing import Any

from flowcraft.config import validate_config
from flowcraft.document import parse_document
from flowcraft.document.tree import to_plain
from flowcraft.merge import MergeOperation, merge_document
from flowcraft.templates import build_pipeline_plan, pipeline_test_jobs
from flowcraft.templates.pipeline import HEADER_COMMENT


def _render(payload: dict[str, Any], existing: str | None = None) -> tuple[str, dict[str, Any]]:
    plan = build_pipeline_plan(validate_config(payload))
    result = merge_document(existing_content=existing, base_template=plan.base_template, instructions=plan.instructions)
    data = to_plain(parse_document(result.content))
    assert isinstance(data, dict)
    return result.content, data


def test_base_template_carries_name_and_header() -> None:
    plan = build_pipeline_plan(validate_config({"workflows": {"name": "Delivery"}}))

    assert plan.base_template.startswith("# Generated by flowcraft.")
    assert "name: Delivery\n" in plan.base_template
    assert HEADER_COMMENT.splitlines()[0] in plan.base_template


def test_plan_without_domains_uses_single_test_job() -> None:
    config = validate_config({})
    plan = build_pipeline_plan(config)

    paths = [instruction.path for instruction in plan.instructions]

    assert paths[:3] == ["name", "on.push.branches", "on.pull_request.branches"]
    assert "jobs.test" in paths
    assert "jobs.changes" not in paths
    assert "jobs.version" not in paths
    assert pipeline_test_jobs(config) == ["test"]


def test_plan_with_domains_filters_changes(config_payload: dict[str, Any]) -> None:
    _, data = _render(config_payload)

    jobs = data["jobs"]
    assert list(jobs) == ["changes", "test-api", "test-web", "version"]
    assert jobs["changes"]["outputs"] == {
        "api": "${{ steps.filter.outputs.api }}",
        "web": "${{ steps.filter.outputs.web }}",
    }
    filters = jobs["changes"]["steps"][1]["with"]["filters"]
    assert filters == "api:\n  - 'api/**'\nweb:\n  - 'web/**'\n  - 'shared/**'\n"
    assert jobs["test-web"]["steps"][1:] == [{"name": "Build", "run": "npm ci"}, {"name": "Test", "run": "npm test"}]
    assert jobs["test-api"]["if"] == "needs.changes.outputs.api == 'true'"
    assert jobs["version"]["needs"] == ["test-api", "test-web"]
    assert data["on"]["push"]["branches"] == ["develop", "staging", "main"]
    assert data["env"] == {"FLOWCRAFT_MAIN_BRANCH": "main"}


def test_render_keeps_user_jobs_and_settings(config_payload: dict[str, Any]) -> None:
    existing = (
        "name: Company CI\n"
        "permissions:\n"
        "  contents: write  # releases need write access\n"
        "jobs:\n"
        "  test-api:\n"
        "    runs-on: self-hosted\n"
        "    timeout-minutes: 30\n"
        "  deploy:\n"
        "    runs-on: ubuntu-latest\n"
    )

    content, data = _render(config_payload, existing)

    assert data["name"] == "Company CI"
    assert data["permissions"] == {"contents": "write"}
    assert "# releases need write access" in content
    assert data["jobs"]["deploy"] == {"runs-on": "ubuntu-latest"}
    assert data["jobs"]["test-api"]["timeout-minutes"] == 30
    assert data["jobs"]["test-api"]["runs-on"] == "ubuntu-latest"


def test_render_is_stable_across_runs(config_payload: dict[str, Any]) -> None:
    first, _ = _render(config_payload)
    second, _ = _render(config_payload, first)

    assert second == first


def test_merge_rules_run_after_template_instructions() -> None:
    plan = build_pipeline_plan(
        validate_config(
            {"mergeRules": [{"path": "jobs.test.runs-on", "operation": "overwrite", "value": "macos-latest"}]},
        ),
    )

    last = plan.instructions[-1]
    assert last.path == "jobs.test.runs-on"
    assert last.operation is MergeOperation.OVERWRITE
    _, data = _render({"mergeRules": [{"path": "jobs.test.runs-on", "operation": "overwrite", "value": "macos-latest"}]})
    assert data["jobs"]["test"]["runs-on"] == "macos-latest"
