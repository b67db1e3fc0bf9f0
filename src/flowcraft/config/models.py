# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the flowcraft pipeline generator."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..merge.models import MergeInstruction, MergeOperation
from ..merge.paths import InvalidPathError, split_path

DOMAIN_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9][a-z0-9_-]*$")
DEFAULT_BRANCH_FLOW: Final[tuple[str, ...]] = ("develop", "main")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class _ConfigModel(BaseModel):
    """Base model accepting camelCase keys from configuration files."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class DomainConfig(_ConfigModel):
    """Describe one independently tested area of the repository."""

    paths: list[str] = Field(min_length=1)
    test_command: str = "make test"
    build_command: str | None = None
    runs_on: str = "ubuntu-latest"


class WorkflowConfig(_ConfigModel):
    """Describe where and under which name the pipeline is written."""

    output_dir: str = ".github/workflows"
    file_name: str = "pipeline.yml"
    name: str = "Pipeline"


class VersioningConfig(_ConfigModel):
    """Control semantic version management from commit history."""

    enabled: bool = False
    tag_prefix: str = "v"
    conventional_commits: bool = True


class MergeRuleConfig(_ConfigModel):
    """User-declared merge instruction appended after the template ones."""

    path: str
    operation: MergeOperation = MergeOperation.MERGE
    value: Any = None
    required: bool = True

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        try:
            split_path(value)
        except InvalidPathError as exc:
            raise ValueError(str(exc)) from exc
        return value

    def to_instruction(self) -> MergeInstruction:
        """Return the merge instruction described by this rule."""

        return MergeInstruction(
            path=self.path,
            operation=self.operation,
            value=self.value,
            required=self.required,
        )


class FlowcraftConfig(_ConfigModel):
    """Root configuration consumed by the pipeline template."""

    ci_provider: Literal["github"] = "github"
    main_branch: str = "main"
    branch_flow: list[str] = Field(default_factory=lambda: list(DEFAULT_BRANCH_FLOW))
    domains: dict[str, DomainConfig] = Field(default_factory=dict)
    workflows: WorkflowConfig = Field(default_factory=WorkflowConfig)
    versioning: VersioningConfig = Field(default_factory=VersioningConfig)
    merge_rules: list[MergeRuleConfig] = Field(default_factory=list)

    @field_validator("domains")
    @classmethod
    def _check_domain_names(cls, value: dict[str, DomainConfig]) -> dict[str, DomainConfig]:
        invalid = sorted(name for name in value if not DOMAIN_NAME_PATTERN.match(name))
        if invalid:
            raise ValueError(f"domain names must match {DOMAIN_NAME_PATTERN.pattern}: {', '.join(invalid)}")
        return value

    @model_validator(mode="after")
    def _check_branch_flow(self) -> FlowcraftConfig:
        if not self.branch_flow:
            raise ValueError("branchFlow must list at least one branch")
        duplicates = sorted({branch for branch in self.branch_flow if self.branch_flow.count(branch) > 1})
        if duplicates:
            raise ValueError(f"branchFlow contains duplicate branches: {', '.join(duplicates)}")
        if self.main_branch not in self.branch_flow:
            raise ValueError(f"mainBranch '{self.main_branch}' must appear in branchFlow")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-compatible camelCase representation."""

        return self.model_dump(mode="json", by_alias=True)


def validate_config(data: Mapping[str, Any]) -> FlowcraftConfig:
    """Validate raw configuration data.

    Args:
        data: Mapping loaded from a configuration source.

    Returns:
        FlowcraftConfig: Validated configuration model.

    Raises:
        ConfigError: If ``data`` does not describe a valid configuration.
    """

    if not isinstance(data, Mapping):
        raise ConfigError(f"configuration must be an object, got {type(data).__name__}")
    try:
        return FlowcraftConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from exc


def _format_validation_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"]
        messages.append(f"{location}: {message}" if location else message)
    return "invalid configuration: " + "; ".join(messages)


__all__ = [
    "ConfigError",
    "DomainConfig",
    "FlowcraftConfig",
    "MergeRuleConfig",
    "VersioningConfig",
    "WorkflowConfig",
    "validate_config",
]
