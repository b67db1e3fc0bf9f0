# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workflow templates expanded into merge plans."""

from __future__ import annotations

from .pipeline import PipelinePlan, build_pipeline_plan, pipeline_test_jobs, render_base_template

__all__ = ["PipelinePlan", "build_pipeline_plan", "pipeline_test_jobs", "render_base_template"]
