# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Change-detection cache for pipeline generation."""

from __future__ import annotations

from .idempotency import CacheSnapshot, IdempotencyManager, digest_config, digest_file

__all__ = ["CacheSnapshot", "IdempotencyManager", "digest_config", "digest_file"]
