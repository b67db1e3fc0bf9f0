# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Content-hash cache used to skip regeneration when nothing changed."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, ValidationError

from .. import __version__
from ..config.models import FlowcraftConfig

LOGGER = logging.getLogger(__name__)

CACHE_DIR_NAME: Final[str] = ".flowcraft"
CACHE_FILE_NAME: Final[str] = "cache.json"
MISSING_OUTPUT_DIGEST: Final[str] = "missing"


class _CacheMiss(Exception):
    """Raised when the stored snapshot cannot be used."""


class CacheSnapshot(BaseModel):
    """Digests of every input that influences the generated pipeline."""

    model_config = ConfigDict(frozen=True)

    config_digest: str
    output_digest: str
    tool_version: str


def digest_config(config: FlowcraftConfig) -> str:
    """Return the sha256 digest of the canonical JSON form of ``config``."""

    canonical = json.dumps(config.to_payload(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def digest_file(path: Path) -> str:
    """Return the sha256 digest of ``path`` or a marker when it is absent."""

    try:
        payload = path.read_bytes()
    except FileNotFoundError:
        return MISSING_OUTPUT_DIGEST
    return hashlib.sha256(payload).hexdigest()


class IdempotencyManager:
    """Decide whether the pipeline must be regenerated and record the result."""

    def __init__(
        self,
        config: FlowcraftConfig,
        *,
        root: Path,
        output_path: Path,
        cache_dir: Path | None = None,
        tool_version: str = __version__,
    ) -> None:
        """Initialise the manager for one project.

        Args:
            config: Configuration that drives generation.
            root: Project root directory.
            output_path: Workflow file written by the generator.
            cache_dir: Directory holding the cache file; defaults to
                ``<root>/.flowcraft``.
            tool_version: Generator version folded into the snapshot.
        """

        self._config = config
        self._output_path = output_path
        self._cache_path = (cache_dir or root / CACHE_DIR_NAME) / CACHE_FILE_NAME
        self._tool_version = tool_version

    @property
    def cache_path(self) -> Path:
        """Return the location of the cache file."""

        return self._cache_path

    def snapshot(self) -> CacheSnapshot:
        """Return digests describing the current inputs."""

        return CacheSnapshot(
            config_digest=digest_config(self._config),
            output_digest=digest_file(self._output_path),
            tool_version=self._tool_version,
        )

    def has_changes(self) -> bool:
        """Return ``True`` when generation must run.

        A missing output file, a missing or unreadable cache, or any digest
        that differs from the stored snapshot counts as a change.
        """

        current = self.snapshot()
        if current.output_digest == MISSING_OUTPUT_DIGEST:
            return True
        try:
            stored = self._read()
        except _CacheMiss:
            return True
        return stored != current

    def update_cache(self) -> None:
        """Persist the snapshot of the current inputs, ignoring disk errors."""

        payload = self.snapshot().model_dump(mode="json")
        try:
            self._cache_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = self._cache_path.with_suffix(".tmp")
            temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
            temp_path.replace(self._cache_path)
        except OSError as exc:
            LOGGER.debug("could not write cache %s: %s", self._cache_path, exc)

    def _read(self) -> CacheSnapshot:
        try:
            raw = json.loads(self._cache_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise _CacheMiss from exc
        try:
            return CacheSnapshot.model_validate(raw)
        except ValidationError as exc:
            raise _CacheMiss from exc


__all__ = [
    "CACHE_DIR_NAME",
    "CACHE_FILE_NAME",
    "CacheSnapshot",
    "IdempotencyManager",
    "digest_config",
    "digest_file",
]
