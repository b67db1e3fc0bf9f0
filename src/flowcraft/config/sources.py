# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Concrete configuration sources (JSON, YAML, pyproject) and discovery."""

from __future__ import annotations

import json
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, Final

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import ConfigError

MODULE_NAME: Final[str] = "trunkflow"
DEFAULT_CONFIG_NAME: Final[str] = f".{MODULE_NAME}rc.json"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
SEARCH_PLACES: Final[tuple[str, ...]] = (
    f".{MODULE_NAME}rc",
    f".{MODULE_NAME}rc.json",
    f".{MODULE_NAME}rc.yaml",
    f".{MODULE_NAME}rc.yml",
    f"{MODULE_NAME}.config.json",
    PYPROJECT_FILE,
)


class ConfigSource(ABC):
    """Provide a configuration fragment read from one location."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def name(self) -> str:
        """Return the display name of the source."""

        return str(self.path)

    @abstractmethod
    def load(self) -> Mapping[str, Any]:
        """Return the raw configuration mapping.

        Raises:
            ConfigError: If the file is missing or cannot be parsed.
        """

    def exists(self) -> bool:
        """Return whether the source file is present."""

        return self.path.is_file()

    def _read_text(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigError(f"configuration file not found: {self.path}") from exc
        except OSError as exc:
            raise ConfigError(f"cannot read configuration file {self.path}: {exc}") from exc


class JsonConfigSource(ConfigSource):
    """Load configuration from a JSON document."""

    def load(self) -> Mapping[str, Any]:
        try:
            data = json.loads(self._read_text())
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON in {self.path} (line {exc.lineno}, column {exc.colno}): {exc.msg}") from exc
        return _require_mapping(data, self.path)


class YamlConfigSource(ConfigSource):
    """Load configuration from a YAML (or JSON-compatible) document."""

    def load(self) -> Mapping[str, Any]:
        yaml = YAML(typ="safe", pure=True)
        try:
            data = yaml.load(self._read_text())
        except YAMLError as exc:
            raise ConfigError(f"invalid YAML in {self.path}: {exc}") from exc
        if data is None:
            return {}
        return _require_mapping(data, self.path)


class PyProjectConfigSource(ConfigSource):
    """Read configuration from ``[tool.trunkflow]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        try:
            data = tomllib.loads(self._read_text())
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {self.path}: {exc}") from exc
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(MODULE_NAME)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)

    def exists(self) -> bool:
        if not super().exists():
            return False
        try:
            return bool(self.load())
        except ConfigError:
            return True


def source_for(path: Path) -> ConfigSource:
    """Return the source class matching the file name of ``path``.

    Args:
        path: Configuration file location.

    Returns:
        ConfigSource: Source able to parse ``path``.
    """

    if path.name == PYPROJECT_FILE:
        return PyProjectConfigSource(path)
    if path.suffix == ".json":
        return JsonConfigSource(path)
    return YamlConfigSource(path)


def search_config(start: Path) -> ConfigSource | None:
    """Search ``start`` and its parents for the first configuration file.

    Args:
        start: Directory where the search begins.

    Returns:
        ConfigSource | None: Source for the first match, or ``None``.
    """

    for directory in _walk_up(start.resolve()):
        for place in SEARCH_PLACES:
            source = source_for(directory / place)
            if source.exists():
                return source
    return None


def _walk_up(start: Path) -> Iterator[Path]:
    yield start
    yield from start.parents


def _require_mapping(data: object, path: Path) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ConfigError(f"configuration in {path} must be an object")
    return data


__all__ = [
    "ConfigSource",
    "DEFAULT_CONFIG_NAME",
    "JsonConfigSource",
    "MODULE_NAME",
    "PyProjectConfigSource",
    "SEARCH_PLACES",
    "YamlConfigSource",
    "search_config",
    "source_for",
]
