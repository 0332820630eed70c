# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runner settings loaded from ``pyproject.toml`` and the environment.

Precedence, lowest first:

1. Built-in defaults on :class:`RunnerSettings`.
2. The ``[tool.dockqa]`` table of ``<root>/pyproject.toml``.
3. ``DOCKQA_HADOLINT``, ``DOCKQA_CONTAINER_RUNTIME`` and ``DOCKQA_HADOLINT_IMAGE``.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "dockqa"

ENV_OVERRIDES: Final[dict[str, str]] = {
    "DOCKQA_HADOLINT": "hadolint",
    "DOCKQA_CONTAINER_RUNTIME": "container_runtime",
    "DOCKQA_HADOLINT_IMAGE": "image",
}


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class RunnerSettings(BaseModel):
    """Names used to invoke hadolint locally or through a container runtime."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    hadolint: str = "hadolint"
    container_runtime: str = "docker"
    image: str = "hadolint/hadolint"

    @field_validator("hadolint", "container_runtime", "image")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


def _read_pyproject_section(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return {str(key).replace("-", "_"): value for key, value in section.items()}


def load_settings(root: Path, *, env: Mapping[str, str] | None = None) -> RunnerSettings:
    """Return runner settings for the project rooted at ``root``.

    Args:
        root: Directory searched for ``pyproject.toml``.
        env: Environment mapping consulted for overrides (defaults to ``os.environ``).

    Returns:
        RunnerSettings: Validated, merged settings.

    Raises:
        ConfigError: If the TOML cannot be parsed or contains invalid values.
    """

    environment = os.environ if env is None else env
    data = _read_pyproject_section(root / PYPROJECT_FILENAME)
    for variable, field_name in ENV_OVERRIDES.items():
        value = environment.get(variable)
        if value:
            data[field_name] = value
    try:
        return RunnerSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.{PYPROJECT_SECTION_KEY}] configuration: {exc}") from exc


__all__ = ["ENV_OVERRIDES", "ConfigError", "RunnerSettings", "load_settings"]
