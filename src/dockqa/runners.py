# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Strategies for invoking hadolint and the policy choosing between them.

Two closed variants implement the :class:`Runner` protocol:

* :class:`BinaryRunner` executes a local ``hadolint`` against the file path.
* :class:`ContainerRunner` runs the ``hadolint/hadolint`` image and streams the
  Dockerfile through the container's stdin; the path is never mounted.

:func:`select_runner` is a pure decision over two availability flags. Probing
lives in :func:`binary_probe` and :func:`container_probe`, which callers inject.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import ClassVar, Final, Protocol, TypeAlias

from .config import RunnerSettings
from .process_utils import ProcessLauncher, probe_command, spawn_inherited
from .thresholds import Threshold

UNKNOWN_RUNNER: Final[str] = "unknown"
STDIN_MARKER: Final[str] = "-"


class RunnerKind(StrEnum):
    """Identifier reported in the result for each execution strategy."""

    BINARY = "binary"
    CONTAINER = "docker"


@dataclass(slots=True, frozen=True)
class Unavailable:
    """Neither execution strategy can be used."""

    reason: str


RunnerChoice: TypeAlias = RunnerKind | Unavailable


class Runner(Protocol):
    """Capability shared by every hadolint execution strategy."""

    @property
    def kind(self) -> RunnerKind: ...

    def command(self, target: Path, threshold: Threshold) -> list[str]:
        """Return the argument vector used to lint ``target``."""
        ...

    def command_description(self, target: Path, threshold: Threshold) -> str:
        """Return a shell-quoted rendering of :meth:`command` for diagnostics."""
        ...

    def execute(self, target: Path, threshold: Threshold) -> int:
        """Lint ``target`` and return ``0`` when hadolint accepts it."""
        ...


@dataclass(slots=True, frozen=True)
class BinaryRunner:
    """Invoke a locally installed hadolint executable."""

    executable: str = "hadolint"
    launcher: ProcessLauncher = field(default=spawn_inherited, repr=False, compare=False)

    KIND: ClassVar[RunnerKind] = RunnerKind.BINARY

    @property
    def kind(self) -> RunnerKind:
        return self.KIND

    def command(self, target: Path, threshold: Threshold) -> list[str]:
        return [self.executable, "--failure-threshold", threshold.value, str(target)]

    def command_description(self, target: Path, threshold: Threshold) -> str:
        return shlex.join(self.command(target, threshold))

    def execute(self, target: Path, threshold: Threshold) -> int:
        return self.launcher(self.command(target, threshold))


@dataclass(slots=True, frozen=True)
class ContainerRunner:
    """Run hadolint inside a container, feeding the Dockerfile on stdin."""

    runtime: str = "docker"
    image: str = "hadolint/hadolint"
    launcher: ProcessLauncher = field(default=spawn_inherited, repr=False, compare=False)

    KIND: ClassVar[RunnerKind] = RunnerKind.CONTAINER

    @property
    def kind(self) -> RunnerKind:
        return self.KIND

    def command(self, target: Path, threshold: Threshold) -> list[str]:
        # hadolint reads the Dockerfile from stdin; the path is never passed.
        return [
            self.runtime,
            "run",
            "--rm",
            "-i",
            self.image,
            "--failure-threshold",
            threshold.value,
            STDIN_MARKER,
        ]

    def command_description(self, target: Path, threshold: Threshold) -> str:
        return f"{shlex.join(self.command(target, threshold))} < {shlex.quote(str(target))}"

    def execute(self, target: Path, threshold: Threshold) -> int:
        return self.launcher(self.command(target, threshold), stdin=target)


def select_runner(binary_available: bool, container_available: bool) -> RunnerChoice:
    """Pick the execution strategy; a local binary always wins.

    Args:
        binary_available: Whether a local hadolint executable responded.
        container_available: Whether the container runtime responded.

    Returns:
        RunnerChoice: Selected kind, or :class:`Unavailable` with a reason naming
        both missing capabilities.
    """

    if binary_available:
        return RunnerKind.BINARY
    if container_available:
        return RunnerKind.CONTAINER
    return Unavailable(
        "Could not find `hadolint` and the container runtime (docker) is not available. "
        "Install one of them and try again."
    )


def build_runner(
    kind: RunnerKind,
    settings: RunnerSettings | None = None,
    *,
    launcher: ProcessLauncher = spawn_inherited,
) -> Runner:
    """Instantiate the runner variant for ``kind`` from ``settings``."""

    active = settings or RunnerSettings()
    match kind:
        case RunnerKind.BINARY:
            return BinaryRunner(executable=active.hadolint, launcher=launcher)
        case RunnerKind.CONTAINER:
            return ContainerRunner(runtime=active.container_runtime, image=active.image, launcher=launcher)
    raise ValueError(f"unsupported runner kind: {kind!r}")


def binary_probe(settings: RunnerSettings, probe: Callable[[list[str]], bool] = probe_command) -> bool:
    """Return ``True`` when ``<hadolint> --version`` exits successfully."""

    return probe([settings.hadolint, "--version"])


def container_probe(settings: RunnerSettings, probe: Callable[[list[str]], bool] = probe_command) -> bool:
    """Return ``True`` when ``<runtime> version`` exits successfully."""

    return probe([settings.container_runtime, "version"])


__all__ = [
    "UNKNOWN_RUNNER",
    "BinaryRunner",
    "ContainerRunner",
    "Runner",
    "RunnerChoice",
    "RunnerKind",
    "Unavailable",
    "binary_probe",
    "build_runner",
    "container_probe",
    "select_runner",
]
