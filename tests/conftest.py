# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import itertools
import json
from collections.abc import Callable
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from dockqa.cli.lint import run_lint_cli
from dockqa.executor import LintEnvironment
from dockqa.logging import DiagnosticLogger
from dockqa.models import LintResult
from dockqa.runners import RunnerKind
from dockqa.thresholds import Threshold


@dataclass
class RecordingRunner:
    """Runner double returning scripted statuses and recording every call."""

    statuses: dict[Path, int] = field(default_factory=dict)
    kind: RunnerKind = RunnerKind.BINARY
    calls: list[tuple[Path, Threshold]] = field(default_factory=list)
    errors: dict[Path, Exception] = field(default_factory=dict)

    def command(self, target: Path, threshold: Threshold) -> list[str]:
        return ["fake-hadolint", "--failure-threshold", threshold.value, str(target)]

    def command_description(self, target: Path, threshold: Threshold) -> str:
        return " ".join(self.command(target, threshold))

    def execute(self, target: Path, threshold: Threshold) -> int:
        self.calls.append((target, threshold))
        if target in self.errors:
            raise self.errors[target]
        return self.statuses.get(target, 0)


@dataclass
class LintHarness:
    """Run the lint pipeline against fake collaborators and capture both streams."""

    runner: RecordingRunner
    binary_available: bool = True
    container_available: bool = False
    exists: Callable[[Path], bool] = Path.exists
    clock: Callable[[], int] = field(default_factory=lambda: itertools.count(1_000, 7).__next__)
    stdout: StringIO = field(default_factory=StringIO)
    stderr: StringIO = field(default_factory=StringIO)
    probe_calls: list[str] = field(default_factory=list)
    probe_error: Exception | None = None
    result: LintResult | None = None

    def _binary(self) -> bool:
        self.probe_calls.append("binary")
        if self.probe_error is not None:
            raise self.probe_error
        return self.binary_available

    def _container(self) -> bool:
        self.probe_calls.append("container")
        return self.container_available

    def _runner_for(self, kind: RunnerKind) -> RecordingRunner:
        self.runner.kind = kind
        return self.runner

    def environment(self) -> LintEnvironment:
        return LintEnvironment(
            binary_available=self._binary,
            container_available=self._container,
            exists=self.exists,
            clock=self.clock,
            runner_factory=self._runner_for,
        )

    def logger(self) -> DiagnosticLogger:
        console = Console(file=self.stderr, force_terminal=False, color_system=None, soft_wrap=True, width=200)
        return DiagnosticLogger(console=console)

    def run(self, *tokens: str) -> LintResult:
        self.result = run_lint_cli(
            list(tokens),
            environment=self.environment(),
            logger=self.logger(),
            stdout=self.stdout,
        )
        return self.result

    @property
    def diagnostics(self) -> str:
        return self.stderr.getvalue()

    def payload(self) -> dict[str, Any]:
        lines = self.stdout.getvalue().splitlines()
        assert len(lines) == 1, lines
        return json.loads(lines[0])


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Switch into an empty directory and return its absolute path."""

    monkeypatch.chdir(tmp_path)
    return Path.cwd()


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def harness(workspace: Path, recording_runner: RecordingRunner) -> LintHarness:
    """Return a harness whose runner records calls instead of spawning processes."""

    return LintHarness(runner=recording_runner)


def write_dockerfile(root: Path, name: str = "Dockerfile") -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("FROM alpine:3.20\n", encoding="utf-8")
    return path


@pytest.fixture
def dockerfile_factory(workspace: Path) -> Callable[[str], Path]:
    """Return a helper creating Dockerfiles inside the workspace."""

    def _create(name: str = "Dockerfile") -> Path:
        return write_dockerfile(workspace, name)

    return _create
