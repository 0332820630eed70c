# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the doctor command."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from dockqa.cli import app
from dockqa.cli.doctor import probe_environment, run_doctor
from dockqa.config import RunnerSettings


class _RunStub:
    def __init__(self, results: dict[str, subprocess.CompletedProcess[str] | Exception]) -> None:
        self.results = results
        self.calls: list[list[str]] = []

    def __call__(self, args: Sequence[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(args))
        outcome = self.results[args[0]]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _completed(args: list[str], returncode: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=stderr)


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, force_terminal=False, color_system=None, emoji=False, width=160), buffer


def test_probe_environment_records_versions_and_failures() -> None:
    run = _RunStub(
        {
            "hadolint": _completed(["hadolint"], 0, stdout="Haskell Dockerfile Linter 2.12.0\n"),
            "docker": FileNotFoundError("Executable 'docker' was not found on PATH"),
        }
    )

    binary, container = probe_environment(RunnerSettings(), run=run)

    assert binary.ok is True
    assert binary.detail == "Haskell Dockerfile Linter 2.12.0"
    assert container.ok is False
    assert container.status == "missing"
    assert "not found" in container.detail
    assert run.calls == [["hadolint", "--version"], ["docker", "version"]]


def test_probe_environment_describes_silent_failure() -> None:
    run = _RunStub({"hadolint": _completed(["hadolint"], 2), "docker": _completed(["docker"], 1)})

    binary, container = probe_environment(RunnerSettings(), run=run)

    assert binary.detail == "exited with status 2"
    assert container.detail == "exited with status 1"


def test_run_doctor_reports_selected_runner(tmp_path: Path) -> None:
    console, buffer = _console()
    run = _RunStub(
        {
            "hadolint": FileNotFoundError("missing"),
            "docker": _completed(["docker"], 0, stdout="Client: Docker Engine\n"),
        }
    )

    exit_code = run_doctor(tmp_path, console=console, run=run, env={})

    output = buffer.getvalue()
    assert exit_code == 0
    assert "dockqa Doctor" in output
    assert "container_runtime" in output
    assert "Selected runner" in output
    assert "docker" in output


def test_run_doctor_fails_without_any_runner(tmp_path: Path) -> None:
    console, buffer = _console()
    run = _RunStub({"hadolint": FileNotFoundError("missing"), "docker": FileNotFoundError("missing")})

    exit_code = run_doctor(tmp_path, console=console, run=run, env={})

    assert exit_code == 1
    assert "Could not find `hadolint`" in buffer.getvalue()


def test_run_doctor_uses_configured_names(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.dockqa]\ncontainer-runtime = "podman"\n', encoding="utf-8")
    console, _buffer = _console()
    run = _RunStub({"hadolint": _completed(["hadolint"], 1), "podman": _completed(["podman"], 0)})

    assert run_doctor(tmp_path, console=console, run=run, env={}) == 0
    assert run.calls[-1] == ["podman", "version"]


def test_run_doctor_reports_configuration_errors(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.dockqa\n", encoding="utf-8")
    console, buffer = _console()
    run = _RunStub({})

    assert run_doctor(tmp_path, console=console, run=run, env={}) == 1
    assert "Failed to load configuration" in buffer.getvalue()
    assert run.calls == []


def test_doctor_command_invokes_run_doctor(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[Path] = []

    def fake_run_doctor(root: Path) -> int:
        seen.append(root)
        return 0

    monkeypatch.setattr("dockqa.cli.doctor.run_doctor", fake_run_doctor)
    runner = CliRunner()

    result = runner.invoke(app, ["doctor", "--root", str(tmp_path)])

    assert result.exit_code == 0
    assert seen == [tmp_path.resolve()]
