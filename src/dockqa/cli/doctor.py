# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Environment diagnostics for the hadolint execution strategies."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess  # nosec B404
from typing import Annotated

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from ..config import ConfigError, RunnerSettings, load_settings
from ..process_utils import run_command
from ..runners import RunnerKind, Unavailable, select_runner

CommandRunner = Callable[..., CompletedProcess[str]]


@dataclass(slots=True)
class EnvironmentCheck:
    """Represents the outcome of a doctor environment probe."""

    name: str
    command: tuple[str, ...]
    ok: bool
    detail: str

    @property
    def status(self) -> str:
        return "available" if self.ok else "missing"


def _first_line(*streams: str | None) -> str:
    for stream in streams:
        if stream and stream.strip():
            return stream.strip().splitlines()[0]
    return ""


def probe_environment(settings: RunnerSettings, *, run: CommandRunner = run_command) -> list[EnvironmentCheck]:
    """Run the availability probes and capture their first line of output.

    Args:
        settings: Runner settings naming the executable and runtime.
        run: Command runner compatible with :func:`run_command`.

    Returns:
        list[EnvironmentCheck]: One entry for the binary, one for the runtime.
    """

    checks: list[EnvironmentCheck] = []
    probes: Sequence[tuple[str, tuple[str, ...]]] = (
        (RunnerKind.BINARY.value, (settings.hadolint, "--version")),
        (RunnerKind.CONTAINER.value, (settings.container_runtime, "version")),
    )
    for name, command in probes:
        try:
            completed = run(list(command))
        except OSError as exc:
            checks.append(EnvironmentCheck(name=name, command=command, ok=False, detail=str(exc)))
            continue
        ok = completed.returncode == 0
        detail = _first_line(completed.stdout, completed.stderr)
        if not ok and not detail:
            detail = f"exited with status {completed.returncode}"
        checks.append(EnvironmentCheck(name=name, command=command, ok=ok, detail=detail))
    return checks


def run_doctor(
    root: Path,
    *,
    console: Console | None = None,
    run: CommandRunner = run_command,
    env: Mapping[str, str] | None = None,
) -> int:
    """Render diagnostics and return ``0`` when a runner can be selected."""

    console = console or Console()
    console.print(Rule("[bold cyan]dockqa Doctor[/bold cyan]"))

    try:
        settings = load_settings(root, env=env)
    except ConfigError as exc:
        console.print(Panel(f"[red]Failed to load configuration:[/red] {exc}", title="Configuration", border_style="red"))
        return 1

    settings_table = Table(title="Settings", box=box.SIMPLE, expand=True)
    settings_table.add_column("Setting", style="bold")
    settings_table.add_column("Value", overflow="fold")
    for field_name, value in settings.model_dump().items():
        settings_table.add_row(field_name, str(value))
    console.print(settings_table)

    checks = probe_environment(settings, run=run)
    environment_table = Table(title="Runners", box=box.SIMPLE, expand=True)
    environment_table.add_column("Runner", style="bold")
    environment_table.add_column("Probe")
    environment_table.add_column("Status", style="bold")
    environment_table.add_column("Details", overflow="fold")
    for check in checks:
        style = "green" if check.ok else "red"
        environment_table.add_row(
            check.name,
            " ".join(check.command),
            f"[{style}]{check.status}[/]",
            check.detail or "-",
        )
    console.print(environment_table)

    binary, container = checks
    choice = select_runner(binary.ok, container.ok)
    if isinstance(choice, Unavailable):
        console.print(Panel(f"[red]{choice.reason}[/red]", title="Selected runner", border_style="red"))
        return 1
    console.print(Panel(f"[green]{choice.value}[/green]", title="Selected runner", border_style="green"))
    return 0


def doctor_command(
    root: Annotated[
        Path,
        typer.Option("--root", help="Project root containing pyproject.toml.", file_okay=False),
    ] = Path("."),
) -> None:
    """Report which hadolint execution strategies are available."""

    raise typer.Exit(code=run_doctor(root.resolve()))


__all__ = ["EnvironmentCheck", "doctor_command", "probe_environment", "run_doctor"]
