# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the lint and doctor commands."""

from __future__ import annotations

from typing import Final

import typer

from .doctor import doctor_command
from .lint import lint_command

# Lint flags are parsed by dockqa.parsing so help and errors keep stdout JSON-only.
LINT_CONTEXT_SETTINGS: Final[dict[str, bool]] = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
}

app = typer.Typer(
    name="dockqa",
    help="Dockerfile lint orchestrator around hadolint.",
    add_completion=False,
    no_args_is_help=True,
)
app.command(
    "lint",
    context_settings=LINT_CONTEXT_SETTINGS,
    add_help_option=False,
)(lint_command)
app.command("doctor")(doctor_command)

__all__ = ["app"]
