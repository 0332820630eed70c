# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Entry points that run the hadolint pipeline for raw command-line tokens."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

import typer

from ..executor import LintEnvironment, LintExecutor
from ..logging import LintLogger, build_diagnostic_logger
from ..models import LintResult
from ..reporting import ResultRenderer


def run_lint_cli(
    tokens: Sequence[str],
    *,
    environment: LintEnvironment | None = None,
    logger: LintLogger | None = None,
    stdout: TextIO | None = None,
) -> LintResult:
    """Run the lint pipeline and emit its JSON result.

    Args:
        tokens: Command-line tokens excluding the program name.
        environment: Host collaborators; defaults to real probes and processes.
        logger: Diagnostic sink; defaults to a stderr Rich console.
        stdout: Primary stream for the JSON result; defaults to ``sys.stdout``.

    Returns:
        LintResult: The emitted result.
    """

    executor = LintExecutor(
        environment or LintEnvironment.default(),
        logger or build_diagnostic_logger(),
        ResultRenderer(stdout),
    )
    return executor.run(tokens)


def lint_command(ctx: typer.Context) -> None:
    """Lint Dockerfiles with hadolint and print one JSON result on stdout.

    Accepts --dockerfile/-f PATH (repeatable), --failure-threshold/-t LEVEL,
    --strict-files and --help/-h. Usage text is written to stderr.
    """

    result = run_lint_cli(ctx.args)
    raise typer.Exit(code=result.exit_code)


def main(argv: Sequence[str] | None = None) -> int:
    """Console-script entry point accepting the lint flags directly."""

    tokens = sys.argv[1:] if argv is None else argv
    return run_lint_cli(tokens).exit_code


__all__ = ["lint_command", "main", "run_lint_cli"]
