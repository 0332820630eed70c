# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Closed set of terminal outcomes produced by the lint executor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TypeAlias

from .models import LintExecution
from .options import LintOptions
from .resolution import ResolveResult
from .runners import RunnerKind


class ValidationViolation(StrEnum):
    """Reasons resolved targets cannot be linted."""

    STRICT_MISSING = "Missing Dockerfiles while --strict-files is enabled."
    NO_TARGETS = "No valid Dockerfiles were found to lint."


@dataclass(slots=True, frozen=True)
class UsageShown:
    """Help was requested and usage was printed."""


@dataclass(slots=True, frozen=True)
class InvalidArguments:
    """Arguments could not be parsed."""

    message: str


@dataclass(slots=True, frozen=True)
class EnvironmentUnavailable:
    """Neither the local binary nor the container runtime is usable."""

    options: LintOptions
    resolution: ResolveResult
    reason: str


@dataclass(slots=True, frozen=True)
class ValidationFailed:
    """Resolved targets violate the file policy."""

    options: LintOptions
    resolution: ResolveResult
    violation: ValidationViolation


@dataclass(slots=True, frozen=True)
class LintCompleted:
    """Every existing target was linted; ``execution`` holds the aggregate."""

    options: LintOptions
    resolution: ResolveResult
    execution: LintExecution


@dataclass(slots=True, frozen=True)
class HostFailure:
    """An unexpected error interrupted the run; fields hold what was known."""

    message: str
    options: LintOptions | None = None
    resolution: ResolveResult | None = None
    runner: RunnerKind | None = None
    failed: tuple[Path, ...] = ()


LintOutcome: TypeAlias = (
    UsageShown | InvalidArguments | EnvironmentUnavailable | ValidationFailed | LintCompleted | HostFailure
)


def outcome_exit_code(outcome: LintOutcome) -> int:
    """Map ``outcome`` onto the process exit status."""

    match outcome:
        case UsageShown():
            return 0
        case LintCompleted(execution=execution):
            return execution.exit_code
        case _:
            return 1


__all__ = [
    "EnvironmentUnavailable",
    "HostFailure",
    "InvalidArguments",
    "LintCompleted",
    "LintOutcome",
    "UsageShown",
    "ValidationFailed",
    "ValidationViolation",
    "outcome_exit_code",
]
