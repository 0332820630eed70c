# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build the structured result and write it to the primary stream."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .models import LintResult
from .options import LintOptions
from .outcomes import (
    EnvironmentUnavailable,
    HostFailure,
    LintCompleted,
    LintOutcome,
    ValidationFailed,
    outcome_exit_code,
)
from .resolution import ResolveResult
from .runners import UNKNOWN_RUNNER, RunnerKind
from .thresholds import DEFAULT_THRESHOLD


@dataclass(slots=True, frozen=True)
class _KnownFields:
    options: LintOptions | None = None
    resolution: ResolveResult | None = None
    runner: RunnerKind | None = None
    failed: tuple[Path, ...] = ()


def _known_fields(outcome: LintOutcome) -> _KnownFields:
    match outcome:
        case LintCompleted(options=options, resolution=resolution, execution=execution):
            return _KnownFields(options, resolution, execution.runner, execution.failed)
        case EnvironmentUnavailable(options=options, resolution=resolution):
            return _KnownFields(options, resolution)
        case ValidationFailed(options=options, resolution=resolution):
            return _KnownFields(options, resolution)
        case HostFailure(options=options, resolution=resolution, runner=runner, failed=failed):
            return _KnownFields(options, resolution, runner, failed if resolution is not None else ())
        case _:
            return _KnownFields()


def _as_strings(paths: tuple[Path, ...]) -> tuple[str, ...]:
    return tuple(str(path) for path in paths)


def build_result(outcome: LintOutcome, *, started_at: int, finished_at: int) -> LintResult:
    """Merge whatever data survived ``outcome`` into a :class:`LintResult`.

    Args:
        outcome: Terminal outcome reached by the executor.
        started_at: Epoch milliseconds captured before parsing.
        finished_at: Epoch milliseconds captured at emission; clamped so the
            result never finishes before it started.

    Returns:
        LintResult: Fully populated result for the primary stream.
    """

    known = _known_fields(outcome)
    options = known.options
    resolution = known.resolution
    return LintResult(
        exit_code=outcome_exit_code(outcome),
        threshold=(options.threshold if options else DEFAULT_THRESHOLD).value,
        strict=options.strict if options else False,
        targets=_as_strings(resolution.existing) if resolution else (),
        missing=_as_strings(resolution.missing) if resolution else (),
        failed=_as_strings(known.failed),
        runner=known.runner.value if known.runner else UNKNOWN_RUNNER,
        started_at_epoch_ms=started_at,
        finished_at_epoch_ms=max(finished_at, started_at),
    )


@dataclass(slots=True)
class ResultRenderer:
    """Write results as one JSON line to ``stream`` (stdout when unset)."""

    stream: TextIO | None = None

    def emit(self, result: LintResult) -> None:
        target = self.stream if self.stream is not None else sys.stdout
        target.write(f"{result.to_json()}\n")
        target.flush()


__all__ = ["ResultRenderer", "build_result"]
