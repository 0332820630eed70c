# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestrate one hadolint invocation from raw tokens to the emitted result.

The executor walks a linear sequence of states:

``Parse → Resolve → SelectRunner → Validate → Execute → Aggregate → Emit``

Every step either hands its data to the next one or returns a terminal
outcome that jumps straight to ``Emit``. Expected failures are values, not
exceptions; a single boundary in :meth:`LintExecutor.run` turns anything
unexpected into :class:`HostFailure` so stdout always receives one result.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from .config import RunnerSettings, load_settings
from .logging import LintLogger
from .models import LintExecution, LintResult
from .options import LintOptions
from .outcomes import (
    EnvironmentUnavailable,
    HostFailure,
    InvalidArguments,
    LintCompleted,
    LintOutcome,
    UsageShown,
    ValidationFailed,
    ValidationViolation,
)
from .parsing import HelpRequested, ParseError, parse_arguments, usage_text
from .reporting import ResultRenderer, build_result
from .resolution import ExistsPredicate, ResolveResult, resolve_targets
from .runners import (
    Runner,
    RunnerKind,
    Unavailable,
    binary_probe,
    build_runner,
    container_probe,
    select_runner,
)

Clock = Callable[[], int]
AvailabilityProbe = Callable[[], bool]
RunnerFactory = Callable[[RunnerKind], Runner]


def now_epoch_ms() -> int:
    """Return the wall-clock time in epoch milliseconds."""

    return time.time_ns() // 1_000_000


@dataclass(slots=True, frozen=True)
class LintEnvironment:
    """Host collaborators injected into the executor.

    Attributes:
        binary_available: Probe reporting whether a local hadolint can run.
        container_available: Probe reporting whether the container runtime can run.
        exists: Filesystem existence predicate used during resolution.
        clock: Source of epoch-millisecond timestamps.
        runner_factory: Builds the runner variant for the selected kind.
    """

    binary_available: AvailabilityProbe
    container_available: AvailabilityProbe
    exists: ExistsPredicate = Path.exists
    clock: Clock = now_epoch_ms
    runner_factory: RunnerFactory = build_runner

    @classmethod
    def from_settings(cls, settings: RunnerSettings) -> LintEnvironment:
        """Return an environment probing and running with ``settings``."""

        return cls(
            binary_available=lambda: binary_probe(settings),
            container_available=lambda: container_probe(settings),
            runner_factory=lambda kind: build_runner(kind, settings),
        )

    @classmethod
    def default(cls, root: Path | None = None) -> LintEnvironment:
        """Return an environment whose settings load lazily from ``root``.

        Settings are read on the first probe, so help requests and argument
        errors never touch configuration files.
        """

        @lru_cache(maxsize=1)
        def settings() -> RunnerSettings:
            return load_settings(root or Path.cwd())

        return cls(
            binary_available=lambda: binary_probe(settings()),
            container_available=lambda: container_probe(settings()),
            runner_factory=lambda kind: build_runner(kind, settings()),
        )


@dataclass(slots=True)
class _Progress:
    """Partial state recorded as the executor advances, for host failures."""

    options: LintOptions | None = None
    resolution: ResolveResult | None = None
    runner: RunnerKind | None = None
    failed: list[Path] = field(default_factory=list)

    def as_failure(self, message: str) -> HostFailure:
        return HostFailure(
            message=message,
            options=self.options,
            resolution=self.resolution,
            runner=self.runner,
            failed=tuple(self.failed),
        )


def validate_resolution(resolution: ResolveResult, options: LintOptions) -> ValidationViolation | None:
    """Return the first file-policy violation, or ``None`` when linting may proceed."""

    if resolution.missing and options.strict:
        return ValidationViolation.STRICT_MISSING
    if not resolution.existing:
        return ValidationViolation.NO_TARGETS
    return None


class LintExecutor:
    """Sequence parsing, resolution, runner selection and per-target linting."""

    def __init__(
        self,
        environment: LintEnvironment,
        logger: LintLogger,
        renderer: ResultRenderer | None = None,
    ) -> None:
        self._environment = environment
        self._logger = logger
        self._renderer = renderer or ResultRenderer()

    def run(self, tokens: Sequence[str]) -> LintResult:
        """Execute the full pipeline for ``tokens`` and emit the result.

        Args:
            tokens: Command-line tokens excluding the program name.

        Returns:
            LintResult: The result written to the primary stream.
        """

        progress = _Progress()
        outcome: LintOutcome
        started, clock_error = self._stamp(now_epoch_ms)
        if clock_error is not None:
            outcome = self._host_failure(progress, clock_error)
        else:
            try:
                outcome = self._advance(tokens, progress)
            except Exception as exc:  # noqa: BLE001
                outcome = self._host_failure(progress, exc)
        finished, clock_error = self._stamp(lambda: started)
        if clock_error is not None:
            outcome = self._host_failure(progress, clock_error)
        result = build_result(outcome, started_at=started, finished_at=finished)
        self._renderer.emit(result)
        return result

    def _stamp(self, fallback: Clock) -> tuple[int, Exception | None]:
        """Read the injected clock, substituting ``fallback`` when it raises."""

        try:
            return self._environment.clock(), None
        except Exception as exc:  # noqa: BLE001
            return fallback(), exc

    def _host_failure(self, progress: _Progress, exc: Exception) -> HostFailure:
        self._logger.fail(f"Unexpected error: {exc}")
        return progress.as_failure(str(exc))

    def _advance(self, tokens: Sequence[str], progress: _Progress) -> LintOutcome:
        parsed = parse_arguments(tokens)
        if isinstance(parsed, HelpRequested):
            self._logger.usage(usage_text())
            return UsageShown()
        if isinstance(parsed, ParseError):
            self._logger.fail(parsed.message)
            return InvalidArguments(parsed.message)

        options = parsed.options
        progress.options = options

        resolution = self._resolve(options)
        progress.resolution = resolution

        choice = select_runner(
            self._environment.binary_available(),
            self._environment.container_available(),
        )
        if isinstance(choice, Unavailable):
            self._logger.fail(choice.reason)
            return EnvironmentUnavailable(options=options, resolution=resolution, reason=choice.reason)
        progress.runner = choice

        violation = validate_resolution(resolution, options)
        if violation is not None:
            self._logger.fail(violation.value)
            return ValidationFailed(options=options, resolution=resolution, violation=violation)

        runner = self._environment.runner_factory(choice)
        execution = self._execute(runner, resolution, options, progress.failed)
        return LintCompleted(options=options, resolution=resolution, execution=execution)

    def _resolve(self, options: LintOptions) -> ResolveResult:
        resolution = resolve_targets(options, self._environment.exists)
        for path in resolution.missing:
            self._logger.warn(f"WARNING: Dockerfile not found and will be skipped: {path}")
        self._logger.info(
            f"Found {len(resolution.existing)} Dockerfile(s); {len(resolution.missing)} missing.",
        )
        return resolution

    def _execute(
        self,
        runner: Runner,
        resolution: ResolveResult,
        options: LintOptions,
        failed: list[Path],
    ) -> LintExecution:
        threshold = options.threshold
        self._logger.info(f"Linting Dockerfiles with threshold '{threshold.value}' using {runner.kind.value}...")
        self._logger.info(f"Targets: {', '.join(str(path) for path in resolution.existing)}")

        for target in resolution.existing:
            self._logger.info(f"Running hadolint on: {target}")
            status = runner.execute(target, threshold)
            if status != 0:
                self._logger.warn(
                    f"hadolint failed (exit {status}). Command: {runner.command_description(target, threshold)}",
                )
                failed.append(target)

        execution = LintExecution.from_failures(failed, runner.kind)
        if execution.failed:
            self._logger.fail(f"hadolint reported issues in: {', '.join(str(path) for path in execution.failed)}")
        else:
            self._logger.ok(f"hadolint passed for {len(resolution.existing)} Dockerfile(s).")
        return execution


__all__ = [
    "AvailabilityProbe",
    "Clock",
    "LintEnvironment",
    "LintExecutor",
    "RunnerFactory",
    "now_epoch_ms",
    "validate_resolution",
]
