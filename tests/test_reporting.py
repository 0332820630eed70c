# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for result construction and JSON rendering."""

from __future__ import annotations

import json
from io import StringIO
from pathlib import Path

import pytest
from pydantic import ValidationError

from dockqa.models import LintExecution, LintResult
from dockqa.options import LintOptions
from dockqa.outcomes import (
    EnvironmentUnavailable,
    HostFailure,
    InvalidArguments,
    LintCompleted,
    UsageShown,
    ValidationFailed,
    ValidationViolation,
    outcome_exit_code,
)
from dockqa.reporting import ResultRenderer, build_result
from dockqa.resolution import ResolveResult
from dockqa.runners import RunnerKind
from dockqa.thresholds import Threshold

OPTIONS = LintOptions(targets=("a", "b", "c"), threshold=Threshold.ERROR, strict=True)
RESOLUTION = ResolveResult(existing=(Path("/w/a"), Path("/w/b")), missing=(Path("/w/c"),))


def test_completed_outcome_carries_every_field() -> None:
    execution = LintExecution.from_failures([Path("/w/b")], RunnerKind.CONTAINER)
    outcome = LintCompleted(options=OPTIONS, resolution=RESOLUTION, execution=execution)

    result = build_result(outcome, started_at=10, finished_at=25)

    assert json.loads(result.to_json()) == {
        "exitCode": 1,
        "threshold": "error",
        "strict": True,
        "targets": ["/w/a", "/w/b"],
        "missing": ["/w/c"],
        "failed": ["/w/b"],
        "runner": "docker",
        "startedAtEpochMs": 10,
        "finishedAtEpochMs": 25,
    }


def test_clean_completion_exits_zero() -> None:
    execution = LintExecution.from_failures([], RunnerKind.BINARY)
    outcome = LintCompleted(options=OPTIONS, resolution=RESOLUTION, execution=execution)

    result = build_result(outcome, started_at=1, finished_at=1)

    assert result.exit_code == 0
    assert result.failed == ()
    assert result.runner == "binary"


def test_usage_and_parse_errors_use_defaults() -> None:
    usage = build_result(UsageShown(), started_at=5, finished_at=6)
    invalid = build_result(InvalidArguments("No such option: --x"), started_at=5, finished_at=6)

    for result, code in ((usage, 0), (invalid, 1)):
        assert result.exit_code == code
        assert result.threshold == "warning"
        assert result.strict is False
        assert result.targets == result.missing == result.failed == ()
        assert result.runner == "unknown"


@pytest.mark.parametrize(
    "outcome",
    [
        EnvironmentUnavailable(options=OPTIONS, resolution=RESOLUTION, reason="nothing installed"),
        ValidationFailed(options=OPTIONS, resolution=RESOLUTION, violation=ValidationViolation.STRICT_MISSING),
    ],
)
def test_pre_execution_failures_keep_resolution_but_no_runner(outcome: object) -> None:
    result = build_result(outcome, started_at=0, finished_at=1)  # type: ignore[arg-type]

    assert result.exit_code == 1
    assert result.threshold == "error"
    assert result.strict is True
    assert result.targets == ("/w/a", "/w/b")
    assert result.missing == ("/w/c",)
    assert result.failed == ()
    assert result.runner == "unknown"


def test_host_failure_reports_partial_progress() -> None:
    outcome = HostFailure(
        message="disk on fire",
        options=OPTIONS,
        resolution=RESOLUTION,
        runner=RunnerKind.BINARY,
        failed=(Path("/w/a"),),
    )

    result = build_result(outcome, started_at=0, finished_at=3)

    assert result.exit_code == 1
    assert result.failed == ("/w/a",)
    assert result.runner == "binary"


def test_host_failure_before_parsing_uses_defaults() -> None:
    result = build_result(HostFailure(message="early"), started_at=0, finished_at=0)

    assert result.exit_code == 1
    assert result.threshold == "warning"
    assert result.targets == ()
    assert result.runner == "unknown"


def test_backwards_clock_is_clamped() -> None:
    result = build_result(UsageShown(), started_at=100, finished_at=90)

    assert result.finished_at_epoch_ms == 100


def test_result_rejects_failed_entries_outside_targets() -> None:
    with pytest.raises(ValidationError):
        LintResult(
            exit_code=1,
            threshold="warning",
            strict=False,
            targets=("/w/a",),
            failed=("/w/z",),
            started_at_epoch_ms=0,
            finished_at_epoch_ms=0,
        )


def test_result_rejects_finish_before_start() -> None:
    with pytest.raises(ValidationError):
        LintResult(
            exit_code=0,
            threshold="warning",
            strict=False,
            started_at_epoch_ms=2,
            finished_at_epoch_ms=1,
        )


def test_outcome_exit_codes() -> None:
    completed = LintCompleted(
        options=OPTIONS,
        resolution=RESOLUTION,
        execution=LintExecution.from_failures([], RunnerKind.BINARY),
    )

    assert outcome_exit_code(UsageShown()) == 0
    assert outcome_exit_code(completed) == 0
    assert outcome_exit_code(InvalidArguments("bad")) == 1
    assert outcome_exit_code(HostFailure(message="x")) == 1


def test_renderer_writes_one_json_line() -> None:
    stream = StringIO()
    result = build_result(UsageShown(), started_at=1, finished_at=2)

    ResultRenderer(stream).emit(result)

    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert stream.getvalue().endswith("\n")
    assert json.loads(lines[0])["exitCode"] == 0


def test_renderer_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    ResultRenderer().emit(build_result(UsageShown(), started_at=1, finished_at=2))

    captured = capsys.readouterr()
    assert json.loads(captured.out)["runner"] == "unknown"
    assert captured.err == ""
