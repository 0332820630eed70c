# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execution and result models shared by the executor and renderer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .runners import RunnerKind

ExitCode = Literal[0, 1]
RunnerTag = Literal["binary", "docker", "unknown"]


@dataclass(slots=True, frozen=True)
class LintExecution:
    """Aggregate of the per-target loop.

    Attributes:
        exit_code: ``0`` when every target passed, ``1`` otherwise.
        failed: Targets whose hadolint run returned a non-zero status, in order.
        runner: Strategy that executed the targets.
    """

    exit_code: ExitCode
    failed: tuple[Path, ...]
    runner: RunnerKind

    @classmethod
    def from_failures(cls, failed: Sequence[Path], runner: RunnerKind) -> LintExecution:
        """Derive the exit code from the collected failures."""

        return cls(exit_code=1 if failed else 0, failed=tuple(failed), runner=runner)


class LintResult(BaseModel):
    """Structured result written once to stdout.

    Serialised with camelCase keys; a consumer needs nothing else to interpret it.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    exit_code: ExitCode
    threshold: str
    strict: bool
    targets: tuple[str, ...] = Field(default_factory=tuple)
    missing: tuple[str, ...] = Field(default_factory=tuple)
    failed: tuple[str, ...] = Field(default_factory=tuple)
    runner: RunnerTag = "unknown"
    started_at_epoch_ms: int
    finished_at_epoch_ms: int

    @model_validator(mode="after")
    def _check_invariants(self) -> LintResult:
        unknown = [entry for entry in self.failed if entry not in self.targets]
        if unknown:
            raise ValueError(f"failed entries are not lint targets: {', '.join(unknown)}")
        if self.finished_at_epoch_ms < self.started_at_epoch_ms:
            raise ValueError("finishedAtEpochMs precedes startedAtEpochMs")
        return self

    def to_json(self) -> str:
        """Return the compact JSON document for stdout."""

        return self.model_dump_json(by_alias=True)


__all__ = ["ExitCode", "LintExecution", "LintResult", "RunnerTag"]
