# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable lint options derived from command-line arguments."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

from .thresholds import DEFAULT_THRESHOLD, Threshold

DEFAULT_TARGET: Final[str] = "Dockerfile"


@dataclass(slots=True, frozen=True)
class LintOptions:
    """Validated lint configuration for a single invocation.

    Attributes:
        targets: Raw target paths in the order the user supplied them.
        threshold: Failure threshold forwarded to hadolint.
        strict: When ``True`` any missing target fails the run instead of being skipped.
    """

    targets: tuple[str, ...] = field(default=(DEFAULT_TARGET,))
    threshold: Threshold = DEFAULT_THRESHOLD
    strict: bool = False

    @classmethod
    def from_values(
        cls,
        targets: Sequence[str],
        *,
        threshold: Threshold = DEFAULT_THRESHOLD,
        strict: bool = False,
    ) -> LintOptions:
        """Build options, substituting the default target when none were given."""

        resolved_targets = tuple(targets) if targets else (DEFAULT_TARGET,)
        return cls(targets=resolved_targets, threshold=threshold, strict=strict)


__all__ = ["DEFAULT_TARGET", "LintOptions"]
