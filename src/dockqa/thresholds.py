# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Failure threshold levels understood by hadolint."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class Threshold(StrEnum):
    """Minimum finding severity that makes hadolint exit non-zero."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    STYLE = "style"
    IGNORE = "ignore"


DEFAULT_THRESHOLD: Final[Threshold] = Threshold.WARNING
THRESHOLD_CHOICES: Final[tuple[str, ...]] = tuple(level.value for level in Threshold)


def parse_threshold(value: str) -> Threshold:
    """Return the threshold named by ``value``, ignoring case.

    Args:
        value: User supplied threshold literal such as ``"Error"``.

    Returns:
        Threshold: Matching threshold member.

    Raises:
        ValueError: If ``value`` does not name one of the supported levels.
    """

    try:
        return Threshold(value.strip().lower())
    except ValueError as exc:
        valid = ", ".join(THRESHOLD_CHOICES)
        raise ValueError(f"Invalid --failure-threshold '{value}'. Valid values: {valid}") from exc


__all__ = ["DEFAULT_THRESHOLD", "THRESHOLD_CHOICES", "Threshold", "parse_threshold"]
