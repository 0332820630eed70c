# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve raw Dockerfile targets into existing and missing paths."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .options import LintOptions

ExistsPredicate = Callable[[Path], bool]


@dataclass(slots=True, frozen=True)
class ResolveResult:
    """Partition of normalised targets.

    Both tuples keep the order of :attr:`LintOptions.targets`. Duplicated inputs
    stay duplicated; every normalised input appears in exactly one tuple.
    """

    existing: tuple[Path, ...]
    missing: tuple[Path, ...]


def normalize_target(raw: str) -> Path:
    """Return ``raw`` as an absolute, lexically normalised path.

    Symlinks are left untouched so diagnostics show the path the user asked for.
    """

    return Path(os.path.normpath(Path(raw).absolute()))


def resolve_targets(options: LintOptions, exists: ExistsPredicate = Path.exists) -> ResolveResult:
    """Split ``options.targets`` into existing and missing paths.

    Args:
        options: Parsed lint options.
        exists: Predicate deciding whether a path exists; the only side effect.

    Returns:
        ResolveResult: Normalised targets partitioned by ``exists``.
    """

    existing: list[Path] = []
    missing: list[Path] = []
    for raw in options.targets:
        path = normalize_target(raw)
        (existing if exists(path) else missing).append(path)
    return ResolveResult(existing=tuple(existing), missing=tuple(missing))


__all__ = ["ExistsPredicate", "ResolveResult", "normalize_target", "resolve_targets"]
