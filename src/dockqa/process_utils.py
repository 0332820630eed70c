# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    # Bandit: type-only import of subprocess metadata is part of the safe wrapper.
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404


class ProcessLauncher(Protocol):
    """Spawn ``args`` to completion and return the exit status."""

    def __call__(self, args: Sequence[str], *, stdin: Path | None = None) -> int: ...


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str]) -> _CompletedProcess[str]:
    """Run *args* to completion with stdin closed and output captured as text.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        OSError: If the process cannot be spawned.
    """
    normalized = _normalize_args(args)

    # Bandit: commands originate from the runner settings; we pass argument
    # lists directly without shell expansion.
    return subprocess.run(  # nosec B603
        normalized,
        check=False,
        capture_output=True,
        text=True,
        stdin=subprocess.DEVNULL,
    )


def probe_command(args: Sequence[str]) -> bool:
    """Return ``True`` when *args* can be spawned and exits with status ``0``.

    Output is captured and discarded; a missing executable counts as unavailable.
    """

    try:
        completed = run_command(args)
    except OSError:
        return False
    return completed.returncode == 0


def _diagnostic_sink() -> int:
    """Return a descriptor for the parent's stderr, or ``DEVNULL`` when none exists."""

    for stream in (sys.stderr, sys.__stderr__):
        if stream is None:
            continue
        try:
            return stream.fileno()
        except (AttributeError, OSError, ValueError):
            continue
    return subprocess.DEVNULL


def spawn_inherited(args: Sequence[str], *, stdin: Path | None = None) -> int:
    """Run *args* with inherited stdio and block until it exits.

    The child's stdout is routed to the parent's stderr so that stdout stays
    reserved for the structured result; without a usable stderr the output is
    discarded. When ``stdin`` names a file, its bytes are streamed to the
    child's standard input.

    Args:
        args: Command and arguments; the executable must resolve on ``PATH``.
        stdin: Optional file whose raw bytes feed the child's stdin.

    Returns:
        int: Exit status of the child process.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        OSError: If the process cannot be spawned or ``stdin`` cannot be read.
    """

    normalized = _normalize_args(args)
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()
    sink = _diagnostic_sink()
    if stdin is None:
        completed = subprocess.run(normalized, check=False, stdout=sink)  # nosec B603
        return completed.returncode
    with stdin.open("rb") as handle:
        completed = subprocess.run(normalized, check=False, stdin=handle, stdout=sink)  # nosec B603
    return completed.returncode


__all__ = [
    "ProcessLauncher",
    "probe_command",
    "run_command",
    "spawn_inherited",
]
