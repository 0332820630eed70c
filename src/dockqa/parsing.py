# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate raw command-line tokens into :class:`LintOptions`.

Parsing is a pure function: it never prints, exits, or touches the filesystem.
The caller receives one of three outcomes and decides what to emit.

* ``--help``/``-h`` in option position, including inside a short option
  cluster such as ``-hf``, short-circuits everything else.
* Value-taking options whose value is absent (or is itself an option) are
  reported before click sees the tokens, so ``-f -t error`` names ``-f``
  instead of treating ``-t`` as a path.
* Everything else is delegated to a click command definition which also
  renders the usage text.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Final, TypeAlias

import click

from .options import DEFAULT_TARGET, LintOptions
from .thresholds import DEFAULT_THRESHOLD, THRESHOLD_CHOICES, parse_threshold

PROG_NAME: Final[str] = "dockqa-hadolint"
DOCKERFILE_FLAGS: Final[tuple[str, ...]] = ("--dockerfile", "-f")
THRESHOLD_FLAGS: Final[tuple[str, ...]] = ("--failure-threshold", "-t")
STRICT_FLAG: Final[str] = "--strict-files"
HELP_FLAGS: Final[frozenset[str]] = frozenset({"--help", "-h"})
_VALUE_FLAGS: Final[frozenset[str]] = frozenset((*DOCKERFILE_FLAGS, *THRESHOLD_FLAGS))
_END_OF_OPTIONS: Final[str] = "--"


@dataclass(slots=True, frozen=True)
class Parsed:
    """Successful parse carrying the validated options."""

    options: LintOptions


@dataclass(slots=True, frozen=True)
class HelpRequested:
    """The user asked for usage information."""


@dataclass(slots=True, frozen=True)
class ParseError:
    """Arguments were rejected; ``message`` names the offending token."""

    message: str


ParseOutcome: TypeAlias = Parsed | HelpRequested | ParseError


@lru_cache(maxsize=1)
def build_command() -> click.Command:
    """Return the click command describing the accepted options.

    Returns:
        click.Command: Command definition shared by parsing and usage rendering.
    """

    return click.Command(
        name=PROG_NAME,
        help=(
            "Lint Dockerfiles with hadolint (local binary or container fallback) "
            "and print one JSON result on stdout. Diagnostics go to stderr."
        ),
        add_help_option=False,
        params=[
            click.Option(
                [*DOCKERFILE_FLAGS, "dockerfiles"],
                multiple=True,
                metavar="PATH",
                help=f"Dockerfile path to lint (repeatable, default: {DEFAULT_TARGET}).",
            ),
            click.Option(
                [*THRESHOLD_FLAGS, "threshold"],
                type=click.Choice(THRESHOLD_CHOICES, case_sensitive=False),
                default=DEFAULT_THRESHOLD.value,
                show_default=True,
                metavar="LEVEL",
                help=f"Failure threshold: {'|'.join(THRESHOLD_CHOICES)}. The last occurrence wins.",
            ),
            click.Option(
                [STRICT_FLAG, "strict"],
                is_flag=True,
                default=False,
                help="Fail if any Dockerfile is missing.",
            ),
            click.Option(
                ["--help", "-h"],
                is_flag=True,
                expose_value=False,
                help="Show this help and exit.",
            ),
        ],
    )


def usage_text() -> str:
    """Render the usage block for the diagnostic stream."""

    command = build_command()
    with click.Context(command, info_name=PROG_NAME) as context:
        return command.get_help(context)


def _looks_like_option(token: str) -> bool:
    return len(token) > 1 and token.startswith("-")


def _scan_short_cluster(token: str) -> tuple[bool, bool]:
    """Return ``(requests_help, expects_value)`` for a short option cluster.

    Characters after the first value-taking flag are that flag's value, so
    ``-hf`` asks for help while ``-fh`` names a file called ``h``.
    """

    for index, char in enumerate(token[1:], start=1):
        if f"-{char}" in HELP_FLAGS:
            return True, False
        if f"-{char}" in _VALUE_FLAGS:
            return False, index == len(token) - 1
    return False, False


def _requests_help(tokens: Sequence[str]) -> bool:
    """Return ``True`` when a help flag appears in option position."""

    expects_value = False
    for token in tokens:
        if expects_value and not _looks_like_option(token):
            expects_value = False
            continue
        if token == _END_OF_OPTIONS:
            return False
        if token in HELP_FLAGS:
            return True
        if token.startswith("--") or not _looks_like_option(token):
            expects_value = token in _VALUE_FLAGS
            continue
        requests_help, expects_value = _scan_short_cluster(token)
        if requests_help:
            return True
    return False


def detect_missing_option_value(tokens: Sequence[str]) -> str | None:
    """Return a message for the first value-taking option lacking its value.

    Args:
        tokens: Raw command-line tokens.

    Returns:
        str | None: Error message naming the option, or ``None`` when every
        value-taking option is followed by a usable value.
    """

    for index, token in enumerate(tokens):
        if token == _END_OF_OPTIONS:
            return None
        if token.startswith("--") and "=" in token:
            name, _, value = token.partition("=")
            if name in _VALUE_FLAGS and not value.strip():
                return f"Missing value for option {name}"
            continue
        if token not in _VALUE_FLAGS:
            continue
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if following is None or _looks_like_option(following):
            return f"Missing value for option {token}"
    return None


def parse_arguments(tokens: Sequence[str]) -> ParseOutcome:
    """Parse ``tokens`` into lint options or a terminal outcome.

    Args:
        tokens: Command-line tokens excluding the program name.

    Returns:
        ParseOutcome: ``Parsed`` with options, ``HelpRequested``, or
        ``ParseError`` describing the rejected token.
    """

    args = list(tokens)
    if _requests_help(args):
        return HelpRequested()

    missing_value = detect_missing_option_value(args)
    if missing_value is not None:
        return ParseError(missing_value)

    command = build_command()
    try:
        context = command.make_context(PROG_NAME, args)
    except click.ClickException as exc:
        return ParseError(exc.format_message())

    params = context.params
    try:
        threshold = parse_threshold(str(params["threshold"]))
    except ValueError as exc:
        return ParseError(str(exc))

    options = LintOptions.from_values(
        tuple(params["dockerfiles"]),
        threshold=threshold,
        strict=bool(params["strict"]),
    )
    return Parsed(options)


__all__ = [
    "DOCKERFILE_FLAGS",
    "HELP_FLAGS",
    "PROG_NAME",
    "STRICT_FLAG",
    "THRESHOLD_FLAGS",
    "HelpRequested",
    "ParseError",
    "ParseOutcome",
    "Parsed",
    "build_command",
    "detect_missing_option_value",
    "parse_arguments",
    "usage_text",
]
