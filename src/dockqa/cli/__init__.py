# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""dockqa CLI package exports."""

from __future__ import annotations

from typing import Final

from .app import app
from .lint import main, run_lint_cli

__all__: Final[list[str]] = ["app", "main", "run_lint_cli"]
