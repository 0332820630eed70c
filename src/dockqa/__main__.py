# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m dockqa`` to launch the CLI application."""

from __future__ import annotations

from .cli.app import app

if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    app(prog_name="dockqa")
