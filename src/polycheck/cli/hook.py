# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``hook`` command: react to an editor file-edit event read from stdin."""

from __future__ import annotations

import sys
from typing import Annotated

import typer

from ..hook import handle_hook
from .shared import build_engine


def hook_command(
    event: Annotated[str, typer.Argument(help="Hook event name, e.g. PostToolUse.", show_default=False)],
) -> None:
    """Handle an editor hook EVENT whose JSON payload arrives on stdin."""

    outcome = handle_hook(event, sys.stdin.read(), engine_factory=build_engine)
    if outcome.stderr:
        sys.stderr.write(f"{outcome.stderr}\n")
        sys.stderr.flush()
    raise typer.Exit(code=outcome.exit_code)


__all__ = ["hook_command"]
