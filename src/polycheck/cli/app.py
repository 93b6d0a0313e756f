# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer

from ..logging import configure_logging
from .check import check_command
from .help import help_command, status_command
from .hook import hook_command
from .toggle import disable_command, enable_command

app = typer.Typer(
    name="polycheck",
    help="File-based diagnostics dispatcher for compilers and linters.",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def root(
    debug: Annotated[bool, typer.Option("--debug", help="Log engine decisions to stderr.")] = False,
) -> None:
    """File-based diagnostics dispatcher for compilers and linters."""

    configure_logging(debug=debug)


def register_commands(target: typer.Typer) -> None:
    """Attach every polycheck command to *target*."""

    target.command("check")(check_command)
    target.command("hook")(hook_command)
    target.command("enable")(enable_command)
    target.command("disable")(disable_command)
    target.command("status")(status_command)
    target.command("help")(help_command)


register_commands(app)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main", "register_commands"]
