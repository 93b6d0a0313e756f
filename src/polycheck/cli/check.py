# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``check`` command: run one file through its backend and print a report."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..console import detect_tty, get_console_manager
from ..reporting import emit_plain, render_plain
from .shared import CLIError, abort, build_engine


def check_command(
    file: Annotated[Path, typer.Argument(help="Source file to check.", show_default=False)],
) -> None:
    """Check FILE for errors and warnings; exits 2 when any are found."""

    if not file.is_file():
        abort(CLIError(f"File not found: {file}", exit_code=1))
    result = build_engine().check(file)
    emit_plain(render_plain(result), get_console_manager().get(color=detect_tty()))
    raise typer.Exit(code=result.exit_code)


__all__ = ["check_command"]
