# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``help`` and ``status`` commands: usage text and live tool availability."""

from __future__ import annotations

from typing import Final

import typer

from ..config import load_settings
from ..languages import DEFAULT_REGISTRY
from ..probe import probe_tools, render_status

HELP_TEXT: Final[str] = """polycheck - file-based diagnostics for editor hooks

Usage: polycheck <command> [args]

Commands:
  hook <event>             Handle editor hook events (payload on stdin)
  check <file>             Check an individual file for errors/warnings
  disable <language>       Disable checking for a language (or 'all')
  enable <language>        Enable checking for a language (or 'all')
  status                   Show tool availability
  help                     Show this help message
"""


def status_lines() -> list[str]:
    """Probe every backend and return the rendered status table."""

    settings = load_settings()
    probes = probe_tools(DEFAULT_REGISTRY.languages(), settings)
    return render_status(probes, settings)


def help_command() -> None:
    """Show usage and the availability of every language tool."""

    typer.echo(HELP_TEXT)
    typer.echo("\n".join(status_lines()))


def status_command() -> None:
    """Show the availability of every language tool."""

    typer.echo("\n".join(status_lines()))


__all__ = ["HELP_TEXT", "help_command", "status_command", "status_lines"]
