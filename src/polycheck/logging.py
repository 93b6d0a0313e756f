# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers plus stdlib logging configuration for the CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler
from rich.text import Text

from .console import detect_tty, get_console_manager

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(*, debug: bool = False) -> None:
    """Route library log records to stderr at ``WARNING`` (``DEBUG`` when asked).

    Args:
        debug: Lower the threshold to ``DEBUG`` to trace engine decisions.
    """

    handler = RichHandler(
        console=get_console_manager().get(color=detect_tty(stderr=True), stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )


def _print_line(msg: str, *, style: str | None, use_color: bool | None = None, stderr: bool = False) -> None:
    """Render ``msg`` through the shared console without markup interpretation.

    Args:
        msg: Message text to print.
        style: Rich style applied when colour output is active.
        use_color: Optional explicit colour flag overriding TTY detection.
        stderr: Write to standard error instead of standard output.
    """

    color_enabled = detect_tty(stderr=stderr) if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, stderr=stderr)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def ok(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(f"✅ {msg}", style="green", use_color=use_color)


def warn(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(f"⚠️  {msg}", style="yellow", use_color=use_color)


def fail(msg: str, *, use_color: bool | None = None) -> None:
    """Emit an error message on stderr."""

    _print_line(f"❌ {msg}", style="red", use_color=use_color, stderr=True)


__all__ = ["configure_logging", "fail", "ok", "warn"]
