# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared utilities for CLI commands (errors, engine construction)."""

from __future__ import annotations

from typing import NoReturn

import typer

from ..config import Settings, load_settings
from ..engine import CheckEngine
from ..languages import DEFAULT_REGISTRY
from ..logging import fail


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


def abort(exc: CLIError) -> NoReturn:
    """Report *exc* on stderr and leave the Typer application."""

    fail(str(exc))
    raise typer.Exit(code=exc.exit_code) from exc


def build_engine(settings: Settings | None = None) -> CheckEngine:
    """Return a check engine wired to freshly loaded settings and the default registry."""

    return CheckEngine(settings=settings if settings is not None else load_settings(), registry=DEFAULT_REGISTRY)


__all__ = ["CLIError", "abort", "build_engine"]
