# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Normalised diagnostic and check result models shared by every backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final

from .severity import Severity, SeverityCounts, coerce_severity, count_severities

EXIT_CLEAN: Final[int] = 0
EXIT_ATTENTION: Final[int] = 2


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Describe one issue reported by an external tool.

    ``line`` and ``column`` are 1-indexed; values below one are clamped so
    that a sloppy parser cannot produce an impossible position. The
    severity is coerced through :func:`coerce_severity`, which means unknown
    labels become errors.
    """

    line: int
    column: int
    severity: Severity
    message: str
    code: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", coerce_severity(self.severity))
        object.__setattr__(self, "line", max(int(self.line), 1))
        object.__setattr__(self, "column", max(int(self.column), 1))


class CheckStatus(str, Enum):
    """Enumerate the outcomes a single check can end in."""

    COMPLETED = "completed"
    UNSUPPORTED = "unsupported-extension"
    DISABLED = "checking-disabled"
    TOOL_NOT_FOUND = "tool-not-found"
    TOOL_TIMEOUT = "tool-timeout"
    PARSER_DEFECT = "parser-defect"
    BACKEND_DEFECT = "backend-defect"


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of checking one file with one backend."""

    file: Path
    language: str | None
    status: CheckStatus
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)
    tool_available: bool = False
    tool: str | None = None
    detail: str | None = None

    @property
    def counts(self) -> SeverityCounts:
        return count_severities(self.diagnostics)

    @property
    def exit_code(self) -> int:
        """Return ``2`` when any error or warning was found, otherwise ``0``."""

        return EXIT_ATTENTION if self.counts.needs_attention else EXIT_CLEAN


__all__ = [
    "EXIT_ATTENTION",
    "EXIT_CLEAN",
    "CheckResult",
    "CheckStatus",
    "Diagnostic",
]
