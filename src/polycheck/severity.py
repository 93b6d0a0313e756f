# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .models import Diagnostic


class Severity(str, Enum):
    """Severity levels normalising different tool vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


SEVERITY_ALIASES: Final[Mapping[str, Severity]] = {
    "error": Severity.ERROR,
    "err": Severity.ERROR,
    "fatal": Severity.ERROR,
    "fatal error": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "info": Severity.INFO,
    "information": Severity.INFO,
    "note": Severity.INFO,
    "hint": Severity.INFO,
    "help": Severity.INFO,
}


def coerce_severity(label: Severity | str | None) -> Severity:
    """Return the :class:`Severity` matching a tool-provided label.

    Unrecognised labels resolve to :attr:`Severity.ERROR` so that unknown
    tool vocabulary is reported loudly instead of being dropped.

    Args:
        label: Severity enum, raw tool label, or ``None``.

    Returns:
        Severity: Normalised severity.
    """

    if isinstance(label, Severity):
        return label
    if not isinstance(label, str):
        return Severity.ERROR
    return SEVERITY_ALIASES.get(label.strip().lower(), Severity.ERROR)


@dataclass(frozen=True, slots=True)
class SeverityCounts:
    """Aggregate error, warning and info totals for a diagnostic list."""

    errors: int = 0
    warnings: int = 0
    infos: int = 0

    @property
    def needs_attention(self) -> bool:
        """Return ``True`` when at least one error or warning was reported."""

        return (self.errors + self.warnings) > 0

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.infos


def count_severities(diagnostics: Iterable[Diagnostic]) -> SeverityCounts:
    """Count diagnostics per severity in a single pass.

    Args:
        diagnostics: Diagnostics to aggregate.

    Returns:
        SeverityCounts: Totals for each severity bucket.
    """

    errors = warnings = infos = 0
    for diagnostic in diagnostics:
        if diagnostic.severity is Severity.ERROR:
            errors += 1
        elif diagnostic.severity is Severity.WARNING:
            warnings += 1
        else:
            infos += 1
    return SeverityCounts(errors=errors, warnings=warnings, infos=infos)


__all__ = [
    "SEVERITY_ALIASES",
    "Severity",
    "SeverityCounts",
    "coerce_severity",
    "count_severities",
]
