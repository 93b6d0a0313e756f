# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for TypeScript compiler output."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..models import Diagnostic
from .base import iter_lines, same_file, to_position

_TSC_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<file>[^(\n]+)\((?P<line>\d+),(?P<col>\d+)\):\s*"
    r"(?P<severity>error|warning|message)\s*(?P<code>TS\d+)?\s*:?\s*(?P<message>.+)$",
)
_CONTINUATION_PREFIX: Final[str] = "  "


@dataclass(slots=True)
class _PendingTscDiagnostic:
    """Accumulate a tsc diagnostic whose message may span several lines."""

    line: str
    column: str
    severity: str
    code: str | None
    keep: bool
    message: list[str] = field(default_factory=list)

    def build(self) -> Diagnostic:
        return Diagnostic(
            line=to_position(self.line),
            column=to_position(self.column),
            severity="info" if self.severity == "message" else self.severity,
            message="\n".join(self.message),
            code=self.code,
        )


def parse_tsc(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse ``tsc --pretty false`` output.

    Chained message details are indented on the following lines and are kept
    with the diagnostic they belong to. Diagnostics for other files of the
    project are dropped.

    Args:
        stdout: Compiler standard output.
        stderr: Compiler standard error.
        file: File being checked.
        project_root: Directory the compiler ran in.

    Returns:
        list[Diagnostic]: Diagnostics reported for *file*.
    """

    pending: list[_PendingTscDiagnostic] = []
    current: _PendingTscDiagnostic | None = None
    for line in iter_lines(stdout, stderr):
        match = _TSC_PATTERN.match(line)
        if match:
            current = _PendingTscDiagnostic(
                line=match.group("line"),
                column=match.group("col"),
                severity=match.group("severity"),
                code=match.group("code"),
                keep=same_file(match.group("file"), file, project_root),
                message=[match.group("message").strip()],
            )
            pending.append(current)
        elif current is not None and line.startswith(_CONTINUATION_PREFIX) and line.strip():
            current.message.append(line.strip())
        else:
            current = None
    return [entry.build() for entry in pending if entry.keep]


__all__ = ["parse_tsc"]
