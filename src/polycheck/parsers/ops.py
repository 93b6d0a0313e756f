# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for infrastructure-as-code tooling."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from ..models import Diagnostic
from ..severity import Severity, coerce_severity
from .base import iter_lines, to_position

TERRAFORM_FORMAT_MESSAGE: Final[str] = "Formatting issues detected (run `terraform fmt` to fix)"
_HUNK_PATTERN: Final[re.Pattern[str]] = re.compile(r"^@@ -(?P<start>\d+)(?:,\d+)? \+\d+(?:,\d+)? @@")
_TF_DIAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?P<severity>Error|Warning): (?P<message>.+)$")
_TF_LOCATION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^on (?P<file>.+?) line (?P<line>\d+)(?:, in [^:]+)?:",
)
_TF_BOX_CHARS: Final[str] = "╷│╵ "
_TF_LOCATION_LOOKAHEAD: Final[int] = 4


def parse_terraform_fmt(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse ``terraform fmt -check -diff`` output.

    Every diff hunk becomes a warning anchored at its first changed line;
    HCL syntax errors reported on stderr become errors.

    Args:
        stdout: Diff printed by ``terraform fmt``.
        stderr: Diagnostics printed when the file cannot be parsed.
        file: File being checked.
        project_root: Directory Terraform ran in.

    Returns:
        list[Diagnostic]: Formatting warnings followed by syntax diagnostics.
    """

    del file, project_root
    return [*_format_hunks(stdout), *_syntax_diagnostics(stderr)]


def _format_hunks(stdout: str) -> list[Diagnostic]:
    results: list[Diagnostic] = []
    hunk_line: int | None = None
    for line in iter_lines(stdout):
        hunk = _HUNK_PATTERN.match(line)
        if hunk:
            hunk_line = int(hunk.group("start"))
            continue
        if hunk_line is None or line.startswith(("---", "+++")):
            continue
        if line.startswith(("-", "+")):
            results.append(
                Diagnostic(
                    line=hunk_line,
                    column=1,
                    severity=Severity.WARNING,
                    message=TERRAFORM_FORMAT_MESSAGE,
                    code="fmt",
                ),
            )
            hunk_line = None
        else:
            hunk_line += 1
    return results


def _syntax_diagnostics(stderr: str) -> list[Diagnostic]:
    lines = [line.strip(_TF_BOX_CHARS) for line in iter_lines(stderr)]
    results: list[Diagnostic] = []
    for index, line in enumerate(lines):
        match = _TF_DIAG_PATTERN.match(line)
        if not match:
            continue
        line_no = 1
        for follow in lines[index + 1 : index + 1 + _TF_LOCATION_LOOKAHEAD]:
            location = _TF_LOCATION_PATTERN.match(follow)
            if location:
                line_no = to_position(location.group("line"))
                break
        results.append(
            Diagnostic(
                line=line_no,
                column=1,
                severity=coerce_severity(match.group("severity")),
                message=match.group("message").strip(),
            ),
        )
    return results


__all__ = ["TERRAFORM_FORMAT_MESSAGE", "parse_terraform_fmt"]
