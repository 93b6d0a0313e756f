# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for JVM compilers (javac, scalac)."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..models import Diagnostic
from ..severity import coerce_severity
from .base import iter_lines, to_position

_JAVAC_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<file>.+?\.java):(?P<line>\d+): (?P<severity>error|warning|note): (?P<message>.+)$",
)
_JAVAC_LINT_CODE: Final[re.Pattern[str]] = re.compile(r"^\[(?P<code>[\w-]+)\]\s*(?P<message>.+)$")
_SCALA2_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<file>.+?\.(?:scala|sc)):(?P<line>\d+): (?P<severity>error|warning|info): (?P<message>.+)$",
)
_SCALA3_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^-- (?:\[(?P<code>E\d+)\] )?(?P<kind>(?:[\w-]+ )*?)(?P<severity>Error|Warning|Info): "
    r"(?P<file>.+?):(?P<line>\d+):(?P<col>\d+)",
)
_SCALA3_GUTTER: Final[re.Pattern[str]] = re.compile(r"^\s*(?P<lineno>\d+)?\s*\|(?P<text>.*)$")
_CARET_LOOKAHEAD: Final[int] = 3


def _caret_column(lines: Sequence[str], start: int) -> tuple[int | None, int]:
    """Return the 1-indexed caret column within a few lines after *start*.

    Returns:
        tuple[int | None, int]: Column (or ``None``) and the index of the caret line.
    """

    for index in range(start, min(start + _CARET_LOOKAHEAD + 2, len(lines))):
        stripped = lines[index].strip()
        if stripped and set(stripped) == {"^"}:
            return lines[index].index("^") + 1, index
    return None, start - 1


def parse_javac(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse javac diagnostics, deriving the column from the caret marker.

    Args:
        stdout: Compiler standard output.
        stderr: Compiler standard error, where javac writes diagnostics.
        file: File being checked.
        project_root: Directory the compiler ran in.

    Returns:
        list[Diagnostic]: Diagnostics in compiler order.
    """

    del file, project_root
    lines = list(iter_lines(stderr, stdout))
    results: list[Diagnostic] = []
    for index, line in enumerate(lines):
        match = _JAVAC_PATTERN.match(line)
        if not match:
            continue
        column, _ = _caret_column(lines, index + 1)
        message = match.group("message").strip()
        code: str | None = None
        lint = _JAVAC_LINT_CODE.match(message)
        if lint:
            code = lint.group("code")
            message = lint.group("message")
        results.append(
            Diagnostic(
                line=to_position(match.group("line")),
                column=column or 1,
                severity=coerce_severity(match.group("severity")),
                message=message,
                code=code,
            ),
        )
    return results


def parse_scalac(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse Scala 2 and Scala 3 compiler diagnostics.

    Scala 2 prints ``file:line: error: message`` followed by detail lines, the
    offending source line and a caret. Scala 3 prints a dashed header with
    the position, followed by a gutter-framed excerpt and explanation.
    """

    del file, project_root
    lines = list(iter_lines(stderr, stdout))
    results: list[Diagnostic] = []
    for index, line in enumerate(lines):
        scala3 = _SCALA3_PATTERN.match(line)
        if scala3:
            results.append(_scala3_diagnostic(scala3, lines, index))
            continue
        scala2 = _SCALA2_PATTERN.match(line)
        if scala2:
            results.append(_scala2_diagnostic(scala2, lines, index))
    return results


def _scala2_diagnostic(match: re.Match[str], lines: Sequence[str], index: int) -> Diagnostic:
    column, caret_index = _caret_column(lines, index + 1)
    # Lines between the header and the source line above the caret are details.
    details = [entry.strip() for entry in lines[index + 1 : max(caret_index - 1, index + 1)] if entry.strip()]
    message = " ".join([match.group("message").strip(), *details])
    return Diagnostic(
        line=to_position(match.group("line")),
        column=column or 1,
        severity=coerce_severity(match.group("severity")),
        message=message,
    )


def _scala3_diagnostic(match: re.Match[str], lines: Sequence[str], index: int) -> Diagnostic:
    details: list[str] = []
    for entry in lines[index + 1 :]:
        gutter = _SCALA3_GUTTER.match(entry)
        if gutter is None or entry.startswith("--"):
            break
        if gutter.group("lineno"):
            continue
        text = gutter.group("text").strip()
        if not text or set(text) == {"^"}:
            continue
        if text.startswith("longer explanation available"):
            break
        details.append(text)
    kind = match.group("kind").strip()
    message = ": ".join(part for part in (kind, " ".join(details)) if part) or match.group("severity")
    return Diagnostic(
        line=to_position(match.group("line")),
        column=to_position(match.group("col")),
        severity=coerce_severity(match.group("severity")),
        message=message,
        code=match.group("code"),
    )


__all__ = ["parse_javac", "parse_scalac"]
