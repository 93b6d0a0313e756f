# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for interpreted languages checked through their syntax modes."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from ..models import Diagnostic
from ..severity import Severity
from .base import iter_lines, iter_pattern_matches, map_severity, to_position

PHP_SEVERITY_MAP: Final[dict[str, Severity]] = {
    "parse error": Severity.ERROR,
    "fatal error": Severity.ERROR,
    "warning": Severity.WARNING,
    "deprecated": Severity.WARNING,
    "notice": Severity.INFO,
}
_PHP_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:PHP )?(?P<severity>Parse error|Fatal error|Warning|Deprecated|Notice):\s+"
    r"(?P<message>.+?) in (?P<file>.+?) on line (?P<line>\d+)",
)
_LUAC_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:\S*luac[\d.]*(?:\.exe)?: )?(?P<file>.+?):(?P<line>\d+): (?P<message>.+)$",
)
_ELIXIR_INLINE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\*\* \((?P<kind>\w+Error)\) (?P<file>[^\s:]+):(?P<line>\d+)(?::(?P<col>\d+))?: (?P<message>.+)$",
)
_ELIXIR_HEADER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\*\* \((?P<kind>\w+Error)\) (?P<summary>.+?) on (?P<file>.+?):(?P<line>\d+)(?::(?P<col>\d+))?:$",
)
_ELIXIR_DETAIL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*error: (?P<message>.+)$")
_ELIXIR_DETAIL_LOOKAHEAD: Final[int] = 4


def parse_php_lint(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse ``php -l`` output; PHP reports no column, so column 1 is used.

    The same message can appear on both streams depending on the
    ``display_errors`` setting; duplicates are reported once.
    """

    del file, project_root
    seen: set[tuple[int, str]] = set()
    results: list[Diagnostic] = []
    for match in iter_pattern_matches(iter_lines(stderr, stdout), _PHP_PATTERN):
        line = to_position(match.group("line"))
        message = match.group("message").strip()
        if (line, message) in seen:
            continue
        seen.add((line, message))
        results.append(
            Diagnostic(
                line=line,
                column=1,
                severity=map_severity(match.group("severity"), PHP_SEVERITY_MAP, Severity.ERROR),
                message=message,
            ),
        )
    return results


def parse_luac(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse ``luac -p`` syntax errors."""

    del file, project_root
    return [
        Diagnostic(
            line=to_position(match.group("line")),
            column=1,
            severity=Severity.ERROR,
            message=match.group("message").strip(),
        )
        for match in iter_pattern_matches(iter_lines(stderr, stdout), _LUAC_PATTERN)
    ]


def parse_elixir(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse Elixir syntax errors in both the legacy and the 1.15+ layouts.

    Legacy releases put the location and message on one line. Newer releases
    print ``** (Kind) summary on file:line:col:`` and give the message on an
    ``error:`` line shortly after.
    """

    del file, project_root
    lines = list(iter_lines(stderr, stdout))
    results: list[Diagnostic] = []
    for index, line in enumerate(lines):
        stripped = line.strip()
        inline = _ELIXIR_INLINE_PATTERN.match(stripped)
        if inline:
            results.append(
                Diagnostic(
                    line=to_position(inline.group("line")),
                    column=to_position(inline.group("col")),
                    severity=Severity.ERROR,
                    message=inline.group("message").strip(),
                    code=inline.group("kind"),
                ),
            )
            continue
        header = _ELIXIR_HEADER_PATTERN.match(stripped)
        if header is None:
            continue
        message = header.group("summary").strip()
        for follow in lines[index + 1 : index + 1 + _ELIXIR_DETAIL_LOOKAHEAD]:
            detail = _ELIXIR_DETAIL_PATTERN.match(follow)
            if detail:
                message = detail.group("message").strip()
                break
        results.append(
            Diagnostic(
                line=to_position(header.group("line")),
                column=to_position(header.group("col")),
                severity=Severity.ERROR,
                message=message,
                code=header.group("kind"),
            ),
        )
    return results


__all__ = ["PHP_SEVERITY_MAP", "parse_elixir", "parse_luac", "parse_php_lint"]
