# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import json
import os
import re
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from ..models import Diagnostic
from ..severity import Severity, coerce_severity

JsonValue = Any

# ``path:line:column: severity: message`` as emitted by gcc, clang, zig and friends.
COMPILER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<file>.+?):(?P<line>\d+):(?P<col>\d+): "
    r"(?P<severity>fatal error|error|warning|note)(?:\[(?P<code>[^\]]+)\])?: "
    r"(?P<message>.+)$",
)


def iter_lines(*streams: str) -> Iterator[str]:
    """Yield the lines of each stream in order, without trailing whitespace."""

    for stream in streams:
        if not stream:
            continue
        for raw_line in stream.splitlines():
            yield raw_line.rstrip()


def iter_pattern_matches(
    lines: Sequence[str] | Iterator[str],
    pattern: re.Pattern[str],
    *,
    skip_prefixes: Sequence[str] = (),
) -> Iterator[re.Match[str]]:
    """Yield regex matches from ``lines`` while filtering unwanted entries.

    Args:
        lines: Raw lines emitted by a tool.
        pattern: Compiled regular expression matched against each stripped line.
        skip_prefixes: Optional prefixes that, when present, skip the line.

    Yields:
        re.Match[str]: Match objects produced by ``pattern``.
    """

    forbidden = tuple(skip_prefixes)
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        if forbidden and line.startswith(forbidden):
            continue
        match = pattern.match(line)
        if match:
            yield match


def to_position(value: object, *, offset: int = 0) -> int:
    """Return a 1-indexed position from a tool value, defaulting to 1."""

    if isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return max(value + offset, 1)
    if isinstance(value, str) and value.strip().isdigit():
        return max(int(value) + offset, 1)
    return 1


def map_severity(label: object, mapping: Mapping[str, Severity], default: Severity) -> Severity:
    """Return a :class:`Severity` derived from ``label`` using ``mapping``."""

    if isinstance(label, str):
        return mapping.get(label.strip().lower(), default)
    return default


def load_json(stdout: str) -> JsonValue:
    """Decode *stdout* as JSON, returning ``None`` when it is not valid JSON."""

    text = stdout.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        if start <= 0:
            return None
        try:
            return json.loads(text[start:])
        except json.JSONDecodeError:
            return None


def same_file(reported: str | None, file: Path, project_root: Path) -> bool:
    """Return ``True`` when a tool-reported path designates *file*.

    Relative paths are interpreted against *project_root*; a missing path is
    assumed to refer to the checked file.
    """

    if not reported:
        return True
    candidate = Path(reported.strip())
    if not candidate.is_absolute():
        candidate = project_root / candidate
    try:
        return os.path.normcase(candidate.resolve()) == os.path.normcase(file.resolve())
    except OSError:
        return candidate.name == file.name


def compiler_diagnostics(*streams: str) -> list[Diagnostic]:
    """Parse ``path:line:col: severity: message`` lines from *streams*."""

    results: list[Diagnostic] = []
    for match in iter_pattern_matches(iter_lines(*streams), COMPILER_PATTERN):
        results.append(
            Diagnostic(
                line=to_position(match.group("line")),
                column=to_position(match.group("col")),
                severity=coerce_severity(match.group("severity")),
                message=match.group("message").strip(),
                code=match.group("code"),
            ),
        )
    return results


__all__ = [
    "COMPILER_PATTERN",
    "JsonValue",
    "compiler_diagnostics",
    "iter_lines",
    "iter_pattern_matches",
    "load_json",
    "map_severity",
    "same_file",
    "to_position",
]
