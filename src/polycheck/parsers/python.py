# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for Python type-checker output."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final

from ..models import Diagnostic
from ..severity import Severity
from .base import JsonValue, load_json, map_severity, same_file, to_position

PYRIGHT_SEVERITY_MAP: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "information": Severity.INFO,
    "hint": Severity.INFO,
}


def _mapping(value: JsonValue) -> Mapping[str, JsonValue]:
    return value if isinstance(value, Mapping) else {}


def _entries(value: JsonValue) -> list[Mapping[str, JsonValue]]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def parse_pyright(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse Pyright ``--outputjson`` diagnostics.

    Pyright reports 0-indexed lines and characters; both are shifted to the
    1-indexed convention used by :class:`Diagnostic`.

    Args:
        stdout: JSON document printed by Pyright.
        stderr: Unused; Pyright reports configuration problems there.
        file: File being checked.
        project_root: Directory Pyright ran in.

    Returns:
        list[Diagnostic]: Diagnostics reported for *file*.
    """

    del stderr
    payload = _mapping(load_json(stdout))
    results: list[Diagnostic] = []
    for item in _entries(payload.get("generalDiagnostics")):
        reported = item.get("file")
        if not same_file(reported if isinstance(reported, str) else None, file, project_root):
            continue
        start = _mapping(_mapping(item.get("range")).get("start"))
        rule = item.get("rule")
        message = item.get("message")
        results.append(
            Diagnostic(
                line=to_position(start.get("line"), offset=1),
                column=to_position(start.get("character"), offset=1),
                severity=map_severity(item.get("severity"), PYRIGHT_SEVERITY_MAP, Severity.ERROR),
                message=message if isinstance(message, str) else "",
                code=rule if isinstance(rule, str) else None,
            ),
        )
    return results


__all__ = ["PYRIGHT_SEVERITY_MAP", "parse_pyright"]
