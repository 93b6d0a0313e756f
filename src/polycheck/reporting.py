# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render check results for the terminal and for editor shell integration."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Final

from rich.console import Console
from rich.text import Text

from .models import CheckResult, CheckStatus, Diagnostic
from .severity import Severity, SeverityCounts

FAILURE_MARKER: Final[str] = "✗"
SUCCESS_MARKER: Final[str] = "✓"
NO_ISSUES_TEXT: Final[str] = "No issues found"

# VS Code shell-integration sequence: ESC ] 633 ; E ; <payload> BEL
OSC_PREFIX: Final[str] = "\x1b]633;E;"
OSC_SUFFIX: Final[str] = "\x07"

_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


@dataclass(frozen=True, slots=True)
class ReportLine:
    """One line of a plain report together with its Rich style."""

    text: str
    style: str | None = None


def summary_line(counts: SeverityCounts) -> str:
    """Return the one-line verdict for *counts*.

    Examples:
        ``✗ 2 error(s), 1 warning(s)``, ``✓ No issues found``.
    """

    if counts.needs_attention:
        return f"{FAILURE_MARKER} {counts.errors} error(s), {counts.warnings} warning(s)"
    if counts.total == 0:
        return f"{SUCCESS_MARKER} {NO_ISSUES_TEXT}"
    return f"{SUCCESS_MARKER} No errors or warnings ({counts.infos} info)"


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Return ``[severity] line:col: message (code)`` for *diagnostic*."""

    suffix = f" ({diagnostic.code})" if diagnostic.code else ""
    return f"  [{diagnostic.severity.value}] {diagnostic.line}:{diagnostic.column}: {diagnostic.message}{suffix}"


def status_message(result: CheckResult) -> str | None:
    """Return the informational text for degraded or skipped checks."""

    language = result.language or "Unknown"
    if result.status is CheckStatus.TOOL_NOT_FOUND:
        hint = f" ({result.detail})" if result.detail else ""
        return f"{language} checker not installed: {result.tool}{hint}"
    if result.status is CheckStatus.TOOL_TIMEOUT:
        return f"{language} check timed out ({result.tool})"
    if result.status is CheckStatus.PARSER_DEFECT:
        return f"{language} output parser failed ({result.tool})"
    if result.status is CheckStatus.BACKEND_DEFECT:
        return f"{language} backend failed to prepare the check ({result.tool})"
    if result.status is CheckStatus.DISABLED:
        return f"{language} checking is disabled"
    if result.status is CheckStatus.UNSUPPORTED:
        return f"No checker registered for {result.file.name}"
    return None


def render_plain(result: CheckResult) -> list[ReportLine]:
    """Return the plain-mode report for *result*.

    Completed checks list every diagnostic in tool order below the summary;
    any other status renders a single informational line.
    """

    message = status_message(result)
    if message is not None:
        return [ReportLine(message, "dim" if result.status is CheckStatus.UNSUPPORTED else "yellow")]
    counts = result.counts
    lines = [ReportLine(summary_line(counts), "bold red" if counts.needs_attention else "green")]
    lines.extend(
        ReportLine(format_diagnostic(diagnostic), _SEVERITY_STYLES[diagnostic.severity])
        for diagnostic in result.diagnostics
    )
    return lines


def emit_plain(lines: Iterable[ReportLine], console: Console) -> None:
    """Print report lines without interpreting markup in tool messages."""

    for line in lines:
        console.print(Text(line.text, style=line.style or ""))


def render_hook(result: CheckResult) -> str | None:
    """Return the shell-integration payload for *result*, or ``None``.

    Nothing is rendered for clean, info-only, unsupported and disabled
    results so that the editor stays quiet when no attention is needed.
    """

    payload: dict[str, Any]
    if result.status in {CheckStatus.UNSUPPORTED, CheckStatus.DISABLED}:
        return None
    if result.status is CheckStatus.COMPLETED:
        counts = result.counts
        if not counts.needs_attention:
            return None
        payload = {
            "file": str(result.file),
            "language": result.language,
            "summary": summary_line(counts),
            "errors": counts.errors,
            "warnings": counts.warnings,
            "diagnostics": [_diagnostic_payload(item) for item in result.diagnostics],
        }
    else:
        payload = {
            "file": str(result.file),
            "language": result.language,
            "status": result.status.value,
            "summary": status_message(result),
        }
    return wrap_escape(json.dumps(payload, ensure_ascii=False))


def wrap_escape(payload: str) -> str:
    """Wrap *payload* in the OSC 633 ``E`` sequence recognised by the editor."""

    return f"{OSC_PREFIX}{payload}{OSC_SUFFIX}"


def _diagnostic_payload(diagnostic: Diagnostic) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "line": diagnostic.line,
        "column": diagnostic.column,
        "severity": diagnostic.severity.value,
        "message": diagnostic.message,
    }
    if diagnostic.code:
        entry["code"] = diagnostic.code
    return entry


__all__ = [
    "FAILURE_MARKER",
    "NO_ISSUES_TEXT",
    "OSC_PREFIX",
    "OSC_SUFFIX",
    "SUCCESS_MARKER",
    "ReportLine",
    "emit_plain",
    "format_diagnostic",
    "render_hook",
    "render_plain",
    "status_message",
    "summary_line",
    "wrap_escape",
]
