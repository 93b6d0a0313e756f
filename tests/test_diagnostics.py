# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the diagnostic model and severity normalisation."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from polycheck.models import EXIT_ATTENTION, EXIT_CLEAN, CheckResult, CheckStatus, Diagnostic
from polycheck.severity import Severity, coerce_severity, count_severities


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("error", Severity.ERROR),
        ("Fatal Error", Severity.ERROR),
        ("warning", Severity.WARNING),
        ("WARN", Severity.WARNING),
        ("note", Severity.INFO),
        ("information", Severity.INFO),
        ("hint", Severity.INFO),
        ("style", Severity.ERROR),
        ("", Severity.ERROR),
        (None, Severity.ERROR),
        (Severity.WARNING, Severity.WARNING),
    ],
)
def test_coerce_severity(label: str | Severity | None, expected: Severity) -> None:
    assert coerce_severity(label) is expected


def test_diagnostic_normalises_fields() -> None:
    diag = Diagnostic(line=0, column=-3, severity="note", message="see declaration")

    assert diag.line == 1
    assert diag.column == 1
    assert diag.severity is Severity.INFO
    assert diag.code is None


def test_unknown_severity_fails_loud() -> None:
    diag = Diagnostic(line=4, column=2, severity="catastrophe", message="boom")

    assert diag.severity is Severity.ERROR


def test_diagnostic_is_immutable() -> None:
    diag = Diagnostic(line=1, column=1, severity=Severity.ERROR, message="x")

    with pytest.raises(dataclasses.FrozenInstanceError):
        diag.line = 2  # type: ignore[misc]


def test_count_severities_single_pass() -> None:
    diags = [
        Diagnostic(1, 1, Severity.ERROR, "a"),
        Diagnostic(2, 1, Severity.WARNING, "b"),
        Diagnostic(3, 1, Severity.INFO, "c"),
        Diagnostic(4, 1, Severity.ERROR, "d"),
    ]

    counts = count_severities(iter(diags))

    assert (counts.errors, counts.warnings, counts.infos) == (2, 1, 1)
    assert counts.total == 4
    assert counts.needs_attention


@pytest.mark.parametrize(
    ("severities", "expected"),
    [
        ((), EXIT_CLEAN),
        ((Severity.INFO,), EXIT_CLEAN),
        ((Severity.INFO, Severity.INFO), EXIT_CLEAN),
        ((Severity.WARNING,), EXIT_ATTENTION),
        ((Severity.ERROR,), EXIT_ATTENTION),
        ((Severity.INFO, Severity.WARNING), EXIT_ATTENTION),
    ],
)
def test_check_result_exit_code(severities: tuple[Severity, ...], expected: int) -> None:
    result = CheckResult(
        file=Path("demo.ts"),
        language="TypeScript",
        status=CheckStatus.COMPLETED,
        diagnostics=tuple(Diagnostic(index + 1, 1, sev, "m") for index, sev in enumerate(severities)),
        tool_available=True,
    )

    assert result.exit_code == expected


@pytest.mark.parametrize(
    "status",
    [
        CheckStatus.UNSUPPORTED,
        CheckStatus.DISABLED,
        CheckStatus.TOOL_NOT_FOUND,
        CheckStatus.TOOL_TIMEOUT,
        CheckStatus.PARSER_DEFECT,
        CheckStatus.BACKEND_DEFECT,
    ],
)
def test_degraded_statuses_exit_clean(status: CheckStatus) -> None:
    result = CheckResult(file=Path("demo.go"), language="Go", status=status)

    assert result.exit_code == EXIT_CLEAN
