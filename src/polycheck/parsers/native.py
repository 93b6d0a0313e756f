# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for natively compiled languages (C/C++, Rust, Go, Zig)."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from ..models import Diagnostic
from ..severity import Severity
from .base import compiler_diagnostics, iter_lines, iter_pattern_matches, to_position

_GO_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:vet: )?(?P<file>[^\s:][^:]*\.go):(?P<line>\d+)(?::(?P<col>\d+))?: (?P<message>.+)$",
)


def parse_gcc(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse gcc/clang ``-fsyntax-only`` diagnostics; ``note`` lines become info."""

    del file, project_root
    return compiler_diagnostics(stdout, stderr)


def parse_rustc(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse ``rustc --error-format=short`` diagnostics.

    Summary lines such as ``error: aborting due to 2 previous errors`` carry
    no location and are skipped.
    """

    del file, project_root
    return compiler_diagnostics(stdout, stderr)


def parse_go_vet(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse ``go vet`` output, including type-check failures of the package."""

    del file, project_root
    return [
        Diagnostic(
            line=to_position(match.group("line")),
            column=to_position(match.group("col")),
            severity=Severity.ERROR,
            message=match.group("message").strip(),
        )
        for match in iter_pattern_matches(iter_lines(stdout, stderr), _GO_PATTERN, skip_prefixes=("#",))
    ]


def parse_zig(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse ``zig ast-check`` diagnostics written to stderr."""

    del stdout, file, project_root
    return compiler_diagnostics(stderr)


__all__ = ["parse_gcc", "parse_go_vet", "parse_rustc", "parse_zig"]
