# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public parser exports for converting tool output into diagnostics."""

from __future__ import annotations

from .javascript import parse_tsc
from .jvm import parse_javac, parse_scalac
from .native import parse_gcc, parse_go_vet, parse_rustc, parse_zig
from .ops import parse_terraform_fmt
from .python import parse_pyright
from .scripting import parse_elixir, parse_luac, parse_php_lint

__all__ = [
    "parse_elixir",
    "parse_gcc",
    "parse_go_vet",
    "parse_javac",
    "parse_luac",
    "parse_php_lint",
    "parse_pyright",
    "parse_rustc",
    "parse_scalac",
    "parse_terraform_fmt",
    "parse_tsc",
    "parse_zig",
]
