# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across polycheck modules."""

from __future__ import annotations

from pathlib import Path
from typing import Final

CONFIG_ENV_VAR: Final[str] = "POLYCHECK_CONFIG"
DEFAULT_CONFIG_PATH: Final[Path] = Path("~/.config/polycheck/config.json")

HOOK_EVENT_POST_TOOL_USE: Final[str] = "PostToolUse"
HOOK_TRIGGER_TOOLS: Final[frozenset[str]] = frozenset({"Edit", "MultiEdit", "Write"})

# Files that mark the root of a project regardless of language.
PROJECT_MARKERS: Final[tuple[str, ...]] = (
    ".git",
    ".hg",
    "package.json",
    "pyproject.toml",
    "setup.cfg",
    "go.mod",
    "Cargo.toml",
    "pom.xml",
    "build.gradle",
    "build.sbt",
    "composer.json",
    "mix.exs",
    "CMakeLists.txt",
    "build.zig",
)

PROBE_TIMEOUT: Final[float] = 5.0
