# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Check engine resolving a file to a backend and running its tool once."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from .config import Settings
from .constants import PROJECT_MARKERS
from .languages import DEFAULT_REGISTRY
from .models import CheckResult, CheckStatus, Diagnostic
from .process_utils import CommandRunner, ProcessResult, run_command
from .registry import BuildContext, LanguageConfig, LanguageRegistry

LOGGER = logging.getLogger(__name__)


def find_project_root(file: Path, config: LanguageConfig | None = None) -> Path:
    """Return the nearest ancestor of *file* that looks like a project root.

    A directory qualifies when it holds a generic project marker or, given
    *config*, when the backend detects its own project configuration there.
    The file's own directory is returned when nothing qualifies.
    """

    start = file.parent
    for directory in (start, *start.parents):
        if any((directory / marker).exists() for marker in PROJECT_MARKERS):
            return directory
        if config is not None and config.detect_config(directory):
            return directory
    return start


def resolve_tool(config: LanguageConfig, project_root: Path) -> str | None:
    """Return the executable for *config*, preferring a project-local copy.

    Args:
        config: Backend whose tool should be located.
        project_root: Directory the ``local_paths`` are relative to.

    Returns:
        str | None: Executable path, or ``None`` when the tool is unavailable.
    """

    for relative in config.local_paths:
        candidate = project_root / relative
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
    return shutil.which(config.tool)


@dataclass(slots=True)
class CheckEngine:
    """Orchestrate a single check: resolve, gate, invoke, parse.

    Attributes:
        settings: Enable/disable switches read for this invocation.
        registry: Extension to backend lookup table.
        runner: Process runner; injectable for tests.
    """

    settings: Settings = field(default_factory=Settings)
    registry: LanguageRegistry = field(default_factory=lambda: DEFAULT_REGISTRY)
    runner: CommandRunner = run_command

    def check(self, file: Path | str, project_root: Path | None = None) -> CheckResult:
        """Check *file* and return its normalised result.

        Args:
            file: File to check; relative paths are resolved against the CWD.
            project_root: Root used for tool discovery and as the tool's CWD;
                discovered from the file location when omitted.

        Returns:
            CheckResult: Diagnostics or the degraded status explaining their absence.
        """

        path = Path(file).expanduser().resolve()
        config = self.registry.resolve(path)
        if config is None:
            LOGGER.debug("unsupported file=%s", path)
            return CheckResult(file=path, language=None, status=CheckStatus.UNSUPPORTED)

        if self.settings.is_language_disabled(config):
            LOGGER.debug("checking disabled language=%s", config.name)
            return CheckResult(file=path, language=config.name, status=CheckStatus.DISABLED, tool=config.tool)

        try:
            root = self._project_root(path, config, project_root)
        except Exception as exc:  # pylint: disable=broad-exception-caught  # backends are untrusted
            return self._backend_defect(path, config, "project detection", exc)
        executable = resolve_tool(config, root)
        if executable is None:
            LOGGER.debug("tool not found tool=%s root=%s", config.tool, root)
            return self._not_found(path, config)

        with tempfile.TemporaryDirectory(prefix="polycheck-") as scratch:
            try:
                context = BuildContext(has_project_config=bool(config.detect_config(root)), scratch_dir=Path(scratch))
                args = [executable, *config.build_args(path, root, executable, context)]
            except Exception as exc:  # pylint: disable=broad-exception-caught  # backends are untrusted
                return self._backend_defect(path, config, "argument builder", exc)
            completed = self.runner(args, cwd=root, timeout=self.settings.timeout)

        if completed.not_found:
            return self._not_found(path, config)
        if completed.timed_out:
            return CheckResult(
                file=path,
                language=config.name,
                status=CheckStatus.TOOL_TIMEOUT,
                tool_available=True,
                tool=config.tool,
                detail=f"{config.tool} exceeded {self.settings.timeout:.1f}s",
            )
        return self._parse(path, root, config, completed)

    def _parse(self, path: Path, root: Path, config: LanguageConfig, completed: ProcessResult) -> CheckResult:
        try:
            diagnostics = tuple(config.parse_output(completed.stdout, completed.stderr, path, root))
            if not all(isinstance(item, Diagnostic) for item in diagnostics):
                raise TypeError(f"{config.name} parser returned non-Diagnostic values")
        except Exception as exc:  # pylint: disable=broad-exception-caught  # backends are untrusted
            LOGGER.error("output parser for %s failed: %s", config.name, exc)
            LOGGER.debug("parser traceback", exc_info=True)
            return CheckResult(
                file=path,
                language=config.name,
                status=CheckStatus.PARSER_DEFECT,
                tool_available=True,
                tool=config.tool,
                detail=str(exc),
            )
        LOGGER.debug(
            "parsed language=%s returncode=%s diagnostics=%s",
            config.name,
            completed.returncode,
            len(diagnostics),
        )
        return CheckResult(
            file=path,
            language=config.name,
            status=CheckStatus.COMPLETED,
            diagnostics=diagnostics,
            tool_available=True,
            tool=config.tool,
        )

    @staticmethod
    def _project_root(path: Path, config: LanguageConfig, project_root: Path | None) -> Path:
        if project_root is not None:
            if project_root.is_dir():
                return project_root.resolve()
            LOGGER.debug("project root %s is not a directory; discovering from file", project_root)
        return find_project_root(path, config)

    @staticmethod
    def _backend_defect(path: Path, config: LanguageConfig, stage: str, exc: Exception) -> CheckResult:
        LOGGER.error("%s for %s failed: %s", stage, config.name, exc)
        LOGGER.debug("%s traceback", stage, exc_info=True)
        return CheckResult(
            file=path,
            language=config.name,
            status=CheckStatus.BACKEND_DEFECT,
            tool=config.tool,
            detail=str(exc),
        )

    @staticmethod
    def _not_found(path: Path, config: LanguageConfig) -> CheckResult:
        return CheckResult(
            file=path,
            language=config.name,
            status=CheckStatus.TOOL_NOT_FOUND,
            tool=config.tool,
            detail=config.install_hint or None,
        )


__all__ = ["CheckEngine", "find_project_root", "resolve_tool"]
