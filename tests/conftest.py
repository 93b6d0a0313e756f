# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from polycheck.config import Settings
from polycheck.models import Diagnostic
from polycheck.process_utils import ProcessResult, ProcessStatus
from polycheck.registry import BuildContext, LanguageConfig, LanguageRegistry


@pytest.fixture(autouse=True)
def isolated_settings_file(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the persisted settings at a throwaway file for every test."""

    path = tmp_path_factory.mktemp("settings") / "config.json"
    monkeypatch.setenv("POLYCHECK_CONFIG", str(path))
    return path


@dataclass
class RecordingRunner:
    """Process runner double returning a canned result and recording calls."""

    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    status: ProcessStatus = ProcessStatus.COMPLETED
    calls: list[dict[str, object]] = field(default_factory=list)

    def __call__(self, args: Sequence[str], *, cwd: Path | None = None, timeout: float | None = None) -> ProcessResult:
        self.calls.append({"args": list(args), "cwd": cwd, "timeout": timeout})
        return ProcessResult(
            args=tuple(args),
            returncode=self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
            status=self.status,
        )


def parse_fake(stdout: str, stderr: str, file: Path, project_root: Path) -> list[Diagnostic]:
    """Parse ``line:column:severity:message`` records used by the fake backend."""

    del stderr, file, project_root
    results: list[Diagnostic] = []
    for raw in stdout.splitlines():
        parts = raw.split(":", 3)
        if len(parts) != 4:
            continue
        line, column, severity, message = parts
        results.append(Diagnostic(line=int(line), column=int(column), severity=severity, message=message))
    return results


def fake_args(file: Path, project_root: Path, tool: str, context: BuildContext) -> list[str]:
    del project_root, tool
    args = ["--check", str(file)]
    if context.has_project_config:
        args.append("--project")
    return args


def make_fake_config(
    *,
    name: str = "Fake",
    tool: str = "fakecheck",
    extensions: tuple[str, ...] = (".fake",),
    parse_output: Callable[[str, str, Path, Path], Sequence[Diagnostic]] = parse_fake,
    local_paths: tuple[str, ...] = (),
) -> LanguageConfig:
    return LanguageConfig(
        name=name,
        code=name.lower(),
        flag=name,
        tool=tool,
        extensions=extensions,
        build_args=fake_args,
        parse_output=parse_output,
        local_paths=local_paths,
        detect_config=lambda root: (root / "fake.toml").exists(),
        install_hint="install fakecheck",
    )


@pytest.fixture
def fake_config() -> LanguageConfig:
    return make_fake_config()


@pytest.fixture
def fake_registry(fake_config: LanguageConfig) -> LanguageRegistry:
    registry = LanguageRegistry()
    registry.register(fake_config.extensions, fake_config)
    return registry


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def fake_tool(tmp_path: Path) -> Path:
    """Create an executable ``fakecheck`` inside a project-local ``bin`` directory."""

    tool = tmp_path / "bin" / "fakecheck"
    tool.parent.mkdir(parents=True)
    tool.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    tool.chmod(0o755)
    return tool


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_config() -> Callable[..., LanguageConfig]:
    return make_fake_config
