# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the editor hook protocol."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from polycheck.engine import CheckEngine
from polycheck.hook import handle_hook, is_triggering, parse_hook_event
from polycheck.models import EXIT_ATTENTION, EXIT_CLEAN
from polycheck.reporting import OSC_PREFIX
from polycheck.registry import LanguageRegistry


@pytest.fixture
def project(tmp_path: Path, fake_tool: Path) -> Path:
    target = tmp_path / "module.fake"
    target.write_text("body\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def engine_factory(make_config, recording_runner):
    config = make_config(local_paths=("bin/fakecheck",))
    registry = LanguageRegistry()
    registry.register(config.extensions, config)
    built: list[CheckEngine] = []

    def factory() -> CheckEngine:
        engine = CheckEngine(registry=registry, runner=recording_runner)
        built.append(engine)
        return engine

    factory.built = built
    return factory


def _payload(file_path: str, cwd: Path, tool_name: str = "Edit") -> str:
    return json.dumps(
        {
            "session_id": "abc",
            "tool_name": tool_name,
            "tool_input": {"file_path": file_path, "old_string": "a", "new_string": "b"},
            "cwd": str(cwd),
        }
    )


_UNUSABLE_PAYLOADS = [
    "",
    "   \n",
    "{not json",
    "[]",
    '{"tool_name": "Edit"}',
    '{"tool_name": "Edit", "tool_input": {"file_path": "~nosuchuser_zz/a.fake"}, "cwd": "/tmp"}',
]


@pytest.mark.parametrize("payload", _UNUSABLE_PAYLOADS)
def test_unusable_payloads_fail_open(payload: str, engine_factory) -> None:
    outcome = handle_hook("PostToolUse", payload, engine_factory)

    assert outcome.exit_code == EXIT_CLEAN
    assert outcome.stderr == ""
    assert not outcome.checked
    assert engine_factory.built == []


def test_non_trigger_tool_is_ignored(project: Path, engine_factory) -> None:
    outcome = handle_hook("PostToolUse", _payload("module.fake", project, tool_name="Read"), engine_factory)

    assert not outcome.checked
    assert engine_factory.built == []


def test_other_events_are_ignored(project: Path, engine_factory) -> None:
    outcome = handle_hook("PreToolUse", _payload("module.fake", project), engine_factory)

    assert not outcome.checked


def test_missing_file_is_ignored(project: Path, engine_factory) -> None:
    outcome = handle_hook("PostToolUse", _payload("gone.fake", project), engine_factory)

    assert outcome.exit_code == EXIT_CLEAN
    assert not outcome.checked


@pytest.mark.parametrize("tool_name", ["Edit", "MultiEdit", "Write"])
def test_findings_exit_two_with_escape_payload(
    tool_name: str, project: Path, engine_factory, recording_runner
) -> None:
    recording_runner.stdout = "1:4:error:bad token\n"

    outcome = handle_hook("PostToolUse", _payload("module.fake", project, tool_name), engine_factory)

    assert outcome.checked
    assert outcome.exit_code == EXIT_ATTENTION
    assert outcome.stderr.startswith(OSC_PREFIX)
    assert "bad token" in outcome.stderr
    assert recording_runner.calls[0]["cwd"] == project.resolve()


def test_clean_check_is_silent(project: Path, engine_factory) -> None:
    outcome = handle_hook("PostToolUse", _payload(str(project / "module.fake"), project), engine_factory)

    assert outcome.checked
    assert outcome.exit_code == EXIT_CLEAN
    assert outcome.stderr == ""


def test_relative_paths_resolve_against_cwd(project: Path) -> None:
    event = parse_hook_event(_payload("module.fake", project))

    assert event is not None
    assert event.target_file() == project / "module.fake"
    assert is_triggering("PostToolUse", event)
    assert not is_triggering("Stop", event)
