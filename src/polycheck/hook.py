# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Editor hook protocol: turn a file-edit notification into a check.

The hook fails open. Anything it cannot understand (an empty payload,
invalid JSON, missing fields, an event or tool it does not handle, a file
that no longer exists) ends the invocation silently with exit code 0 so
that the editor workflow is never interrupted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from .constants import HOOK_EVENT_POST_TOOL_USE, HOOK_TRIGGER_TOOLS
from .engine import CheckEngine
from .models import EXIT_CLEAN, CheckResult
from .reporting import render_hook

LOGGER = logging.getLogger(__name__)


class HookToolInput(BaseModel):
    """Arguments of the editor action that touched a file."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    file_path: str


class HookEvent(BaseModel):
    """Structured payload delivered on standard input for each hook call."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tool_name: str
    tool_input: HookToolInput
    cwd: str

    def target_file(self) -> Path:
        """Return the touched file, resolving relative paths against ``cwd``."""

        candidate = Path(self.tool_input.file_path).expanduser()
        if not candidate.is_absolute():
            candidate = Path(self.cwd) / candidate
        return candidate


@dataclass(frozen=True, slots=True)
class HookOutcome:
    """What the hook process should write and how it should exit."""

    exit_code: int = EXIT_CLEAN
    stderr: str = ""
    result: CheckResult | None = None

    @property
    def checked(self) -> bool:
        return self.result is not None


def parse_hook_event(payload: str) -> HookEvent | None:
    """Return the decoded event, or ``None`` when *payload* is unusable."""

    if not payload.strip():
        return None
    try:
        return HookEvent.model_validate_json(payload)
    except ValidationError as exc:
        LOGGER.debug("ignoring malformed hook payload: %s", exc)
        return None


def is_triggering(event_name: str, event: HookEvent) -> bool:
    """Return ``True`` when *event* describes a file edit worth checking."""

    return event_name == HOOK_EVENT_POST_TOOL_USE and event.tool_name in HOOK_TRIGGER_TOOLS


def handle_hook(
    event_name: str,
    payload: str,
    engine_factory: Callable[[], CheckEngine],
) -> HookOutcome:
    """Run one hook invocation from raw payload to rendered outcome.

    Args:
        event_name: Hook event announced on the command line, e.g. ``PostToolUse``.
        payload: Raw standard input of the hook process.
        engine_factory: Builds the engine only once a check is really needed,
            so ignored events never read settings or touch the registry.

    Returns:
        HookOutcome: Exit code, text destined for standard error and the
        check result when a check ran.
    """

    event = parse_hook_event(payload)
    if event is None:
        return HookOutcome()
    if not is_triggering(event_name, event):
        LOGGER.debug("ignoring hook event=%s tool=%s", event_name, event.tool_name)
        return HookOutcome()

    try:
        target = event.target_file()
        present = target.is_file()
    except (OSError, RuntimeError, ValueError) as exc:
        LOGGER.debug("unresolvable hook path=%s error=%s", event.tool_input.file_path, exc)
        return HookOutcome()
    if not present:
        LOGGER.debug("hook target missing file=%s", target)
        return HookOutcome()

    result = engine_factory().check(target, project_root=Path(event.cwd))
    rendered = render_hook(result)
    return HookOutcome(exit_code=result.exit_code, stderr=rendered or "", result=result)


__all__ = [
    "HookEvent",
    "HookOutcome",
    "HookToolInput",
    "handle_hook",
    "is_triggering",
    "parse_hook_event",
]
