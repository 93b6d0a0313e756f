# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concurrent availability probes for the status report."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from .config import Settings
from .constants import PROBE_TIMEOUT
from .process_utils import CommandRunner, ProcessStatus, run_command
from .registry import LanguageConfig

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolProbe:
    """Availability of one backend's tool."""

    config: LanguageConfig
    available: bool
    disabled: bool


def _probe_one(config: LanguageConfig, runner: CommandRunner) -> bool:
    try:
        completed = runner([config.tool, *config.version_args], cwd=None, timeout=PROBE_TIMEOUT)
    except Exception as exc:  # pragma: no cover - depends on host environment
        LOGGER.debug("probe for %s failed: %s", config.tool, exc)
        return False
    return completed.status is ProcessStatus.COMPLETED and completed.returncode == 0


def probe_tools(
    configs: Sequence[LanguageConfig],
    settings: Settings,
    *,
    runner: CommandRunner = run_command,
    max_workers: int | None = None,
) -> list[ToolProbe]:
    """Probe every backend's tool concurrently and keep the input order.

    Args:
        configs: Backends to probe.
        settings: Settings used to flag disabled backends.
        runner: Process runner; injectable for tests.
        max_workers: Thread pool size; defaults to one thread per backend.

    Returns:
        list[ToolProbe]: One entry per backend, in the order of *configs*.
    """

    if not configs:
        return []
    workers = max_workers or len(configs)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        availability = list(executor.map(lambda config: _probe_one(config, runner), configs))
    return [
        ToolProbe(config=config, available=available, disabled=settings.is_language_disabled(config))
        for config, available in zip(configs, availability, strict=True)
    ]


def render_status(probes: Sequence[ToolProbe], settings: Settings) -> list[str]:
    """Return the status table lines shown by ``help`` and ``status``."""

    lines = ["Current Status:"]
    if settings.disable:
        lines.append("  🚫 All language checking is DISABLED via config")
    for probe in probes:
        label = f"{probe.config.name} ({probe.config.code})"
        if probe.disabled:
            lines.append(f"  🚫 {label}: DISABLED via config")
        elif probe.available:
            lines.append(f"  ✅ {label}: Available")
        else:
            lines.append(f"  ❌ {label}: Not found - {probe.config.install_hint}")
    return lines


__all__ = ["ToolProbe", "probe_tools", "render_status"]
