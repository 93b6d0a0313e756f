# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Bounded wrappers around ``subprocess`` execution.

Every tool invocation goes through :func:`run_command`. The child runs in
its own process group so that a timeout, or an interrupted caller, can
reclaim the child together with everything it spawned before control
returns.
"""

from __future__ import annotations

import logging
import os
import signal

# Bandit: tool execution always passes argument lists, never ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT: Final[float] = 30.0
KILL_GRACE_PERIOD: Final[float] = 2.0
TIMEOUT_RETURNCODE: Final[int] = 124
NOT_FOUND_RETURNCODE: Final[int] = 127
_USE_PROCESS_GROUPS: Final[bool] = os.name == "posix"


class ProcessStatus(str, Enum):
    """Enumerate how a command invocation ended."""

    COMPLETED = "completed"
    TIMED_OUT = "timed-out"
    NOT_FOUND = "not-found"


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Captured outcome of running an external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    status: ProcessStatus = ProcessStatus.COMPLETED

    @property
    def timed_out(self) -> bool:
        return self.status is ProcessStatus.TIMED_OUT

    @property
    def not_found(self) -> bool:
        return self.status is ProcessStatus.NOT_FOUND


CommandRunner = Callable[..., ProcessResult]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> ProcessResult:
    """Run *args* to completion or until *timeout* expires.

    Args:
        args: Command followed by its arguments.
        cwd: Working directory for the child process.
        env: Optional replacement environment.
        timeout: Seconds to wait before the process group is killed; ``None``
            waits indefinitely.

    Returns:
        ProcessResult: Captured output plus a status distinguishing normal
        completion, timeout and a missing executable.

    Raises:
        ValueError: If *args* is empty.
        NotADirectoryError: If *cwd* is given but is not an existing directory.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)
    if cwd is not None and not Path(cwd).is_dir():
        raise NotADirectoryError(f"working directory does not exist: {cwd}")
    command = tuple(str(part) for part in args)
    LOGGER.debug("running command=%s cwd=%s timeout=%s", command, cwd, timeout)

    try:
        # Bandit: commands originate from vetted language backends; we pass
        # argument lists directly without shell expansion.
        process = subprocess.Popen(  # nosec B603
            command,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            start_new_session=_USE_PROCESS_GROUPS,
        )
    except (FileNotFoundError, PermissionError, NotADirectoryError) as exc:
        LOGGER.debug("executable unavailable command=%s error=%s", command[0], exc)
        return ProcessResult(
            args=command,
            returncode=NOT_FOUND_RETURNCODE,
            stdout="",
            stderr="",
            status=ProcessStatus.NOT_FOUND,
        )

    with process:
        try:
            stdout, stderr = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_process_tree(process)
            stdout, stderr = _drain(process)
            timeout_msg = f"Command timed out after {timeout:.1f}s"
            LOGGER.debug("timed out command=%s", command)
            return ProcessResult(
                args=command,
                returncode=TIMEOUT_RETURNCODE,
                stdout=stdout,
                stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
                status=ProcessStatus.TIMED_OUT,
            )
        except BaseException:
            _kill_process_tree(process)
            _drain(process)
            raise
        if _USE_PROCESS_GROUPS:
            # The leader has exited; kill whatever is left in its process group.
            _kill_process_tree(process)

    LOGGER.debug("finished command=%s returncode=%s", command[0], process.returncode)
    return ProcessResult(
        args=command,
        returncode=process.returncode,
        stdout=stdout or "",
        stderr=stderr or "",
    )


def _kill_process_tree(process: subprocess.Popen[str]) -> None:
    """Forcibly terminate *process* and every member of its process group."""

    if _USE_PROCESS_GROUPS:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        except PermissionError:
            process.kill()
        return
    process.kill()


def _drain(process: subprocess.Popen[str]) -> tuple[str, str]:
    """Collect remaining output after a kill and reap the child."""

    try:
        stdout, stderr = process.communicate(timeout=KILL_GRACE_PERIOD)
    except subprocess.TimeoutExpired:
        # A descendant escaped the process group and still holds the pipes.
        process.kill()
        for stream in (process.stdout, process.stderr):
            if stream is not None:
                stream.close()
        process.wait()
        return "", ""
    return stdout or "", stderr or ""


__all__ = [
    "DEFAULT_TIMEOUT",
    "NOT_FOUND_RETURNCODE",
    "TIMEOUT_RETURNCODE",
    "CommandRunner",
    "ProcessResult",
    "ProcessStatus",
    "run_command",
]
