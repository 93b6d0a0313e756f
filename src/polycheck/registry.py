# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Language registry mapping file extensions to backend configurations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from .models import Diagnostic

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildContext:
    """Per-check facts handed to a backend's argument builder."""

    has_project_config: bool
    scratch_dir: Path


DetectConfig = Callable[[Path], bool]
BuildArgs = Callable[[Path, Path, str, BuildContext], Sequence[str]]
ParseOutput = Callable[[str, str, Path, Path], Sequence[Diagnostic]]


def _never_configured(project_root: Path) -> bool:
    del project_root
    return False


@dataclass(frozen=True, slots=True)
class LanguageConfig:
    """Static description of one language backend.

    Attributes:
        name: Display name, e.g. ``"C/C++"``.
        code: Lowercase identifier accepted on the command line.
        flag: Suffix of the persisted ``disable<Flag>`` setting.
        tool: Canonical executable name looked up on ``PATH``.
        extensions: File suffixes owned by the backend.
        build_args: Callable returning the argv tail for the tool.
        parse_output: Pure callable converting tool output to diagnostics.
        local_paths: Project-relative candidates checked before ``PATH``.
        detect_config: Callable reporting whether project configuration exists.
        version_args: Arguments used by the availability probe.
        install_hint: Installation guidance shown when the tool is missing.
    """

    name: str
    code: str
    flag: str
    tool: str
    extensions: tuple[str, ...]
    build_args: BuildArgs
    parse_output: ParseOutput
    local_paths: tuple[str, ...] = ()
    detect_config: DetectConfig = _never_configured
    version_args: tuple[str, ...] = ("--version",)
    install_hint: str = ""


class LanguageRegistry(Mapping[str, LanguageConfig]):
    """Read-mostly mapping from lowercase file suffix to :class:`LanguageConfig`.

    Registration happens once while the process starts. Collisions are a
    configuration defect: the later registration wins and a warning is
    logged, but nothing is raised to the end user. A backend whose
    suffixes have all been claimed by later registrations is dropped.
    """

    def __init__(self) -> None:
        self._by_extension: dict[str, LanguageConfig] = {}
        self._languages: list[LanguageConfig] = []
        self._suffixes_by_length: tuple[str, ...] = ()

    def register(self, extensions: Iterable[str], config: LanguageConfig) -> None:
        """Register *config* for every suffix in *extensions*.

        Args:
            extensions: Suffixes such as ``".ts"``; a missing leading dot is added.
            config: Backend claiming the suffixes.
        """

        for raw in extensions:
            suffix = _normalise_suffix(raw)
            previous = self._by_extension.get(suffix)
            if previous is not None and previous is not config:
                LOGGER.warning(
                    "extension %s registered by %s is overridden by %s",
                    suffix,
                    previous.name,
                    config.name,
                )
            self._by_extension[suffix] = config
        if all(existing is not config for existing in self._languages):
            self._languages.append(config)
        owners = self._by_extension.values()
        self._languages = [existing for existing in self._languages if any(owner is existing for owner in owners)]
        self._suffixes_by_length = tuple(sorted(self._by_extension, key=len, reverse=True))

    def resolve(self, path: Path | str) -> LanguageConfig | None:
        """Return the backend owning *path*, preferring the longest suffix.

        Args:
            path: File path whose name is matched against registered suffixes.

        Returns:
            LanguageConfig | None: Matching backend or ``None`` when unsupported.
        """

        name = Path(path).name.lower()
        for suffix in self._suffixes_by_length:
            if name.endswith(suffix) and len(name) > len(suffix):
                return self._by_extension[suffix]
        return None

    def languages(self) -> tuple[LanguageConfig, ...]:
        """Return registered backends in registration order."""

        return tuple(self._languages)

    def find(self, identifier: str) -> LanguageConfig | None:
        """Return the backend whose code, name or flag matches *identifier*.

        Args:
            identifier: Case-insensitive language code, display name or flag.

        Returns:
            LanguageConfig | None: Matching backend, if any.
        """

        wanted = identifier.strip().lower()
        for config in self._languages:
            if wanted in {config.code.lower(), config.name.lower(), config.flag.lower()}:
                return config
        return None

    def __getitem__(self, suffix: str) -> LanguageConfig:
        return self._by_extension[_normalise_suffix(suffix)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_extension)

    def __len__(self) -> int:
        return len(self._by_extension)


def _normalise_suffix(value: str) -> str:
    suffix = value.strip().lower()
    return suffix if suffix.startswith(".") else f".{suffix}"


__all__ = [
    "BuildArgs",
    "BuildContext",
    "DetectConfig",
    "LanguageConfig",
    "LanguageRegistry",
    "ParseOutput",
]
