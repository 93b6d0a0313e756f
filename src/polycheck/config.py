# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persisted enable/disable settings consumed by the check engine."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH
from .process_utils import DEFAULT_TIMEOUT
from .registry import LanguageConfig

LOGGER = logging.getLogger(__name__)

GLOBAL_DISABLE_KEY: Final[str] = "disable"
_LANGUAGE_KEY_PREFIX: Final[str] = "disable"
_LANGUAGES_FIELD: Final[str] = "disabled_languages"


class ConfigError(Exception):
    """Raised when configuration cannot be persisted or is invalid."""


class Settings(BaseModel):
    """Global and per-language switches plus the tool deadline.

    The persisted form is flat: ``{"disable": false, "disableScala": true}``.
    Per-language keys are folded into :attr:`disabled_languages` on load and
    expanded again by :meth:`to_mapping`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    disable: bool = False
    disabled_languages: frozenset[str] = Field(default_factory=frozenset)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @model_validator(mode="before")
    @classmethod
    def _fold_language_flags(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        folded: dict[str, Any] = {}
        languages = {str(flag) for flag in data.get(_LANGUAGES_FIELD, ()) or ()}
        for key, value in data.items():
            if key == _LANGUAGES_FIELD:
                continue
            if key == GLOBAL_DISABLE_KEY or not key.startswith(_LANGUAGE_KEY_PREFIX):
                folded[key] = value
                continue
            if not isinstance(value, bool):
                raise ValueError(f"'{key}' must be a boolean, got {value!r}")
            flag = key[len(_LANGUAGE_KEY_PREFIX) :]
            if value:
                languages.add(flag)
            else:
                languages.discard(flag)
        folded[_LANGUAGES_FIELD] = frozenset(languages)
        return folded

    def is_language_disabled(self, config: LanguageConfig) -> bool:
        """Return ``True`` when *config* is switched off globally or individually."""

        if self.disable:
            return True
        wanted = config.flag.lower()
        return any(flag.lower() == wanted for flag in self.disabled_languages)

    def to_mapping(self) -> dict[str, Any]:
        """Return the flat, JSON-ready representation of the settings."""

        payload: dict[str, Any] = {GLOBAL_DISABLE_KEY: self.disable}
        for flag in sorted(self.disabled_languages):
            payload[f"{_LANGUAGE_KEY_PREFIX}{flag}"] = True
        payload["timeout"] = self.timeout
        return payload


def resolve_config_path(path: Path | None = None) -> Path:
    """Return the settings file location, honouring ``$POLYCHECK_CONFIG``."""

    if path is not None:
        return path.expanduser()
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from disk; problems degrade to defaults with a warning.

    Args:
        path: Optional explicit file; defaults to :func:`resolve_config_path`.

    Returns:
        Settings: Parsed settings, or defaults when the file is absent or invalid.
    """

    target = resolve_config_path(path)
    if not target.is_file():
        return Settings()
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
        if not isinstance(data, Mapping):
            raise ValueError("top-level JSON value must be an object")
        return Settings.model_validate(data)
    except (OSError, ValueError, ValidationError) as exc:
        LOGGER.warning("ignoring unreadable settings file %s: %s", target, exc)
        return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Persist *settings* as JSON and return the written path.

    Raises:
        ConfigError: If the file cannot be written.
    """

    target = resolve_config_path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(settings.to_mapping(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"could not write settings to {target}: {exc}") from exc
    return target


def set_language_enabled(settings: Settings, config: LanguageConfig | None, enabled: bool) -> Settings:
    """Return a copy of *settings* with one switch flipped.

    Args:
        settings: Current settings.
        config: Backend to toggle, or ``None`` for the global switch.
        enabled: Desired state.

    Returns:
        Settings: Updated settings instance.
    """

    if config is None:
        return settings.model_copy(update={"disable": not enabled})
    remaining = _without_flag(settings.disabled_languages, config.flag)
    updated = remaining if enabled else remaining | {config.flag}
    return settings.model_copy(update={"disabled_languages": frozenset(updated)})


def _without_flag(flags: Iterable[str], flag: str) -> frozenset[str]:
    wanted = flag.lower()
    return frozenset(entry for entry in flags if entry.lower() != wanted)


__all__ = [
    "GLOBAL_DISABLE_KEY",
    "ConfigError",
    "Settings",
    "load_settings",
    "resolve_config_path",
    "save_settings",
    "set_language_enabled",
]
