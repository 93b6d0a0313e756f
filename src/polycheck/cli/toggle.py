# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``enable`` and ``disable`` commands persisting per-language switches."""

from __future__ import annotations

from typing import Annotated, Final

import typer

from ..config import ConfigError, load_settings, save_settings, set_language_enabled
from ..languages import DEFAULT_REGISTRY
from ..logging import ok, warn
from ..registry import LanguageConfig
from .shared import CLIError, abort

ALL_LANGUAGES: Final[str] = "all"

LanguageArgument = Annotated[
    str,
    typer.Argument(help="Language code or name (e.g. scala), or 'all'.", show_default=False),
]


def _lookup(language: str) -> LanguageConfig | None:
    if language.strip().lower() == ALL_LANGUAGES:
        return None
    config = DEFAULT_REGISTRY.find(language)
    if config is None:
        known = ", ".join(entry.code for entry in DEFAULT_REGISTRY.languages())
        raise CLIError(f"Unknown language '{language}'. Known languages: {known}, {ALL_LANGUAGES}")
    return config


def toggle_language(language: str, *, enabled: bool) -> None:
    """Flip one persisted switch and report the new state.

    Raises:
        CLIError: If the language is unknown or the settings cannot be saved.
    """

    config = _lookup(language)
    settings = set_language_enabled(load_settings(), config, enabled)
    try:
        path = save_settings(settings)
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc
    label = "All language" if config is None else config.name
    ok(f"{label} checking {'enabled' if enabled else 'disabled'} (saved to {path})")
    if enabled and config is not None and settings.disable:
        warn("All language checking is still disabled globally; run 'polycheck enable all'")


def enable_command(language: LanguageArgument) -> None:
    """Enable checking for LANGUAGE."""

    try:
        toggle_language(language, enabled=True)
    except CLIError as exc:
        abort(exc)


def disable_command(language: LanguageArgument) -> None:
    """Disable checking for LANGUAGE."""

    try:
        toggle_language(language, enabled=False)
    except CLIError as exc:
        abort(exc)


__all__ = ["disable_command", "enable_command", "toggle_language"]
