# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry bootstrap for the built-in language backends."""

from __future__ import annotations

from collections.abc import Iterable

from ..registry import LanguageConfig, LanguageRegistry
from .builtins import BUILTIN_LANGUAGES, markers_present


def build_default_registry(configs: Iterable[LanguageConfig] = BUILTIN_LANGUAGES) -> LanguageRegistry:
    """Return a registry populated with *configs* in order.

    Args:
        configs: Backends to register; defaults to the built-in set.

    Returns:
        LanguageRegistry: Registry ready for lookups.
    """

    registry = LanguageRegistry()
    for config in configs:
        registry.register(config.extensions, config)
    return registry


DEFAULT_REGISTRY: LanguageRegistry = build_default_registry()

__all__ = ["BUILTIN_LANGUAGES", "DEFAULT_REGISTRY", "build_default_registry", "markers_present"]
