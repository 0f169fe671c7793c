"""Settings module for examgen.

This module provides local key/value stores for the API key and the
preferred model, and helpers to turn them into a GenerationConfig.
"""

from __future__ import annotations

from examgen.settings.store import (
    STORAGE_KEY_API,
    STORAGE_KEY_MODEL,
    JSONSettingsStore,
    MemorySettingsStore,
    load_generation_config,
    parse_model,
    save_credential,
    save_model,
)

__all__ = [
    "STORAGE_KEY_API",
    "STORAGE_KEY_MODEL",
    "JSONSettingsStore",
    "MemorySettingsStore",
    "load_generation_config",
    "parse_model",
    "save_credential",
    "save_model",
]
