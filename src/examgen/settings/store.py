"""Persisted key/value settings for examgen.

This module stores the API key and preferred model between sessions.
The invocation pipeline never reads these stores; callers load a
GenerationConfig from a store and pass it explicitly.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from examgen.core.types import DEFAULT_MODEL, GenerationConfig, ModelIdentifier

if TYPE_CHECKING:
    from examgen.core.protocols import SettingsProvider

logger = logging.getLogger(__name__)

STORAGE_KEY_API = "examgen_api_key"
STORAGE_KEY_MODEL = "examgen_model"


class MemorySettingsStore:
    """In-process settings store.

    Example:
        >>> store = MemorySettingsStore({"examgen_model": "gemini-2.5-flash"})
        >>> store.get("examgen_model")
        'gemini-2.5-flash'
    """

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JSONSettingsStore:
    """Flat key/value settings stored in a JSON file.

    Uses atomic writes (temp file + rename) for safety. A missing, empty
    or corrupt file reads as an empty store.

    Example:
        >>> store = JSONSettingsStore("~/.examgen/settings.json")
        >>> store.set("examgen_model", "gemini-3-pro-preview")
        >>> store.get("examgen_model")
        'gemini-3-pro-preview'
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the JSON settings store.

        Args:
            path: Path to the JSON file. ``~`` is expanded.
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        """Location of the settings file."""
        return self._path

    def _load(self) -> dict[str, str]:
        """Load all values from the JSON file."""
        if not self._path.exists():
            return {}

        try:
            content = self._path.read_text(encoding="utf-8")
            if not content.strip():
                return {}
            data = json.loads(content)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load settings from {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self._path}: expected a JSON object")
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _save(self, values: dict[str, str]) -> None:
        """Write all values with an atomic rename."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(values, indent=2, sort_keys=True)

        temp_fd, temp_path = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=".settings_",
            suffix=".tmp",
        )
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            Path(temp_path).replace(self._path)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._save(values)


def parse_model(value: str | None) -> ModelIdentifier:
    """Validate a stored model id, falling back to the default model.

    Args:
        value: The stored value, possibly absent or stale.

    Returns:
        The matching ModelIdentifier, or DEFAULT_MODEL.
    """
    if not value:
        return DEFAULT_MODEL
    try:
        return ModelIdentifier(value)
    except ValueError:
        logger.warning(f"Unknown model '{value}' in settings, using {DEFAULT_MODEL.value}")
        return DEFAULT_MODEL


def load_generation_config(store: SettingsProvider) -> GenerationConfig:
    """Build a GenerationConfig from persisted settings.

    Args:
        store: The settings provider.

    Returns:
        Config with the stored credential (empty if none) and a valid model.
    """
    return GenerationConfig(
        credential=store.get(STORAGE_KEY_API) or "",
        primary_model=parse_model(store.get(STORAGE_KEY_MODEL)),
    )


def save_credential(store: SettingsProvider, credential: str) -> None:
    """Persist the API key."""
    store.set(STORAGE_KEY_API, credential.strip())


def save_model(store: SettingsProvider, model: ModelIdentifier | str) -> None:
    """Persist the preferred model.

    Raises:
        ValueError: If model is not a known model identifier.
    """
    store.set(STORAGE_KEY_MODEL, ModelIdentifier(model).value)
