"""Unit tests for environment-based settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from examgen.core.config import DEFAULT_SETTINGS_FILE, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate settings from the developer's environment and .env file."""
    for name in ("API_KEY", "MODEL", "BASE_URL", "TIMEOUT_SECONDS", "LOG_LEVEL", "SETTINGS_FILE"):
        monkeypatch.delenv(f"EXAMGEN_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Settings have sensible defaults."""
        settings = Settings()
        assert settings.api_key is None
        assert settings.model is None
        assert settings.base_url == "https://generativelanguage.googleapis.com/v1beta"
        assert settings.timeout_seconds == 120.0
        assert settings.log_level == "WARNING"
        assert settings.settings_file == DEFAULT_SETTINGS_FILE

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Values are read from EXAMGEN_ variables."""
        monkeypatch.setenv("EXAMGEN_API_KEY", "AIza-env")
        monkeypatch.setenv("EXAMGEN_MODEL", "gemini-3-pro-preview")
        monkeypatch.setenv("EXAMGEN_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("EXAMGEN_SETTINGS_FILE", str(tmp_path / "s.json"))

        settings = Settings()

        assert settings.api_key == "AIza-env"
        assert settings.model == "gemini-3-pro-preview"
        assert settings.timeout_seconds == 30.0
        assert settings.settings_file == tmp_path / "s.json"

    def test_dotenv_file(self, tmp_path: Path) -> None:
        """A .env file in the working directory is read."""
        (tmp_path / ".env").write_text("EXAMGEN_LOG_LEVEL=DEBUG\n", encoding="utf-8")
        assert Settings().log_level == "DEBUG"

    def test_timeout_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A zero timeout is rejected."""
        monkeypatch.setenv("EXAMGEN_TIMEOUT_SECONDS", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_api_key_hidden_from_repr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The API key never appears in repr."""
        monkeypatch.setenv("EXAMGEN_API_KEY", "AIza-secret")
        assert "AIza-secret" not in repr(Settings())

    def test_log_level_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Level names are upper-cased."""
        monkeypatch.setenv("EXAMGEN_LOG_LEVEL", " info ")
        assert Settings().log_level == "INFO"

    def test_unknown_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An unknown level fails validation instead of reaching logging."""
        monkeypatch.setenv("EXAMGEN_LOG_LEVEL", "VERBOSE")
        with pytest.raises(ValidationError, match="log_level must be one of"):
            Settings()
