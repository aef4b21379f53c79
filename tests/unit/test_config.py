"""Tests for chat-transcript configuration loading."""

from __future__ import annotations

import pytest

from chat_transcript.config import ConfigError, Settings, load_settings


class TestLoadSettingsDefaults:
    """Every variable is optional."""

    def test_defaults_when_unset(self, clean_env: None) -> None:
        """No variables set returns the dataclass defaults."""
        settings = load_settings()

        assert settings == Settings()
        assert settings.log_level == "INFO"
        assert settings.left_color == "#e3f2fd"
        assert settings.right_color == "#4caf50"
        assert settings.default_theme == ""

    def test_whitespace_values_ignored(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Whitespace-only values fall back to defaults."""
        monkeypatch.setenv("CHAT_LEFT_COLOR", "   ")

        assert load_settings().left_color == "#e3f2fd"


class TestLoadSettingsOverrides:
    """Valid values are honoured."""

    def test_custom_log_level(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """CHAT_LOG_LEVEL=debug is normalised to DEBUG."""
        monkeypatch.setenv("CHAT_LOG_LEVEL", "debug")

        assert load_settings().log_level == "DEBUG"

    def test_custom_colors(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """Valid colors replace the side fallbacks."""
        monkeypatch.setenv("CHAT_LEFT_COLOR", "navy")
        monkeypatch.setenv("CHAT_RIGHT_COLOR", "rgb(1, 2, 3)")

        settings = load_settings()

        assert settings.left_color == "navy"
        assert settings.right_color == "rgb(1, 2, 3)"

    def test_default_theme(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """CHAT_DEFAULT_THEME is taken verbatim."""
        monkeypatch.setenv("CHAT_DEFAULT_THEME", "linear-gradient(red, blue)")

        assert load_settings().default_theme == "linear-gradient(red, blue)"


class TestLoadSettingsInvalid:
    """Invalid values raise ConfigError."""

    def test_invalid_log_level(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """An unknown level name raises ConfigError naming the variable."""
        monkeypatch.setenv("CHAT_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigError, match="CHAT_LOG_LEVEL"):
            load_settings()

    def test_invalid_color(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """An invalid color raises ConfigError naming the variable."""
        monkeypatch.setenv("CHAT_RIGHT_COLOR", "not-a-color")

        with pytest.raises(ConfigError, match="CHAT_RIGHT_COLOR"):
            load_settings()

    def test_all_invalid_names_reported(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The error message names every invalid variable."""
        monkeypatch.setenv("CHAT_LOG_LEVEL", "LOUD")
        monkeypatch.setenv("CHAT_LEFT_COLOR", "nope")

        with pytest.raises(ConfigError) as exc_info:
            load_settings()

        assert "CHAT_LOG_LEVEL" in str(exc_info.value)
        assert "CHAT_LEFT_COLOR" in str(exc_info.value)
