"""Configuration loading for chat-transcript.

Reads display fallbacks and the log level from environment variables (with
.env support via python-dotenv).  The parser itself never reads settings;
only the preview and CLI layers use them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from chat_transcript.colors import is_valid_color
from chat_transcript.log import level_number


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        left_color: Fallback color for left-side speakers.
        right_color: Fallback color for right-side speakers.
        default_theme: Background used when a transcript sets no theme.
    """

    log_level: str = "INFO"
    left_color: str = "#e3f2fd"
    right_color: str = "#4caf50"
    default_theme: str = ""


_COLOR_VARS = {
    "CHAT_LEFT_COLOR": "left_color",
    "CHAT_RIGHT_COLOR": "right_color",
}


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the working
    directory is picked up automatically.  Every variable is optional.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If ``CHAT_LOG_LEVEL`` is not a logging level name or a
            color variable is not a valid color.  The message names **all**
            invalid variables.
    """
    load_dotenv()

    values: dict[str, str] = {}
    invalid: list[str] = []

    log_level = os.environ.get("CHAT_LOG_LEVEL", "").strip()
    if log_level:
        if level_number(log_level) is not None:
            values["log_level"] = log_level.upper()
        else:
            invalid.append("CHAT_LOG_LEVEL")

    for env_var, field_name in _COLOR_VARS.items():
        raw = os.environ.get(env_var, "").strip()
        if not raw:
            continue
        if is_valid_color(raw):
            values[field_name] = raw
        else:
            invalid.append(env_var)

    default_theme = os.environ.get("CHAT_DEFAULT_THEME", "").strip()
    if default_theme:
        values["default_theme"] = default_theme

    if invalid:
        names = ", ".join(invalid)
        raise ConfigError(f"Invalid values for environment variables: {names}")

    return Settings(**values)
