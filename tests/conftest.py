"""Shared fixtures for chat-transcript tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import datetime

import pytest

_ENV_VARS = (
    "CHAT_LOG_LEVEL",
    "CHAT_LEFT_COLOR",
    "CHAT_RIGHT_COLOR",
    "CHAT_DEFAULT_THEME",
)

FIXED_TIME = datetime(2026, 1, 15, 9, 30, 0)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all chat-transcript environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("chat_transcript.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def fixed_clock() -> object:
    """Return a clock callable that always yields :data:`FIXED_TIME`."""
    return lambda: FIXED_TIME


@pytest.fixture(autouse=True)
def _reset_loggers() -> Generator[None, None, None]:
    """Restore the root and package loggers after each test to prevent handler leaks."""
    saved = [
        (logger, logger.handlers[:], logger.level)
        for logger in (logging.getLogger(), logging.getLogger("chat_transcript"))
    ]
    yield
    for logger, handlers, level in saved:
        logger.handlers = handlers
        logger.setLevel(level)
