"""Logging helpers for chat-transcript.

Library modules log through ``chat_transcript.*`` loggers and never attach
handlers.  The CLI calls :func:`setup_logging`, which gives the
``chat_transcript`` package logger one stderr handler using a
pipe-separated format with ISO 8601 timestamps::

    2026-01-15T09:30:00 | WARNING  | chat_transcript.parser | chat.txt:4: ...

The root logger is left alone, so an application embedding the parser
keeps full control of its own handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "chat_transcript"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Tags the handler owned by setup_logging.
_HANDLER_ATTR = "_chat_transcript_handler"


def level_number(name: str) -> int | None:
    """Return the numeric level for a level *name*, or ``None`` if unknown.

    Matching is case-insensitive; surrounding whitespace is ignored.
    """
    number = logging.getLevelName(name.strip().upper())
    return number if isinstance(number, int) else None


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Send package log records at *level* and above to *stream*.

    Repeated calls reuse the handler added by the first one, updating its
    level and, when *stream* is given, its target.

    Args:
        level: A logging level name such as ``"DEBUG"`` or ``"warning"``.
        stream: Output stream.  Defaults to :data:`sys.stderr`.

    Returns:
        The ``chat_transcript`` package logger.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = level_number(level)
    if numeric_level is None:
        raise ValueError(f"Invalid log level: {level!r}")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)

    handler = next(
        (h for h in package_logger.handlers if getattr(h, _HANDLER_ATTR, False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        package_logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)

    handler.setLevel(numeric_level)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
