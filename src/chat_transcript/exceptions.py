"""Custom exceptions for the chat-transcript parser.

Malformed transcript content never raises: the parser degrades by
omission and records a :class:`~chat_transcript.models.transcript.ParseWarning`
instead.  Only caller errors surface as exceptions.
"""

from __future__ import annotations


class TranscriptError(Exception):
    """Base class for all chat-transcript errors."""


class InvalidInputError(TranscriptError, TypeError):
    """Raised when the parser is handed something that is not a string.

    This covers ``None`` and any non-``str`` object (bytes included).  It
    subclasses :class:`TypeError` so callers that already guard against
    type mistakes keep working.

    Attributes:
        received_type: Name of the type that was actually passed in.
    """

    def __init__(self, message: str, received_type: str = "") -> None:
        super().__init__(message)
        self.received_type = received_type
