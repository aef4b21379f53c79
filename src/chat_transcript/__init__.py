"""chat-transcript: parser for author-written chat transcripts.

Turns the chat transcript mini-language (``#title=`` / ``#theme=``
directives, ``@handle(...)`` declarations and ``name: text`` messages with
fenced code) into a config, a participant table and an ordered message
list for a renderer to consume.
"""

from __future__ import annotations

from chat_transcript.colors import is_valid_color
from chat_transcript.exceptions import InvalidInputError, TranscriptError
from chat_transcript.models.export import TranscriptDocument
from chat_transcript.models.transcript import (
    Message,
    Participant,
    ParseWarning,
    Side,
    TranscriptConfig,
    TranscriptParseResult,
)
from chat_transcript.parser import parse_transcript, parse_transcript_file

__version__ = "0.1.0"

__all__ = [
    "InvalidInputError",
    "Message",
    "ParseWarning",
    "Participant",
    "Side",
    "TranscriptConfig",
    "TranscriptDocument",
    "TranscriptError",
    "TranscriptParseResult",
    "is_valid_color",
    "parse_transcript",
    "parse_transcript_file",
]
