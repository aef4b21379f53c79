"""Data models for chat-transcript."""

from __future__ import annotations

from chat_transcript.models.export import (
    ConfigModel,
    MessageModel,
    ParticipantModel,
    TranscriptDocument,
    WarningModel,
)
from chat_transcript.models.transcript import (
    DEFAULT_TITLE,
    FencedBlock,
    Message,
    Participant,
    ParseWarning,
    Side,
    TranscriptConfig,
    TranscriptParseResult,
)

__all__ = [
    "DEFAULT_TITLE",
    "ConfigModel",
    "FencedBlock",
    "Message",
    "MessageModel",
    "ParseWarning",
    "Participant",
    "ParticipantModel",
    "Side",
    "TranscriptConfig",
    "TranscriptDocument",
    "TranscriptParseResult",
    "WarningModel",
]
