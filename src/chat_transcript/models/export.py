"""Pydantic models for exporting a parsed transcript as JSON.

Mirrors the dataclasses in :mod:`chat_transcript.models.transcript` with a
serialisable shape:

- :class:`ConfigModel` -- title and theme.
- :class:`ParticipantModel` -- one declared participant.
- :class:`MessageModel` -- one message; ``quoted_ref`` keeps its
  ``int``/``str`` distinction.
- :class:`TranscriptDocument` -- the full document, built with
  :meth:`TranscriptDocument.from_result`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from chat_transcript.models.transcript import (
    DEFAULT_TITLE,
    Message,
    Participant,
    ParseWarning,
    TranscriptConfig,
    TranscriptParseResult,
)

# ---------------------------------------------------------------------------
# Leaf models
# ---------------------------------------------------------------------------


class ConfigModel(BaseModel):
    """Serialisable :class:`TranscriptConfig`."""

    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_TITLE
    theme_spec: str = ""
    is_dark_variant: bool = False

    @classmethod
    def from_config(cls, config: TranscriptConfig) -> ConfigModel:
        return cls(
            title=config.title,
            theme_spec=config.theme_spec,
            is_dark_variant=config.is_dark_variant,
        )


class ParticipantModel(BaseModel):
    """Serialisable :class:`Participant`.

    Attributes:
        handle: Unique participant key.
        display_name: Name shown to readers.
        avatar_glyph: Avatar glyph.
        accent_color: Validated color, or ``""`` when unset.
        side: ``"L"`` or ``"R"``.
    """

    model_config = ConfigDict(frozen=True)

    handle: str
    display_name: str
    avatar_glyph: str
    accent_color: str = ""
    side: Literal["L", "R"] = "L"

    @classmethod
    def from_participant(cls, participant: Participant) -> ParticipantModel:
        return cls(
            handle=participant.handle,
            display_name=participant.display_name,
            avatar_glyph=participant.avatar_glyph,
            accent_color=participant.accent_color,
            side=participant.side.value,
        )


class MessageModel(BaseModel):
    """Serialisable :class:`Message`.

    Attributes:
        sequence_id: Message id.
        speaker_handle: Handle from the message header.
        body: Markdown body with code fences restored.
        custom_color: Per-message color override, or ``None``.
        quoted_ref: Quoted message id or label, or ``None``.
        created_at: Capture time during parsing.
    """

    model_config = ConfigDict(frozen=True)

    sequence_id: int
    speaker_handle: str
    body: str
    custom_color: str | None = None
    quoted_ref: int | str | None = None
    created_at: datetime

    @classmethod
    def from_message(cls, message: Message) -> MessageModel:
        return cls(
            sequence_id=message.sequence_id,
            speaker_handle=message.speaker_handle,
            body=message.body,
            custom_color=message.custom_color,
            quoted_ref=message.quoted_ref,
            created_at=message.created_at,
        )


class WarningModel(BaseModel):
    """Serialisable :class:`ParseWarning`."""

    model_config = ConfigDict(frozen=True)

    line_number: int
    message: str
    raw_line: str

    @classmethod
    def from_warning(cls, warning: ParseWarning) -> WarningModel:
        return cls(
            line_number=warning.line_number,
            message=warning.message,
            raw_line=warning.raw_line,
        )


# ---------------------------------------------------------------------------
# TranscriptDocument -- full export wrapper
# ---------------------------------------------------------------------------


class TranscriptDocument(BaseModel):
    """A complete parsed transcript in export form.

    Participants are exported as a list sorted by handle so the output is
    stable regardless of declaration order.

    Attributes:
        source: Where the transcript came from.
        config: Title and theme.
        participants: Declared participants.
        messages: Messages in document order.
        warnings: Parse warnings.
    """

    source: str = "<string>"
    config: ConfigModel = Field(default_factory=ConfigModel)
    participants: list[ParticipantModel] = Field(default_factory=list)
    messages: list[MessageModel] = Field(default_factory=list)
    warnings: list[WarningModel] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: TranscriptParseResult) -> TranscriptDocument:
        """Build a :class:`TranscriptDocument` from a parse result.

        Args:
            result: Output of :func:`~chat_transcript.parser.parse_transcript`.

        Returns:
            The export model, ready for ``model_dump_json()``.
        """
        return cls(
            source=result.source,
            config=ConfigModel.from_config(result.config),
            participants=[
                ParticipantModel.from_participant(result.participants[handle])
                for handle in sorted(result.participants)
            ],
            messages=[MessageModel.from_message(m) for m in result.messages],
            warnings=[WarningModel.from_warning(w) for w in result.warnings],
        )
