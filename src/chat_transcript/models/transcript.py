"""Transcript data models for parsed chat transcripts.

These dataclasses represent the structured output of the transcript parser:
a :class:`TranscriptConfig`, a participant table keyed by handle, and an
ordered list of :class:`Message` objects.  They are plain frozen stdlib
dataclasses; the pydantic export schema lives in
:mod:`chat_transcript.models.export`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_TITLE = "Chat"


class Side(str, enum.Enum):
    """Which side of the conversation a participant is drawn on."""

    LEFT = "L"
    RIGHT = "R"


@dataclass(frozen=True)
class TranscriptConfig:
    """Document-level settings taken from ``#title=`` and ``#theme=`` lines.

    Attributes:
        title: Conversation title (default ``"Chat"``).
        theme_spec: Normalised background value: a raw CSS color or
            gradient, or a ``url("...")`` expression.  Empty when unset.
        is_dark_variant: ``True`` when the theme carried a ``,dark`` suffix.
    """

    title: str = DEFAULT_TITLE
    theme_spec: str = ""
    is_dark_variant: bool = False


@dataclass(frozen=True)
class Participant:
    """A declared conversation participant.

    Attributes:
        handle: Unique key, matched against message speaker handles.
        display_name: Name shown to readers; defaults to *handle*.
        avatar_glyph: Single glyph used as the avatar.
        accent_color: Validated color expression, or ``""`` when unset.
        side: Layout side (default :attr:`Side.LEFT`).
    """

    handle: str
    display_name: str
    avatar_glyph: str
    accent_color: str = ""
    side: Side = Side.LEFT


@dataclass(frozen=True)
class Message:
    """A single message in the conversation.

    Attributes:
        sequence_id: Explicit id from the header, or the next auto id.
        speaker_handle: Handle from the header.  It is not required to
            match a declared participant.
        body: Markdown body with fenced code blocks restored.
        custom_color: Per-message color override, verbatim, or ``None``.
        quoted_ref: Quoted message id (``int``) or free-text label
            (``str``), or ``None``.
        created_at: Wall-clock time captured while parsing.
    """

    sequence_id: int
    speaker_handle: str
    body: str
    custom_color: str | None = None
    quoted_ref: int | str | None = None
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class FencedBlock:
    """A fenced code block lifted out of the source before chunking.

    Attributes:
        language: Language tag after the opening fence (may be empty).
        code: Text between the opening line and the closing fence.
        line_span: Number of newlines the fence occupied in the source.
    """

    language: str
    code: str
    line_span: int = 0


@dataclass(frozen=True)
class ParseWarning:
    """A structured, non-fatal warning produced during parsing.

    Attributes:
        line_number: 1-based line number in the original source.
        message: Human-readable description of the issue.
        raw_line: The source line that triggered the warning.
    """

    line_number: int
    message: str
    raw_line: str


@dataclass(frozen=True)
class TranscriptParseResult:
    """Top-level return type from the transcript parser.

    Attributes:
        config: Title and theme settings.
        participants: Declared participants keyed by handle.
        messages: Parsed messages in document order.
        warnings: Degradations encountered while parsing.
        source: File path of the parsed transcript, or ``"<string>"``.
    """

    config: TranscriptConfig = field(default_factory=TranscriptConfig)
    participants: dict[str, Participant] = field(default_factory=dict)
    messages: list[Message] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
    source: str = "<string>"

    def find_message(self, sequence_id: int) -> Message | None:
        """Return the first message with *sequence_id*, or ``None``."""
        for message in self.messages:
            if message.sequence_id == sequence_id:
                return message
        return None
