"""Plain-text preview of a parsed transcript.

Renders a :class:`~chat_transcript.models.transcript.TranscriptParseResult`
as console output, applying the same fallbacks a visual renderer uses:
speakers without a declaration get a default glyph, the left side and the
side's fallback color, and quotes that point at no message still show
their label.

The primary entry point is :func:`format_transcript`, which returns the
formatted string.  :func:`print_transcript` writes it to stdout.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

from chat_transcript.config import Settings
from chat_transcript.models.transcript import (
    Message,
    Side,
    TranscriptParseResult,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH
_BODY_INDENT = "    "


@dataclass(frozen=True)
class SpeakerView:
    """Resolved display attributes for a message's speaker.

    Attributes:
        display_name: Declared display name, or the raw handle.
        avatar_glyph: Declared glyph, or the handle's first character.
        side: Declared side, or :attr:`Side.LEFT`.
        color: Message override, then accent color, then side fallback.
        declared: Whether the handle matched a participant declaration.
    """

    display_name: str
    avatar_glyph: str
    side: Side
    color: str
    declared: bool


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_speaker(
    result: TranscriptParseResult,
    message: Message,
    settings: Settings | None = None,
) -> SpeakerView:
    """Resolve the display attributes of *message*'s speaker.

    Args:
        result: The parse result holding the participant table.
        message: The message whose speaker to resolve.
        settings: Source of fallback colors; defaults to :class:`Settings`.

    Returns:
        A :class:`SpeakerView`; never fails for unknown handles.
    """
    settings = settings or Settings()
    participant = result.participants.get(message.speaker_handle)

    if participant is None:
        side = Side.LEFT
        name = message.speaker_handle
        glyph = message.speaker_handle[:1]
        accent = ""
    else:
        side = participant.side
        name = participant.display_name
        glyph = participant.avatar_glyph
        accent = participant.accent_color

    fallback = settings.right_color if side is Side.RIGHT else settings.left_color
    return SpeakerView(
        display_name=name,
        avatar_glyph=glyph,
        side=side,
        color=message.custom_color or accent or fallback,
        declared=participant is not None,
    )


def quote_label(quoted_ref: int | str) -> str:
    """Return the label shown above a quoting message."""
    if isinstance(quoted_ref, int):
        return f"reply to #{quoted_ref}"
    return f"reply: {quoted_ref}"


def format_transcript(
    result: TranscriptParseResult,
    settings: Settings | None = None,
) -> str:
    """Render a parse result as a multi-line preview string.

    Args:
        result: The parse result to format.
        settings: Fallbacks for theme and speaker colors.

    Returns:
        The preview, ready for console display.
    """
    settings = settings or Settings()
    lines: list[str] = []

    _append_header(lines, result, settings)
    _append_messages(lines, result, settings)
    _append_summary(lines, result)
    lines.append(_SEPARATOR)

    return "\n".join(lines)


def print_transcript(
    result: TranscriptParseResult,
    settings: Settings | None = None,
) -> None:
    """Format and print a parse result to stdout."""
    sys.stdout.write(format_transcript(result, settings) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _append_header(
    lines: list[str],
    result: TranscriptParseResult,
    settings: Settings,
) -> None:
    config = result.config
    lines.append(_SEPARATOR)
    lines.append(f"  {config.title}")
    lines.append(_SEPARATOR)

    theme = config.theme_spec or settings.default_theme
    if theme:
        variant = " (dark)" if config.is_dark_variant else ""
        lines.append(f"  Theme: {theme}{variant}")


def _append_messages(
    lines: list[str],
    result: TranscriptParseResult,
    settings: Settings,
) -> None:
    if not result.messages:
        lines.append("")
        lines.append("  No messages.")
        return

    for message in result.messages:
        speaker = resolve_speaker(result, message, settings)
        lines.append("")

        if message.quoted_ref is not None:
            lines.append(f"  > {quote_label(message.quoted_ref)}{_quote_suffix(result, message.quoted_ref)}")

        marker = "<" if speaker.side is Side.LEFT else ">"
        lines.append(
            f"  {marker} #{message.sequence_id} [{speaker.avatar_glyph}] "
            f"{speaker.display_name} ({speaker.color})"
        )
        for body_line in message.body.split("\n"):
            lines.append(f"{_BODY_INDENT}{body_line}".rstrip())


def _append_summary(lines: list[str], result: TranscriptParseResult) -> None:
    lines.append("")
    lines.append("--- SUMMARY ---")
    lines.append(f"  Messages: {len(result.messages)}")
    lines.append(f"  Participants: {len(result.participants)}")
    lines.append(f"  Warnings: {len(result.warnings)}")

    for warning in result.warnings:
        lines.append(f"    - line {warning.line_number}: {warning.message}")


def _quote_suffix(result: TranscriptParseResult, quoted_ref: int | str) -> str:
    """Name the quoted speaker when the reference resolves to a message."""
    if not isinstance(quoted_ref, int):
        return ""
    quoted = result.find_message(quoted_ref)
    if quoted is None:
        return ""
    return f" ({quoted.speaker_handle})"
