"""Unit tests for the transcript dataclasses."""

from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from chat_transcript.models.transcript import (
    FencedBlock,
    Message,
    Participant,
    ParseWarning,
    Side,
    TranscriptConfig,
    TranscriptParseResult,
)


class TestTranscriptConfig:
    """Tests for the TranscriptConfig dataclass."""

    def test_defaults(self) -> None:
        """Default construction: title 'Chat', empty theme, light variant."""
        config = TranscriptConfig()

        assert config.title == "Chat"
        assert config.theme_spec == ""
        assert config.is_dark_variant is False

    def test_frozen(self) -> None:
        """Config is immutable once built."""
        config = TranscriptConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.title = "Other"  # type: ignore[misc]


class TestParticipant:
    """Tests for the Participant dataclass."""

    def test_defaults(self) -> None:
        """Color defaults to unset and side to LEFT."""
        participant = Participant(handle="a", display_name="a", avatar_glyph="A")

        assert participant.accent_color == ""
        assert participant.side is Side.LEFT

    def test_side_values(self) -> None:
        """Side values are the L/R tokens used in declarations."""
        assert Side("L") is Side.LEFT
        assert Side("R") is Side.RIGHT


class TestMessage:
    """Tests for the Message dataclass."""

    def test_optional_fields_default_none(self) -> None:
        """custom_color and quoted_ref default to None."""
        message = Message(sequence_id=1, speaker_handle="a", body="hi")

        assert message.custom_color is None
        assert message.quoted_ref is None
        assert isinstance(message.created_at, datetime)

    def test_equality(self) -> None:
        """Two messages with identical fields are equal."""
        stamp = datetime(2026, 1, 1)
        m1 = Message(1, "a", "hi", quoted_ref="x", created_at=stamp)
        m2 = Message(1, "a", "hi", quoted_ref="x", created_at=stamp)

        assert m1 == m2


class TestTranscriptParseResult:
    """Tests for the TranscriptParseResult dataclass."""

    def test_empty(self) -> None:
        """Default construction yields an empty result."""
        result = TranscriptParseResult()

        assert result.config == TranscriptConfig()
        assert result.participants == {}
        assert result.messages == []
        assert result.warnings == []
        assert result.source == "<string>"

    def test_find_message(self) -> None:
        """find_message returns the first message with the id, else None."""
        first = Message(2, "a", "one")
        second = Message(2, "b", "two")
        result = TranscriptParseResult(messages=[first, second])

        assert result.find_message(2) is first
        assert result.find_message(3) is None

    def test_warning_and_fence_fields(self) -> None:
        """Warning and fence records keep their fields."""
        warning = ParseWarning(line_number=3, message="bad", raw_line="x")
        fence = FencedBlock(language="py", code="pass\n", line_span=2)

        assert (warning.line_number, warning.message, warning.raw_line) == (3, "bad", "x")
        assert (fence.language, fence.code, fence.line_span) == ("py", "pass\n", 2)
