"""Transcript parser for the chat transcript mini-language.

Parses text such as::

    #title=Team sync
    #theme=linear-gradient(135deg, #667eea, #764ba2),dark
    @alice(R,col:#ff0000,display:Alice W)
    @bob
    alice: Morning!
    > 1
    ---
    bob: Morning. Here is the script:
    ```python
    print(1)
    ```

into a :class:`~chat_transcript.models.transcript.TranscriptParseResult`.

Parsing runs in four stages: fenced code blocks are swapped for one-line
placeholders, the remaining lines are grouped into chunks, each chunk is
interpreted as a directive, participant block or message, and finally the
placeholders inside message bodies are swapped back.  Malformed content is
never fatal; it is dropped and recorded as a
:class:`~chat_transcript.models.transcript.ParseWarning`.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path

from chat_transcript.colors import is_valid_color
from chat_transcript.exceptions import InvalidInputError
from chat_transcript.log import get_logger
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

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# ```lang\n ... ``` -- non-greedy so sibling fences are never merged.
_FENCE_RE = re.compile(r"```([A-Za-z0-9_-]*)\n(.*?)```", re.DOTALL)

# Private-use code points: the token has no colon and no sigil, so it can
# never look like a message header or directive during chunking.
_PH_OPEN = "\ue000"
_PH_LANG = "\ue001"
_PH_CLOSE = "\ue002"
_PLACEHOLDER_RE = re.compile(f"{_PH_OPEN}(\\d+){_PH_LANG}([A-Za-z0-9_-]*){_PH_CLOSE}")

# Optional id, optional quote marker, then "name:".
_NEW_MESSAGE_RE = re.compile(r"^(?:\d+\s*|>\s*\d+\s*|>.*:\s*)?[^:]+:")

# "> ref", an optional "---" separator line (indent allowed), then the message.
_QUOTE_RE = re.compile(r"^>([^\n]+)\n(?:[ \t]*---[ \t]*\n)?(.*)", re.DOTALL)
_HEADER_RE = re.compile(r"^(?:(\d+)(?:\(([^)]+)\))?)?([^:\n]*):\s*(.*)", re.DOTALL)
_PARTICIPANT_RE = re.compile(r"^@([^\s()]+)(?:\((.*)\))?")
_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")
_CJK_RE = re.compile("[\u4e00-\u9fff]")
_LATIN_RE = re.compile(r"[A-Za-z]")

_TITLE_PREFIXES = ("#title=", "#tittle=")
_THEME_PREFIX = "#theme="
_DIRECTIVE_PREFIXES = (*_TITLE_PREFIXES, _THEME_PREFIX)
_DARK_SUFFIX = ",dark"
_QUOTE_SEPARATOR = "---"
_QUOTES = "\"'"


class LineKind(enum.Enum):
    """Classification of a single (stripped) source line."""

    DIRECTIVE = "directive"
    PARTICIPANT = "participant"
    MESSAGE = "message"
    CONTINUATION = "continuation"


@dataclass
class Chunk:
    """A run of lines forming one directive, participant block or message.

    Attributes:
        kind: Kind of the line that opened the chunk.
        lines: Source lines, unstripped, in order.
        line_numbers: 1-based original line number of each entry in *lines*.
    """

    kind: LineKind
    lines: list[str] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    @property
    def line_number(self) -> int:
        return self.line_numbers[0] if self.line_numbers else 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines).strip()

    def append(self, line_number: int, raw_line: str) -> None:
        self.lines.append(raw_line)
        self.line_numbers.append(line_number)


@dataclass
class _ParseState:
    """Mutable state scoped to a single parse call."""

    fences: list[FencedBlock] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
    next_id: int = 1
    config: TranscriptConfig = field(default_factory=TranscriptConfig)
    participants: dict[str, Participant] = field(default_factory=dict)
    messages: list[Message] = field(default_factory=list)

    def warn(self, line_number: int, message: str, raw_line: str) -> None:
        self.warnings.append(ParseWarning(line_number, message, raw_line))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_transcript(
    text: str,
    source: str = "<string>",
    *,
    clock: Callable[[], datetime] = datetime.now,
) -> TranscriptParseResult:
    """Parse a chat transcript string into structured data.

    CRLF and lone CR line endings are read as plain newlines.

    Args:
        text: Raw transcript text.
        source: Label for the transcript origin (e.g. a file path).
            Defaults to ``"<string>"``.
        clock: Called once per message to stamp ``created_at``.

    Returns:
        A :class:`TranscriptParseResult` with the config, participants
        keyed by handle, messages in document order, and any warnings.

    Raises:
        InvalidInputError: If *text* is not a string.
    """
    if not isinstance(text, str):
        raise InvalidInputError(
            f"Transcript must be a string, got {type(text).__name__}",
            received_type=type(text).__name__,
        )

    text = text.replace("\r\n", "\n").replace("\r", "\n")

    if not text.strip():
        logger.info("Empty transcript from %s", source)
        return TranscriptParseResult(source=source)

    state = _ParseState()
    processed, state.fences = extract_fences(text)
    chunks = split_chunks(processed, state.fences, warnings=state.warnings)
    logger.debug(
        "Split %s into %d chunks (%d fenced blocks)",
        source,
        len(chunks),
        len(state.fences),
    )

    for chunk in chunks:
        if chunk.kind is LineKind.DIRECTIVE:
            _apply_directive(chunk, state)
        elif chunk.kind is LineKind.PARTICIPANT:
            _apply_participants(chunk, state)
        else:
            _apply_message(chunk, state, clock)

    for warning in state.warnings:
        logger.warning(
            "%s:%d: %s: %r", source, warning.line_number, warning.message, warning.raw_line
        )

    logger.info(
        "Parsed %s: %d messages, %d participants, %d warnings",
        source,
        len(state.messages),
        len(state.participants),
        len(state.warnings),
    )

    return TranscriptParseResult(
        config=state.config,
        participants=state.participants,
        messages=state.messages,
        warnings=state.warnings,
        source=source,
    )


def parse_transcript_file(file_path: str | Path) -> TranscriptParseResult:
    """Parse a transcript file (read as UTF-8) into structured data.

    Args:
        file_path: Path to the transcript file.

    Returns:
        A :class:`TranscriptParseResult` with ``source`` set to the path.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript file not found: {path}")

    text = path.read_text(encoding="utf-8")
    return parse_transcript(text, source=str(path))


# ---------------------------------------------------------------------------
# Stage 1 / 4: fenced code blocks
# ---------------------------------------------------------------------------


def extract_fences(text: str) -> tuple[str, list[FencedBlock]]:
    """Replace every fenced code block with a one-line placeholder.

    Returns:
        The rewritten text and the fence table; a placeholder's id is its
        index in the table.
    """
    fences: list[FencedBlock] = []

    def _substitute(match: re.Match[str]) -> str:
        fence_id = len(fences)
        language = match.group(1)
        fences.append(FencedBlock(language, match.group(2), match.group(0).count("\n")))
        return f"{_PH_OPEN}{fence_id}{_PH_LANG}{language}{_PH_CLOSE}"

    return _FENCE_RE.sub(_substitute, text), fences


def restore_fences(text: str, fences: Sequence[FencedBlock]) -> str:
    """Swap placeholders in *text* back to fenced code.

    A placeholder whose id is not in *fences* restores to an empty block.
    """

    def _restore(match: re.Match[str]) -> str:
        fence_id = int(match.group(1))
        code = fences[fence_id].code if fence_id < len(fences) else ""
        closing = "\n" if code and not code.endswith("\n") else ""
        return f"```{match.group(2)}\n{code}{closing}```"

    return _PLACEHOLDER_RE.sub(_restore, text)


# ---------------------------------------------------------------------------
# Stage 2: chunking
# ---------------------------------------------------------------------------


def classify_line(line: str) -> LineKind:
    """Classify a single line by its leading shape.

    ``@`` lines are always participant declarations.  ``#`` lines are
    directives when they carry a known directive prefix or a ``name:``
    shape, and plain continuation text (e.g. a markdown heading)
    otherwise.
    """
    stripped = line.strip()
    if stripped.startswith("@"):
        return LineKind.PARTICIPANT
    is_message_shape = bool(_NEW_MESSAGE_RE.match(stripped))
    if stripped.startswith("#"):
        if stripped.startswith(_DIRECTIVE_PREFIXES) or is_message_shape:
            return LineKind.DIRECTIVE
        return LineKind.CONTINUATION
    if is_message_shape:
        return LineKind.MESSAGE
    return LineKind.CONTINUATION


def split_chunks(
    text: str,
    fences: Sequence[FencedBlock] = (),
    *,
    warnings: list[ParseWarning] | None = None,
) -> list[Chunk]:
    """Group placeholder-substituted source lines into chunks.

    Blank lines are dropped.  Any line classified as something other than
    :attr:`LineKind.CONTINUATION` opens a new chunk; a quote header line
    (``> ref``) opens a message chunk that also takes in the ``---``
    separator and the message line that follow it.  Continuation lines
    before the first chunk are dropped.

    Args:
        text: Source text after :func:`extract_fences`.
        fences: Fence table, used to map lines back to original numbers.
        warnings: If given, receives a warning for each dropped line.

    Returns:
        Chunks in document order.
    """
    lines = _number_lines(text, fences)
    chunks: list[Chunk] = []
    current: Chunk | None = None

    idx = 0
    while idx < len(lines):
        line_number, raw_line = lines[idx]
        stripped = raw_line.strip()

        if stripped.startswith(">"):
            span = _quote_header_span(lines, idx, has_open_chunk=current is not None)
            if span:
                current = Chunk(LineKind.MESSAGE)
                for number, header_line in lines[idx : idx + span]:
                    current.append(number, header_line)
                chunks.append(current)
                idx += span
                continue

        kind = classify_line(stripped)
        if kind is not LineKind.CONTINUATION:
            current = Chunk(kind)
            current.append(line_number, raw_line)
            chunks.append(current)
        elif current is not None:
            current.append(line_number, raw_line)
        elif warnings is not None:
            warnings.append(
                ParseWarning(
                    line_number=line_number,
                    message="Line does not match expected format and no prior chunk",
                    raw_line=raw_line,
                )
            )
        idx += 1

    return chunks


def _number_lines(text: str, fences: Sequence[FencedBlock]) -> list[tuple[int, str]]:
    """Return non-blank lines paired with their original 1-based line number."""
    numbered: list[tuple[int, str]] = []
    offset = 0
    for idx, raw_line in enumerate(text.split("\n")):
        if raw_line.strip():
            numbered.append((idx + 1 + offset, raw_line))
        for match in _PLACEHOLDER_RE.finditer(raw_line):
            fence_id = int(match.group(1))
            if fence_id < len(fences):
                offset += fences[fence_id].line_span
    return numbered


def _quote_header_span(
    lines: list[tuple[int, str]],
    idx: int,
    has_open_chunk: bool,
) -> int:
    """Return how many lines a quote header at *idx* spans, or ``0``.

    With a ``---`` separator the header is unambiguous.  Without one, a
    ``>`` line directly above a message line is only a quote header when
    its reference is numeric or no chunk is open yet; otherwise it is a
    markdown blockquote continuing the previous message.
    """
    nxt = lines[idx + 1][1].strip() if idx + 1 < len(lines) else None
    if nxt is None:
        return 0
    if nxt == _QUOTE_SEPARATOR:
        after = lines[idx + 2][1].strip() if idx + 2 < len(lines) else None
        if after is not None and _is_plain_message(after):
            return 3
        return 0
    if _is_plain_message(nxt):
        ref = lines[idx][1].strip()[1:].strip()
        if ref.isdecimal() or not has_open_chunk:
            return 2
    return 0


def _is_plain_message(line: str) -> bool:
    return classify_line(line) is LineKind.MESSAGE and not line.startswith(">")


# ---------------------------------------------------------------------------
# Stage 3: chunk interpretation
# ---------------------------------------------------------------------------


def _apply_directive(chunk: Chunk, state: _ParseState) -> None:
    """Apply a ``#title=`` / ``#theme=`` chunk to the config.

    Only the first line is read; every further line in the chunk is
    reported as ignored.
    """
    first = chunk.lines[0].strip()

    if first.startswith(_TITLE_PREFIXES):
        title = first.split("=", 1)[1].strip() or DEFAULT_TITLE
        state.config = replace(state.config, title=title)
        logger.debug("Title set to %r", title)
    elif first.startswith(_THEME_PREFIX):
        theme_spec, is_dark = normalize_theme(first.split("=", 1)[1])
        state.config = replace(
            state.config,
            theme_spec=theme_spec,
            is_dark_variant=state.config.is_dark_variant or is_dark,
        )
        logger.debug("Theme set to %r (dark=%s)", theme_spec, is_dark)
    else:
        state.warn(chunk.line_number, "Unrecognized directive ignored", chunk.lines[0])

    for line_number, raw_line in zip(chunk.line_numbers[1:], chunk.lines[1:]):
        state.warn(line_number, "Line after directive ignored", raw_line)


def normalize_theme(value: str) -> tuple[str, bool]:
    """Normalise a raw ``#theme=`` value.

    Surrounding quotes are stripped and a trailing ``,dark`` is removed.
    ``http`` values and ``file://`` URLs are wrapped as ``url("...")``.
    Windows drive paths, paths with backslashes and other ``scheme://``
    values become ``url("file://...")`` with forward slashes.  Anything
    else is returned unchanged as a raw CSS background value.

    Returns:
        The theme spec and whether the dark variant was requested.
    """
    cleaned = value.strip().strip(_QUOTES).strip()
    is_dark = False
    if cleaned.endswith(_DARK_SUFFIX):
        is_dark = True
        cleaned = cleaned[: -len(_DARK_SUFFIX)].strip().strip(_QUOTES).strip()

    if cleaned.startswith("http"):
        return f'url("{cleaned}")', is_dark
    if cleaned.startswith("file://"):
        return f'url("{cleaned.replace(chr(92), "/")}")', is_dark
    if _DRIVE_RE.match(cleaned) or "\\" in cleaned or "://" in cleaned:
        path = cleaned.replace("\\", "/")
        return f'url("file://{path}")', is_dark
    return cleaned, is_dark


def _apply_participants(chunk: Chunk, state: _ParseState) -> None:
    """Register every declaration line of a participant chunk."""
    for line_number, raw_line in zip(chunk.line_numbers, chunk.lines):
        parsed = _parse_declaration(raw_line)
        if parsed is None:
            state.warn(line_number, "Not a participant declaration", raw_line)
            continue

        participant, rejected_color = parsed
        if rejected_color is not None:
            state.warn(line_number, f"Invalid color {rejected_color!r} ignored", raw_line)

        if participant.handle in state.participants:
            logger.debug("Participant %r redeclared", participant.handle)
        state.participants[participant.handle] = participant


def parse_participant(line: str) -> Participant | None:
    """Parse a ``@handle(params)`` declaration line.

    Recognised parameters are ``L``/``R`` and the ``pic:``, ``display:``
    and ``col:`` keys.  A ``col:`` value that is not a valid color is
    dropped.  Unknown parameters are ignored.

    Returns:
        The participant, or ``None`` if *line* is not a declaration.
    """
    parsed = _parse_declaration(line)
    return parsed[0] if parsed else None


def _parse_declaration(line: str) -> tuple[Participant, str | None] | None:
    """Parse a declaration, also returning a rejected ``col:`` value."""
    match = _PARTICIPANT_RE.match(line.strip())
    if not match:
        return None

    handle = match.group(1)
    display_name = handle
    avatar_glyph = default_avatar(handle)
    accent_color = ""
    side = Side.LEFT
    rejected_color: str | None = None

    for param in _split_params(match.group(2) or ""):
        if param in ("L", "R"):
            side = Side(param)
            continue
        key, sep, value = param.partition(":")
        if not sep:
            continue
        key, value = key.strip(), value.strip()
        if key == "pic":
            avatar_glyph = value or default_avatar(handle)
        elif key == "display":
            display_name = value or handle
        elif key == "col":
            if is_valid_color(value):
                accent_color = value
                rejected_color = None
            else:
                rejected_color = value

    participant = Participant(
        handle=handle,
        display_name=display_name,
        avatar_glyph=avatar_glyph,
        accent_color=accent_color,
        side=side,
    )
    return participant, rejected_color


def default_avatar(handle: str) -> str:
    """Derive an avatar glyph from *handle*.

    The first CJK ideograph wins, then the first Latin letter (upper-cased),
    then the first character as-is.
    """
    cjk = _CJK_RE.search(handle)
    if cjk:
        return cjk.group(0)
    latin = _LATIN_RE.search(handle)
    if latin:
        return latin.group(0).upper()
    return handle[:1]


def _split_params(params: str) -> list[str]:
    """Split on commas outside parentheses, so ``rgba(...)`` stays whole."""
    parts: list[str] = []
    depth = 0
    start = 0
    for pos, ch in enumerate(params):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            parts.append(params[start:pos])
            start = pos + 1
    parts.append(params[start:])
    return [part.strip() for part in parts if part.strip()]


def _apply_message(
    chunk: Chunk,
    state: _ParseState,
    clock: Callable[[], datetime],
) -> None:
    """Extract a message from a chunk, or record why it was dropped."""
    content = chunk.text
    quoted_ref: int | str | None = None

    quote = _QUOTE_RE.match(content)
    if quote:
        ref = quote.group(1).strip()
        quoted_ref = int(ref) if ref.isdecimal() else ref
        content = quote.group(2).lstrip()

    header = _HEADER_RE.match(content)
    if not header:
        state.warn(chunk.line_number, "No 'name:' header; chunk dropped", chunk.lines[0])
        return

    id_text, custom_color, handle, body = header.groups()
    handle = handle.strip()
    if not handle and id_text is None:
        state.warn(chunk.line_number, "Empty speaker handle; chunk dropped", chunk.lines[0])
        return

    if id_text is not None:
        sequence_id = int(id_text)
        state.next_id = max(state.next_id, sequence_id + 1)
    else:
        sequence_id = state.next_id
        state.next_id += 1

    state.messages.append(
        Message(
            sequence_id=sequence_id,
            speaker_handle=handle,
            body=restore_fences(body.strip(), state.fences),
            custom_color=custom_color.strip() if custom_color else None,
            quoted_ref=quoted_ref,
            created_at=clock(),
        )
    )
