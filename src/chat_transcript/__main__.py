"""Entry point for ``python -m chat_transcript``.

Parses a transcript file and prints it either as a plain-text preview or
as JSON.  Uses stdlib :mod:`argparse` for argument parsing.

Exit codes:
    0 -- Transcript parsed (warnings do not change the exit code).
    1 -- An error occurred (file not found, unreadable, config error).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from chat_transcript.config import ConfigError, load_settings
from chat_transcript.log import setup_logging
from chat_transcript.models.export import TranscriptDocument
from chat_transcript.parser import parse_transcript_file
from chat_transcript.preview import print_transcript


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="chat-transcript",
        description="Parse a chat transcript and print its structure.",
    )
    parser.add_argument(
        "transcript_file",
        type=str,
        help="Path to the transcript file.",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the chat-transcript CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    args = build_parser().parse_args(argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    # --- Validate transcript file -------------------------------------
    transcript_path = Path(args.transcript_file)

    if not transcript_path.exists():
        print(f"Error: File not found: {transcript_path}", file=sys.stderr)
        return 1

    if not transcript_path.is_file():
        print(f"Error: Not a file: {transcript_path}", file=sys.stderr)
        return 1

    try:
        result = parse_transcript_file(transcript_path)
    except PermissionError:
        print(f"Error: Permission denied: {transcript_path}", file=sys.stderr)
        return 1
    except UnicodeDecodeError:
        print(f"Error: Not UTF-8 text: {transcript_path}", file=sys.stderr)
        return 1

    # --- Render -------------------------------------------------------
    if args.format == "json":
        sys.stdout.write(TranscriptDocument.from_result(result).model_dump_json(indent=2) + "\n")
    else:
        print_transcript(result, settings)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
