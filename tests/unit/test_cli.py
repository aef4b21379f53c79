"""Unit tests for the CLI entrypoint.

Tests cover: text and JSON output, missing arguments, nonexistent file,
directory argument, --verbose flag, config errors, and non-UTF-8 input.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from chat_transcript.__main__ import main

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_transcript(tmp_path: Path, name: str = "chat.txt") -> Path:
    """Create a minimal transcript file and return its path."""
    transcript = tmp_path / name
    transcript.write_text(
        "#title=Lunch\n@alice(R)\nalice: Lunch at noon?\nbob: Sure!\n",
        encoding="utf-8",
    )
    return transcript


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCLI:
    """Unit tests for ``chat_transcript.__main__.main``."""

    def test_cli_text_output(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Valid file -> preview on stdout, exit code 0."""
        transcript = _make_transcript(tmp_path)

        exit_code = main([str(transcript)])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Lunch" in out
        assert "Lunch at noon?" in out
        assert "Messages: 2" in out

    def test_cli_json_output(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """--format json -> parseable JSON document."""
        transcript = _make_transcript(tmp_path)

        exit_code = main(["--format", "json", str(transcript)])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["config"]["title"] == "Lunch"
        assert payload["source"] == str(transcript)
        assert [m["speaker_handle"] for m in payload["messages"]] == ["alice", "bob"]

    def test_cli_missing_file_argument_shows_usage(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """No arguments -> exit code 2, stderr contains 'usage'."""
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
        assert "usage" in capsys.readouterr().err.lower()

    def test_cli_nonexistent_file_shows_error(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Nonexistent file -> exit code 1, stderr contains 'File not found'."""
        exit_code = main([str(tmp_path / "does_not_exist.txt")])

        assert exit_code == 1
        assert "File not found" in capsys.readouterr().err

    def test_cli_directory_shows_error(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """A directory argument -> exit code 1, 'Not a file'."""
        exit_code = main([str(tmp_path)])

        assert exit_code == 1
        assert "Not a file" in capsys.readouterr().err

    def test_cli_non_utf8_file(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Undecodable bytes -> exit code 1 with an error message."""
        transcript = tmp_path / "latin1.txt"
        transcript.write_bytes(b"alice: caf\xe9\xff\xfe")

        exit_code = main([str(transcript)])

        assert exit_code == 1
        assert "Not UTF-8" in capsys.readouterr().err

    def test_cli_verbose_flag_sets_debug_logging(
        self,
        tmp_path: Path,
        clean_env: None,
    ) -> None:
        """-v flag -> setup_logging called with 'DEBUG'."""
        transcript = _make_transcript(tmp_path)

        with patch("chat_transcript.__main__.setup_logging") as mock_setup:
            exit_code = main(["-v", str(transcript)])

        assert exit_code == 0
        mock_setup.assert_called_once_with("DEBUG")

    def test_cli_uses_configured_log_level(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Without -v the CHAT_LOG_LEVEL setting is used."""
        monkeypatch.setenv("CHAT_LOG_LEVEL", "WARNING")
        transcript = _make_transcript(tmp_path)

        with patch("chat_transcript.__main__.setup_logging") as mock_setup:
            main([str(transcript)])

        mock_setup.assert_called_once_with("WARNING")

    def test_cli_config_error(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """An invalid setting -> exit code 1 naming the variable."""
        monkeypatch.setenv("CHAT_LEFT_COLOR", "nope")
        transcript = _make_transcript(tmp_path)

        exit_code = main([str(transcript)])

        assert exit_code == 1
        assert "CHAT_LEFT_COLOR" in capsys.readouterr().err
