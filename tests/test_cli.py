"""Tests for the Typer command-line interface."""

from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console
from typer.testing import CliRunner

from youtube_tools import __version__
from youtube_tools.cli.commands import search as search_commands
from youtube_tools.cli.commands import summaries as summary_commands
from youtube_tools.cli.commands import transcript as transcript_commands
from youtube_tools.cli.commands.common import ExitCode, exit_code_for
from youtube_tools.cli.main import create_app
from youtube_tools.errors import (
    InvalidInputError,
    MissingCredentialError,
    PersistenceError,
    UpstreamRejectedError,
    UpstreamUnavailableError,
    VideoUnavailableError,
)
from youtube_tools.models.summary import VideoSummary
from youtube_tools.services.search import SearchResult
from youtube_tools.services.transcript import assemble_transcript

VIDEO_ID = "dQw4w9WgXcQ"
runner = CliRunner()


@pytest.fixture
def cli_console() -> Console:
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def transcript_service(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    service = MagicMock()
    service.get_transcript.return_value = assemble_transcript(
        VIDEO_ID, [{"text": "a", "offset": 0, "duration": 500}, {"text": "b", "offset": 7000}], language="en"
    )
    monkeypatch.setattr(transcript_commands, "get_transcript_service", lambda: service)
    return service


@pytest.fixture
def summary_store(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    store = MagicMock()
    store.__enter__.return_value = store
    monkeypatch.setattr(summary_commands, "get_summary_store", lambda: store)
    return store


def _record(text: str = "stored text") -> VideoSummary:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return VideoSummary(video_id=VIDEO_ID, summary=text, created_at=now, updated_at=now)


def test_transcript_text_output(transcript_service: MagicMock, cli_console: Console) -> None:
    result = runner.invoke(create_app(cli_console), ["transcript", f"https://youtu.be/{VIDEO_ID}"])

    assert result.exit_code == 0, result.output
    transcript_service.get_transcript.assert_called_once_with(VIDEO_ID, language=None)
    assert f"YouTube Transcript for Video ID: {VIDEO_ID}" in result.output
    assert "Language: en" in result.output
    assert "--- TRANSCRIPT ---\n[0:00] a\n[0:07] b" in result.output
    transcript_service.close.assert_called_once()


def test_transcript_without_timestamps(transcript_service: MagicMock, cli_console: Console) -> None:
    result = runner.invoke(create_app(cli_console), ["transcript", VIDEO_ID, "--no-timestamps", "-l", "en"])

    assert result.exit_code == 0, result.output
    transcript_service.get_transcript.assert_called_once_with(VIDEO_ID, language="en")
    assert "--- TRANSCRIPT ---\na\nb" in result.output


def test_transcript_json_output(transcript_service: MagicMock, cli_console: Console) -> None:
    result = runner.invoke(create_app(cli_console), ["transcript", VIDEO_ID, "--json"])

    payload = json.loads(result.output)
    assert payload["videoId"] == VIDEO_ID
    assert payload["totalSegments"] == 2
    assert payload["duration"] == "0:07"
    assert payload["transcript"][0] == {"text": "a", "offset": 0, "duration": 500}


def test_transcript_written_to_file(transcript_service: MagicMock, cli_console: Console, tmp_path: Path) -> None:
    target = tmp_path / "transcript.txt"

    result = runner.invoke(create_app(cli_console), ["transcript", VIDEO_ID, "-o", str(target)])

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8").endswith("[0:07] b")
    assert "Transcript saved to" in cli_console.file.getvalue()


def test_transcript_missing_captions_exit_code(transcript_service: MagicMock, cli_console: Console) -> None:
    transcript_service.get_transcript.return_value = assemble_transcript(VIDEO_ID, [])

    result = runner.invoke(create_app(cli_console), ["transcript", VIDEO_ID])

    assert result.exit_code == ExitCode.VIDEO_UNAVAILABLE
    assert "No transcript available" in cli_console.file.getvalue()


def test_transcript_missing_credential(transcript_service: MagicMock, cli_console: Console) -> None:
    transcript_service.get_transcript.side_effect = MissingCredentialError("RapidAPI key not found")

    result = runner.invoke(create_app(cli_console), ["transcript", VIDEO_ID])

    assert result.exit_code == ExitCode.CONFIGURATION_ERROR
    assert "RapidAPI key not found" in cli_console.file.getvalue()


def test_search_json_output(monkeypatch: pytest.MonkeyPatch, cli_console: Console) -> None:
    service = MagicMock()
    service.search.return_value = [
        SearchResult(video_id=VIDEO_ID, title="Song", channel_title="Rick", published_at=None, description="")
    ]
    monkeypatch.setattr(search_commands, "get_search_service", lambda: service)

    result = runner.invoke(create_app(cli_console), ["search", "rick", "--json", "-n", "1", "--order", "date"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload[0]["video_id"] == VIDEO_ID
    assert payload[0]["url"].endswith(VIDEO_ID)
    assert service.search.call_args.kwargs["filters"].order == "date"
    assert service.search.call_args.kwargs["max_results"] == 1


def test_search_table_output(monkeypatch: pytest.MonkeyPatch, cli_console: Console) -> None:
    service = MagicMock()
    service.search.return_value = []
    monkeypatch.setattr(search_commands, "get_search_service", lambda: service)

    result = runner.invoke(create_app(cli_console), ["search", "nothing"])

    assert result.exit_code == 0
    assert "No videos found" in cli_console.file.getvalue()


def test_summaries_store(summary_store: MagicMock, cli_console: Console) -> None:
    summary_store.store_summary.return_value = _record("fresh")

    result = runner.invoke(create_app(cli_console), ["summaries", "store", f"https://youtu.be/{VIDEO_ID}", "fresh"])

    assert result.exit_code == 0
    summary_store.store_summary.assert_called_once_with(VIDEO_ID, "fresh")
    summary_store.__exit__.assert_called_once()


def test_summaries_store_rejects_empty_summary(summary_store: MagicMock, cli_console: Console) -> None:
    summary_store.store_summary.side_effect = InvalidInputError("summary parameter is required")

    result = runner.invoke(create_app(cli_console), ["summaries", "store", VIDEO_ID, ""])

    assert result.exit_code == ExitCode.INVALID_INPUT


def test_summaries_show_json(summary_store: MagicMock, cli_console: Console) -> None:
    summary_store.fetch_summary.return_value = _record()

    result = runner.invoke(create_app(cli_console), ["summaries", "show", VIDEO_ID, "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output)["summary"] == "stored text"


def test_summaries_show_missing(summary_store: MagicMock, cli_console: Console) -> None:
    summary_store.fetch_summary.return_value = None

    result = runner.invoke(create_app(cli_console), ["summaries", "show", VIDEO_ID])

    assert result.exit_code == ExitCode.SUCCESS
    assert "No summary found" in cli_console.file.getvalue()


def test_summaries_list(summary_store: MagicMock, cli_console: Console) -> None:
    summary_store.list_summaries.return_value = [_record("x" * 200)]

    result = runner.invoke(create_app(cli_console), ["summaries", "list"])

    assert result.exit_code == 0
    output = cli_console.file.getvalue()
    assert VIDEO_ID in output
    assert "..." in output


@pytest.mark.parametrize("deleted,code", [(True, ExitCode.SUCCESS), (False, ExitCode.INVALID_INPUT)])
def test_summaries_delete(summary_store: MagicMock, cli_console: Console, deleted: bool, code: int) -> None:
    summary_store.delete_summary.return_value = deleted

    result = runner.invoke(create_app(cli_console), ["summaries", "delete", VIDEO_ID])

    assert result.exit_code == code


def test_summaries_database_failure(summary_store: MagicMock, cli_console: Console) -> None:
    summary_store.__enter__.side_effect = PersistenceError("connection refused")

    result = runner.invoke(create_app(cli_console), ["summaries", "list"])

    assert result.exit_code == ExitCode.STORAGE_ERROR


@pytest.mark.parametrize(
    "error,code",
    [
        (InvalidInputError("x"), ExitCode.INVALID_INPUT),
        (MissingCredentialError("x"), ExitCode.CONFIGURATION_ERROR),
        (VideoUnavailableError("x", reason="video_unavailable"), ExitCode.VIDEO_UNAVAILABLE),
        (UpstreamRejectedError("x", reason="rate_limited"), ExitCode.PROCESSING_ERROR),
        (UpstreamUnavailableError("x"), ExitCode.NETWORK_ERROR),
        (PersistenceError("x"), ExitCode.STORAGE_ERROR),
    ],
)
def test_exit_code_mapping(error: Exception, code: int) -> None:
    assert exit_code_for(error) == code


def test_version_flag(cli_console: Console) -> None:
    result = runner.invoke(create_app(cli_console), ["--version"])

    assert result.exit_code == 0
    assert f"youtube-tools {__version__}" in cli_console.file.getvalue()
