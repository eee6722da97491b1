"""CLI command for printing or saving a video transcript."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from youtube_tools.cli.commands.common import ExitCode, diagnostics_console, fail
from youtube_tools.errors import YouTubeToolsError
from youtube_tools.models.transcript import TranscriptResult
from youtube_tools.services.rendering import TRANSCRIPT_DELIMITER, render_no_transcript, render_transcript_header
from youtube_tools.services.transcript import TranscriptService, render_lines
from youtube_tools.utils.validation import normalize_video_id


def get_transcript_service() -> TranscriptService:
    return TranscriptService(console=diagnostics_console())


def build_text_output(result: TranscriptResult, *, timestamps: bool) -> str:
    header = render_transcript_header(result, include_language=True)
    return f"{header}\n\n{TRANSCRIPT_DELIMITER}\n{render_lines(result.segments, timestamps=timestamps)}"


def build_json_output(result: TranscriptResult) -> str:
    payload = {
        "videoId": result.video_id,
        "language": result.language,
        "totalSegments": result.total_segments,
        "duration": result.formatted_duration,
        "transcript": [
            {"text": segment.text, "offset": segment.offset_ms, "duration": segment.duration_ms}
            for segment in result.segments
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def register(app: typer.Typer, console: Console) -> None:
    """Register the ``transcript`` command."""

    @app.command("transcript")
    def transcript(  # pylint: disable=too-many-arguments
        video: str = typer.Argument(..., help="YouTube video ID or URL"),
        language: Optional[str] = typer.Option(None, "--language", "-l", help="Language code (e.g. en, es, fr)"),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the transcript to this file"),
        timestamps: bool = typer.Option(True, "--timestamps/--no-timestamps", help="Prefix lines with timestamps"),
        json_output: bool = typer.Option(False, "--json", help="Output the transcript as JSON"),
    ) -> None:
        """Extract the transcript of a YouTube video."""

        video_id = normalize_video_id(video)
        service = get_transcript_service()
        try:
            result = service.get_transcript(video_id, language=language)
        except YouTubeToolsError as exc:
            fail(console, exc)
        finally:
            service.close()

        if not result.has_transcript:
            console.print(f"[red]{render_no_transcript(video_id)}[/red]")
            raise typer.Exit(code=ExitCode.VIDEO_UNAVAILABLE)

        rendered = build_json_output(result) if json_output else build_text_output(result, timestamps=timestamps)

        if output is not None:
            output.write_text(rendered, encoding="utf-8")
            console.print(f"[green]Transcript saved to:[/green] {output} ({result.total_segments} segments)")
            return

        typer.echo(rendered)


__all__ = ["build_json_output", "build_text_output", "get_transcript_service", "register"]
