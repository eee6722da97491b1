"""CLI commands for managing stored video summaries."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from youtube_tools.cli.commands.common import ExitCode, diagnostics_console, fail
from youtube_tools.errors import YouTubeToolsError
from youtube_tools.models.summary import VideoSummary
from youtube_tools.services.storage import SummaryStore
from youtube_tools.utils.validation import normalize_video_id

PREVIEW_CHARS = 80


def get_summary_store() -> SummaryStore:
    return SummaryStore(console=diagnostics_console())


def _preview(text: str) -> str:
    flattened = " ".join(text.split())
    if len(flattened) <= PREVIEW_CHARS:
        return flattened
    return flattened[: PREVIEW_CHARS - 3].rstrip() + "..."


def _summary_payload(record: VideoSummary) -> dict[str, object]:
    return record.model_dump(mode="json")


def register(app: typer.Typer, console: Console) -> None:
    """Register the ``summaries`` command group."""

    summaries_app = typer.Typer(help="Manage stored video summaries.", no_args_is_help=True)
    app.add_typer(summaries_app, name="summaries")

    @summaries_app.command("store")
    def store(
        video: str = typer.Argument(..., help="YouTube video ID or URL"),
        summary: str = typer.Argument(..., help="Summary text"),
    ) -> None:
        """Store or replace the summary for a video."""

        video_id = normalize_video_id(video)
        try:
            with get_summary_store() as summary_store:
                record = summary_store.store_summary(video_id, summary)
        except YouTubeToolsError as exc:
            fail(console, exc)
        console.print(f"[green]Summary stored for video ID:[/green] {record.video_id}")

    @summaries_app.command("show")
    def show(
        video: str = typer.Argument(..., help="YouTube video ID or URL"),
        json_output: bool = typer.Option(False, "--json", help="Output the summary as JSON"),
    ) -> None:
        """Show the stored summary for a video."""

        video_id = normalize_video_id(video)
        try:
            with get_summary_store() as summary_store:
                record = summary_store.fetch_summary(video_id)
        except YouTubeToolsError as exc:
            fail(console, exc)

        if record is None:
            console.print(f"[yellow]No summary found for video ID:[/yellow] {video_id}")
            return

        if json_output:
            typer.echo(json.dumps(_summary_payload(record), ensure_ascii=False, indent=2))
            return

        console.print(Panel.fit(record.summary, title=f"Summary for {record.video_id}", border_style="magenta"))
        if record.created_at:
            console.print(f"[bold]Created:[/bold] {record.created_at.isoformat()}")
        if record.updated_at:
            console.print(f"[bold]Updated:[/bold] {record.updated_at.isoformat()}")

    @summaries_app.command("list")
    def list_summaries(
        json_output: bool = typer.Option(False, "--json", help="Output summaries as JSON"),
    ) -> None:
        """List every stored summary, most recently updated first."""

        try:
            with get_summary_store() as summary_store:
                records = summary_store.list_summaries()
        except YouTubeToolsError as exc:
            fail(console, exc)

        if json_output:
            typer.echo(json.dumps([_summary_payload(record) for record in records], ensure_ascii=False, indent=2))
            return

        if not records:
            console.print("[yellow]No summaries stored yet.[/yellow]")
            return

        table = Table(title="Stored Video Summaries")
        table.add_column("Video ID", style="cyan", no_wrap=True)
        table.add_column("Updated", style="green")
        table.add_column("Summary")
        for record in records:
            updated = record.updated_at.isoformat(timespec="seconds") if record.updated_at else ""
            table.add_row(record.video_id, updated, _preview(record.summary))
        console.print(table)

    @summaries_app.command("delete")
    def delete(
        video: str = typer.Argument(..., help="YouTube video ID or URL"),
    ) -> None:
        """Delete the stored summary for a video."""

        video_id = normalize_video_id(video)
        try:
            with get_summary_store() as summary_store:
                deleted = summary_store.delete_summary(video_id)
        except YouTubeToolsError as exc:
            fail(console, exc)

        if not deleted:
            console.print(f"[yellow]No summary found for video ID:[/yellow] {video_id}")
            raise typer.Exit(code=ExitCode.INVALID_INPUT)
        console.print(f"[green]Deleted summary for video ID:[/green] {video_id}")


__all__ = ["get_summary_store", "register"]
