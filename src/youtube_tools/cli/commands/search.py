"""CLI command for searching YouTube."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from youtube_tools.cli.commands.common import diagnostics_console, fail
from youtube_tools.errors import YouTubeToolsError
from youtube_tools.services.search import DEFAULT_MAX_RESULTS, SearchFilters, SearchResult, SearchService


def get_search_service() -> SearchService:
    return SearchService(console=diagnostics_console())


def _render_results(console: Console, query: str, results: list[SearchResult]) -> None:
    if not results:
        console.print(f"[yellow]No videos found for query:[/yellow] {query}")
        return

    table = Table(title=f"YouTube results for {query!r}")
    table.add_column("#", justify="right")
    table.add_column("Video ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Channel")
    table.add_column("Published")
    for position, result in enumerate(results, start=1):
        table.add_row(str(position), result.video_id, result.title, result.channel_title, result.published_at or "")
    console.print(table)


def register(app: typer.Typer, console: Console) -> None:
    """Register the ``search`` command."""

    @app.command("search")
    def search(  # pylint: disable=too-many-arguments
        query: str = typer.Argument(..., help="Search terms"),
        max_results: int = typer.Option(DEFAULT_MAX_RESULTS, "--max-results", "-n", help="Results to return (1-50)"),
        order: Optional[str] = typer.Option(None, "--order", help="date, rating, relevance, title or viewCount"),
        published_after: Optional[str] = typer.Option(None, "--published-after", help="RFC 3339 timestamp"),
        published_before: Optional[str] = typer.Option(None, "--published-before", help="RFC 3339 timestamp"),
        video_duration: Optional[str] = typer.Option(None, "--duration", help="any, short, medium or long"),
        region_code: Optional[str] = typer.Option(None, "--region", help="ISO 3166-1 alpha-2 country code"),
        relevance_language: Optional[str] = typer.Option(None, "--language", help="ISO 639-1 language code"),
        channel_id: Optional[str] = typer.Option(None, "--channel-id", help="Restrict results to one channel"),
        safe_search: Optional[str] = typer.Option(None, "--safe-search", help="moderate, none or strict"),
        json_output: bool = typer.Option(False, "--json", help="Output search results as JSON"),
    ) -> None:
        """Search YouTube for videos."""

        filters = SearchFilters(
            order=order,
            published_after=published_after,
            published_before=published_before,
            video_duration=video_duration,
            region_code=region_code,
            relevance_language=relevance_language,
            channel_id=channel_id,
            safe_search=safe_search,
        )
        service = get_search_service()
        try:
            results = service.search(query, max_results=max_results, filters=filters)
        except YouTubeToolsError as exc:
            fail(console, exc)
        finally:
            service.close()

        if json_output:
            payload = [{**asdict(result), "url": result.url} for result in results]
            typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
            return

        _render_results(console, query, results)


__all__ = ["get_search_service", "register"]
