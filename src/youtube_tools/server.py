"""
FastMCP server exposing the YouTube tools over stdio.

The server owns one :class:`AppContext` for its whole life: settings are read once,
the summary store is opened before the first request and closed on shutdown. Tool
handlers run the blocking HTTP and database work in worker threads so several
invocations can be in flight at once.

Run it with ``youtube-tools-mcp`` (or ``youtube-tools serve``). When registering it
with an MCP client, configure something akin to::

    "command": "youtube-tools-mcp"
"""

import asyncio
from contextlib import ExitStack, asynccontextmanager, contextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Iterator, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from rich.console import Console

from youtube_tools.config.settings import Settings, get_settings
from youtube_tools.errors import UpstreamRejectedError, YouTubeToolsError
from youtube_tools.services import SupportsClose
from youtube_tools.services.rendering import (
    render_search_results,
    render_summary,
    render_summary_missing,
    render_summary_stored,
    render_transcript_report,
)
from youtube_tools.services.search import DEFAULT_MAX_RESULTS, SearchFilters, SearchService
from youtube_tools.services.storage import SummaryStore
from youtube_tools.services.transcript import TranscriptService
from youtube_tools.utils.validation import normalize_video_id, require_text

SERVER_NAME = "youtube-tools-mcp"


@dataclass(slots=True)
class AppContext:
    """Long-lived collaborators shared by every tool invocation."""

    settings: Settings
    console: Console
    transcripts: TranscriptService
    search: SearchService
    summaries: SummaryStore

    def close(self) -> None:
        """Close every resource, even when an earlier close raises."""

        resources: tuple[SupportsClose, ...] = (self.summaries, self.transcripts, self.search)
        with ExitStack() as stack:
            for resource in reversed(resources):
                stack.callback(resource.close)


def build_app_context(settings: Optional[Settings] = None, console: Optional[Console] = None) -> AppContext:
    """Wire the services from one settings object. The store is not opened here."""

    settings = settings or get_settings()
    console = console or Console(stderr=True)
    return AppContext(
        settings=settings,
        console=console,
        transcripts=TranscriptService(settings=settings, console=console),
        search=SearchService(settings=settings, console=console),
        summaries=SummaryStore(settings=settings, console=console),
    )


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Open the summary store before serving and close everything on shutdown."""

    app = build_app_context()
    try:
        await asyncio.to_thread(app.summaries.open)
        app.console.log(f"{SERVER_NAME} running on stdio")
        yield app
    finally:
        await asyncio.to_thread(app.close)


mcp = FastMCP(SERVER_NAME, lifespan=app_lifespan)


def _app(ctx: Context) -> AppContext:
    return ctx.request_context.lifespan_context


@contextmanager
def tool_errors(operation: str, console: Optional[Console] = None) -> Iterator[None]:
    """Re-raise failures as :class:`ToolError` naming the operation and the error category."""

    try:
        yield
    except ToolError:
        raise
    except UpstreamRejectedError as exc:
        raise ToolError(f"{operation} failed [{exc.code}:{exc.reason}]: {exc}") from exc
    except YouTubeToolsError as exc:
        raise ToolError(f"{operation} failed [{exc.code}]: {exc}") from exc
    except Exception as exc:
        if console is not None:
            console.log(f"[red]Unexpected error in {operation}:[/red] {exc!r}")
        raise ToolError(f"{operation} failed [internal_error]: {exc}") from exc


@mcp.tool()
async def get_youtube_transcript(video_id: str, ctx: Context, language: str = "en") -> str:
    """Extract the transcript of a YouTube video.

    Args:
        video_id: YouTube video ID or full YouTube URL.
        language: Language code for the transcript (e.g. "en", "es", "fr").
    """

    app = _app(ctx)
    with tool_errors("get_youtube_transcript", app.console):
        canonical = normalize_video_id(require_text(video_id, "videoId"))
        result = await asyncio.to_thread(app.transcripts.get_transcript, canonical, language=language or None)
    return render_transcript_report(result)


@mcp.tool()
async def search_youtube(  # pylint: disable=too-many-arguments
    query: str,
    ctx: Context,
    max_results: int = DEFAULT_MAX_RESULTS,
    order: Optional[str] = None,
    published_after: Optional[str] = None,
    published_before: Optional[str] = None,
    video_duration: Optional[str] = None,
    region_code: Optional[str] = None,
    relevance_language: Optional[str] = None,
    channel_id: Optional[str] = None,
    safe_search: Optional[str] = None,
) -> str:
    """Search YouTube for videos.

    Args:
        query: Search terms.
        max_results: Number of results to return (1-50).
        order: date, rating, relevance, title, videoCount or viewCount.
        published_after: RFC 3339 timestamp, e.g. 2024-01-01T00:00:00Z.
        published_before: RFC 3339 timestamp.
        video_duration: any, short, medium or long.
        region_code: ISO 3166-1 alpha-2 country code.
        relevance_language: ISO 639-1 language code.
        channel_id: Restrict results to one channel.
        safe_search: moderate, none or strict.
    """

    app = _app(ctx)
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
    with tool_errors("search_youtube", app.console):
        require_text(query, "query")
        results = await asyncio.to_thread(app.search.search, query, max_results=max_results, filters=filters)
    return render_search_results(query, results)


@mcp.tool()
async def store_video_summary(video_id: str, summary: str, ctx: Context) -> str:
    """Store or replace the summary of a YouTube video.

    Args:
        video_id: YouTube video ID or full YouTube URL.
        summary: Summary text to persist for the video.
    """

    app = _app(ctx)
    with tool_errors("store_video_summary", app.console):
        canonical = normalize_video_id(require_text(video_id, "videoId"))
        record = await asyncio.to_thread(app.summaries.store_summary, canonical, summary)
    return render_summary_stored(record)


@mcp.tool()
async def fetch_existing_video_summary(video_id: str, ctx: Context) -> str:
    """Fetch a previously stored summary for a YouTube video.

    Args:
        video_id: YouTube video ID or full YouTube URL.
    """

    app = _app(ctx)
    with tool_errors("fetch_existing_video_summary", app.console):
        canonical = normalize_video_id(require_text(video_id, "videoId"))
        record = await asyncio.to_thread(app.summaries.fetch_summary, canonical)
    if record is None:
        return render_summary_missing(canonical)
    return render_summary(record)


def main() -> None:
    """Console script entry point for ``youtube-tools-mcp``."""

    mcp.run()


__all__ = [
    "AppContext",
    "SERVER_NAME",
    "app_lifespan",
    "build_app_context",
    "fetch_existing_video_summary",
    "get_youtube_transcript",
    "main",
    "mcp",
    "search_youtube",
    "store_video_summary",
    "tool_errors",
]
