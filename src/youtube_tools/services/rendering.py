"""Plain-text payloads returned to the assistant by the MCP tools."""

from __future__ import annotations

from typing import Sequence

from youtube_tools.models.summary import VideoSummary
from youtube_tools.models.transcript import TranscriptResult
from youtube_tools.services.search import SearchResult

TRANSCRIPT_DELIMITER = "--- TRANSCRIPT ---"

NO_TRANSCRIPT_CAUSES = (
    "Video has captions disabled by the creator",
    "Video is private, deleted, or region-restricted",
    "The transcript provider could not read captions for this video",
    "Network or firewall restrictions",
)


def render_transcript_header(result: TranscriptResult, *, include_language: bool = False) -> str:
    lines = [f"YouTube Transcript for Video ID: {result.video_id}"]
    if include_language:
        lines.append(f"Language: {result.language}")
    lines.append(f"Total Segments: {result.total_segments}")
    lines.append(f"Duration: {result.formatted_duration}")
    return "\n".join(lines)


def render_transcript_report(result: TranscriptResult) -> str:
    """Header block, a blank line, the delimiter, then one ``[t] text`` line per segment."""

    if not result.has_transcript:
        return render_no_transcript(result.video_id)
    return f"{render_transcript_header(result)}\n\n{TRANSCRIPT_DELIMITER}\n{result.rendered_text}"


def render_no_transcript(video_id: str) -> str:
    causes = "\n".join(f"- {cause}" for cause in NO_TRANSCRIPT_CAUSES)
    return (
        f"No transcript available for video ID: {video_id}.\n\n"
        f"This could be due to:\n{causes}\n\n"
        "Check the video on YouTube for a CC (closed captions) button, or try again later."
    )


def render_search_results(query: str, results: Sequence[SearchResult]) -> str:
    if not results:
        return f"No videos found for query: {query}"

    blocks = [f"Found {len(results)} video(s) for query: {query}"]
    for position, result in enumerate(results, start=1):
        lines = [
            f"{position}. {result.title}",
            f"   Video ID: {result.video_id}",
            f"   Channel: {result.channel_title}",
        ]
        if result.published_at:
            lines.append(f"   Published: {result.published_at}")
        lines.append(f"   URL: {result.url}")
        if result.description:
            lines.append(f"   Description: {result.description}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_summary_stored(record: VideoSummary) -> str:
    return f"Summary stored successfully for video ID: {record.video_id}"


def render_summary(record: VideoSummary) -> str:
    return f"Summary for video ID {record.video_id}:\n\n{record.summary}"


def render_summary_missing(video_id: str) -> str:
    return f"No summary found for video ID: {video_id}"


__all__ = [
    "NO_TRANSCRIPT_CAUSES",
    "TRANSCRIPT_DELIMITER",
    "render_no_transcript",
    "render_search_results",
    "render_summary",
    "render_summary_missing",
    "render_summary_stored",
    "render_transcript_header",
    "render_transcript_report",
]
