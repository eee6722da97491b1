"""Transcript retrieval from the RapidAPI transcript provider and its reshaping."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

import requests
from pydantic import ValidationError
from rich.console import Console

from youtube_tools.config.settings import Settings
from youtube_tools.errors import (
    MissingCredentialError,
    TranscriptUnavailableError,
    UpstreamRejectedError,
    VideoUnavailableError,
)
from youtube_tools.models.transcript import TranscriptResult, TranscriptSegment
from youtube_tools.services.upstream import UpstreamClient, status_reason
from youtube_tools.utils.timestamps import format_timestamp

TRANSCRIPT_PATH = "/youtube/transcript"
RAPIDAPI_KEY_HELP = (
    "RapidAPI key not found. Please set RAPIDAPI_KEY in your .env file. "
    "Get your key from: https://rapidapi.com/8v2FWW4H6AmKw89/api/youtube-transcripts"
)


def extract_raw_segments(payload: object) -> List[object]:
    """Pull the caption records out of a provider response body.

    Anything other than a mapping with a ``content`` list is treated as an empty transcript.
    """

    if not isinstance(payload, Mapping):
        return []
    content = payload.get("content")
    if not isinstance(content, list):
        return []
    return content


def render_lines(segments: Iterable[TranscriptSegment], *, timestamps: bool = True) -> str:
    """Join segments into one line each, optionally prefixed with ``[M:SS]``."""

    if timestamps:
        return "\n".join(f"[{format_timestamp(segment.offset_ms)}] {segment.text}" for segment in segments)
    return "\n".join(segment.text for segment in segments)


def assemble_transcript(
    video_id: str,
    raw_segments: Sequence[object],
    *,
    language: str = "en",
    console: Optional[Console] = None,
) -> TranscriptResult:
    """Convert provider caption records into a :class:`TranscriptResult`.

    Records keep their input order. Each record is expected to look like
    ``{"text": ..., "offset": <ms>, "duration": <ms>}``; records that do not validate
    are skipped. An empty result is a normal outcome meaning no transcript is available.
    """

    segments: List[TranscriptSegment] = []
    for index, record in enumerate(raw_segments):
        if not isinstance(record, Mapping):
            if console is not None:
                console.log(f"[yellow]Skipping malformed caption record #{index}[/yellow] (video_id={video_id})")
            continue
        try:
            segments.append(
                TranscriptSegment(
                    text=record.get("text"),
                    offset_ms=record.get("offset"),
                    duration_ms=record.get("duration"),
                )
            )
        except ValidationError as exc:
            if console is not None:
                console.log(
                    f"[yellow]Skipping malformed caption record #{index}:[/yellow] "
                    f"{exc.error_count()} error(s) (video_id={video_id})"
                )

    last_offset = segments[-1].offset_ms if segments else 0
    return TranscriptResult(
        video_id=video_id,
        language=language,
        segments=segments,
        total_segments=len(segments),
        formatted_duration=format_timestamp(last_offset),
        rendered_text=render_lines(segments),
    )


class TranscriptService(UpstreamClient):
    """Service responsible for fetching transcripts and reshaping them."""

    operation = "Transcript fetch"

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(settings=settings, console=console, session=session)

    def get_transcript(self, video_id: str, *, language: Optional[str] = None) -> TranscriptResult:
        """Fetch and assemble the transcript for a canonical video identifier.

        Parameters
        ----------
        video_id:
            Canonical identifier produced by :func:`~youtube_tools.utils.validation.normalize_video_id`.
        language:
            Caption language code; defaults to ``DEFAULT_LANGUAGE``.

        Returns
        -------
        TranscriptResult
            Possibly empty when the provider has no captions for the video.

        Raises
        ------
        MissingCredentialError
            If ``RAPIDAPI_KEY`` is not configured.
        VideoUnavailableError
            If the provider reports the video as invalid, missing or forbidden.
        TranscriptUnavailableError
            If the provider reports that no transcript exists.
        UpstreamRejectedError
            For any other error status.
        UpstreamUnavailableError
            If the provider cannot be reached.
        """

        language = language or self._settings.default_language
        payload = self.fetch_raw_transcript(video_id, language=language)
        return assemble_transcript(
            video_id,
            extract_raw_segments(payload),
            language=language,
            console=self._console,
        )

    def fetch_raw_transcript(self, video_id: str, *, language: str) -> object:
        """Return the decoded provider body, or ``None`` when it is not valid JSON."""

        api_key = self._settings.rapidapi_key
        if api_key is None or not api_key.get_secret_value():
            raise MissingCredentialError(RAPIDAPI_KEY_HELP)

        host = self._settings.rapidapi_transcript_host
        self._console.log(f"Fetching transcript (video_id={video_id}, language={language})")
        response = self._get(
            f"https://{host}{TRANSCRIPT_PATH}",
            params={
                "url": f"https://www.youtube.com/watch?v={video_id}",
                "videoId": video_id,
                "chunkSize": self._settings.transcript_chunk_size,
                "text": "false",
                "lang": language,
            },
            headers={
                "x-rapidapi-key": api_key.get_secret_value(),
                "x-rapidapi-host": host,
            },
            subject=f"video ID {video_id}",
        )
        try:
            return response.json()
        except ValueError:
            self._console.log(f"[yellow]Transcript payload was not JSON[/yellow] (video_id={video_id})")
            return None

    def _rejection(self, response: requests.Response, subject: str) -> UpstreamRejectedError:
        status = response.status_code
        body = (response.text or "").lower()

        if "transcript not available" in body or "transcript is not available" in body:
            return TranscriptUnavailableError(
                f"No transcript available for {subject}",
                reason="transcript_unavailable",
                status_code=status,
            )
        if "invalid video id" in body or status in (403, 404):
            return VideoUnavailableError(
                f"Video not found or unavailable: {subject}",
                reason="video_unavailable",
                status_code=status,
            )
        return UpstreamRejectedError(
            f"Failed to fetch transcript for {subject}: HTTP {status}",
            reason=status_reason(status),
            status_code=status,
        )


__all__ = [
    "TranscriptService",
    "assemble_transcript",
    "extract_raw_segments",
    "render_lines",
]
