"""YouTube search backed by the YouTube Data API v3 ``search.list`` endpoint."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, List, Mapping, Optional

import requests
from rich.console import Console

from youtube_tools.config.settings import Settings
from youtube_tools.errors import InvalidInputError, MissingCredentialError, UpstreamRejectedError
from youtube_tools.services.upstream import UpstreamClient, status_reason

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
MAX_RESULTS_LIMIT = 50
DEFAULT_MAX_RESULTS = 10


@dataclass(slots=True)
class SearchFilters:
    """Options forwarded verbatim to the search provider.

    Field names map to the provider's camelCase query parameters; ``None`` values are
    omitted from the request.
    """

    order: Optional[str] = None
    published_after: Optional[str] = None
    published_before: Optional[str] = None
    video_duration: Optional[str] = None
    region_code: Optional[str] = None
    relevance_language: Optional[str] = None
    channel_id: Optional[str] = None
    safe_search: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value:
                params[_camel_case(item.name)] = value
        return params


@dataclass(slots=True)
class SearchResult:
    """One video hit returned by the search provider."""

    video_id: str
    title: str
    channel_title: str
    published_at: Optional[str]
    description: str

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def parse_search_items(payload: object) -> List[SearchResult]:
    """Reshape a ``search.list`` response body, skipping non-video items."""

    if not isinstance(payload, Mapping):
        return []
    items = payload.get("items")
    if not isinstance(items, list):
        return []

    results: List[SearchResult] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        identifier = item.get("id")
        video_id = identifier.get("videoId") if isinstance(identifier, Mapping) else None
        if not video_id:
            continue
        snippet = item.get("snippet") if isinstance(item.get("snippet"), Mapping) else {}
        results.append(
            SearchResult(
                video_id=video_id,
                title=snippet.get("title", ""),
                channel_title=snippet.get("channelTitle", ""),
                published_at=snippet.get("publishedAt"),
                description=snippet.get("description", ""),
            )
        )
    return results


class SearchService(UpstreamClient):
    """Search YouTube videos with optional provider-side filters."""

    operation = "YouTube search"

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(settings=settings, console=console, session=session)

    def search(
        self,
        query: str,
        *,
        max_results: int = DEFAULT_MAX_RESULTS,
        filters: Optional[SearchFilters] = None,
    ) -> List[SearchResult]:
        """Return up to ``max_results`` videos matching ``query``.

        Raises
        ------
        InvalidInputError
            If ``max_results`` is outside 1-50.
        MissingCredentialError
            If ``YOUTUBE_API_KEY`` is not configured.
        UpstreamRejectedError
            With the provider's error reason (e.g. ``quotaExceeded``) when available.
        """

        if not 1 <= max_results <= MAX_RESULTS_LIMIT:
            raise InvalidInputError(f"max_results must be between 1 and {MAX_RESULTS_LIMIT}")

        api_key = self._settings.youtube_api_key
        if api_key is None or not api_key.get_secret_value():
            raise MissingCredentialError("YouTube API key not found. Please set YOUTUBE_API_KEY in your .env file.")

        params: Dict[str, object] = {
            "part": "snippet",
            "type": "video",
            "q": query,
            "maxResults": max_results,
            "key": api_key.get_secret_value(),
        }
        params.update((filters or SearchFilters()).to_params())

        self._console.log(f"Searching YouTube (query={query!r}, max_results={max_results})")
        response = self._get(SEARCH_URL, params=params, subject=f"query {query!r}")
        try:
            payload = response.json()
        except ValueError:
            self._console.log("[yellow]Search payload was not JSON[/yellow]")
            return []
        return parse_search_items(payload)

    def _rejection(self, response: requests.Response, subject: str) -> UpstreamRejectedError:
        reason = status_reason(response.status_code)
        detail = ""
        try:
            payload = response.json()
        except ValueError:
            payload = None
        error = payload.get("error") if isinstance(payload, Mapping) else None
        if isinstance(error, Mapping):
            if isinstance(error.get("message"), str):
                detail = error["message"]
            errors = error.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], Mapping):
                provider_reason = errors[0].get("reason")
                if isinstance(provider_reason, str) and provider_reason:
                    reason = provider_reason
        message = f"YouTube search rejected for {subject} with HTTP {response.status_code}"
        if detail:
            message = f"{message}: {detail}"
        return UpstreamRejectedError(message, reason=reason, status_code=response.status_code)


__all__ = [
    "DEFAULT_MAX_RESULTS",
    "MAX_RESULTS_LIMIT",
    "SearchFilters",
    "SearchResult",
    "SearchService",
    "parse_search_items",
]
