"""Validation helpers for YouTube URLs, identifiers and tool arguments."""

from __future__ import annotations

import re
from typing import Callable, Optional, Sequence

from youtube_tools.errors import InvalidInputError

VideoIdMatcher = Callable[[str], Optional[str]]

CANONICAL_ID_LENGTH = 11

# Everything up to the next "&", newline, "?" or "#".
_ID_CAPTURE = r"([^&\n?#]+)"


def _pattern_matcher(pattern: str) -> VideoIdMatcher:
    compiled = re.compile(pattern)

    def match(raw: str) -> Optional[str]:
        found = compiled.search(raw)
        return found.group(1) if found else None

    return match


URL_MARKERS: Sequence[str] = (
    r"youtube\.com/watch\?v=",
    r"youtu\.be/",
    r"youtube\.com/embed/",
    r"youtube\.com/v/",
)

# One alternation, so the marker that appears first in the input wins.
match_url_marker = _pattern_matcher("(?:" + "|".join(URL_MARKERS) + ")" + _ID_CAPTURE)
match_watch_query = _pattern_matcher(r"youtube\.com/watch\?.*v=" + _ID_CAPTURE)

VIDEO_ID_MATCHERS: Sequence[VideoIdMatcher] = (match_url_marker, match_watch_query)


def looks_canonical(raw: str) -> bool:
    """Return ``True`` for 11-character strings without ``/`` or ``=``.

    Only the length and those two characters are checked, so any other 11-character
    string is accepted as well.
    """

    return len(raw) == CANONICAL_ID_LENGTH and "/" not in raw and "=" not in raw


def normalize_video_id(raw: str, matchers: Sequence[VideoIdMatcher] = VIDEO_ID_MATCHERS) -> str:
    """Extract a canonical video identifier from a bare ID or a YouTube URL.

    Never fails: when neither the canonical-length shortcut nor any matcher applies the
    input is returned unchanged.

    Examples::

        >>> normalize_video_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> normalize_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42")
        'dQw4w9WgXcQ'
    """

    if looks_canonical(raw):
        return raw

    for matcher in matchers:
        candidate = matcher(raw)
        if candidate:
            return candidate

    return raw


def require_text(value: Optional[str], field_name: str) -> str:
    """Return ``value`` unchanged, raising :class:`InvalidInputError` when it is blank."""

    if value is None or not value.strip():
        raise InvalidInputError(f"{field_name} parameter is required")
    return value


__all__ = [
    "CANONICAL_ID_LENGTH",
    "URL_MARKERS",
    "VIDEO_ID_MATCHERS",
    "VideoIdMatcher",
    "looks_canonical",
    "match_url_marker",
    "match_watch_query",
    "normalize_video_id",
    "require_text",
]
