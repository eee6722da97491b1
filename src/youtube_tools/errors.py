"""Exception hierarchy shared by the services, the MCP server and the CLI.

Each failure category carries a stable ``code`` so callers can tell them apart without
parsing messages. Absence (an empty transcript, a missing summary) is never represented
here: those are ordinary return values.
"""

from __future__ import annotations

from typing import ClassVar, Optional


class YouTubeToolsError(RuntimeError):
    """Base exception for all expected failures raised by this package."""

    code: ClassVar[str] = "internal_error"


class InvalidInputError(YouTubeToolsError, ValueError):
    """Raised when a required field is missing or empty."""

    code = "invalid_input"


class MissingCredentialError(YouTubeToolsError):
    """Raised when an upstream credential is not configured."""

    code = "missing_credential"


class UpstreamRejectedError(YouTubeToolsError):
    """Raised when an upstream provider answers with an error status."""

    code = "upstream_rejected"

    def __init__(self, message: str, *, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{super().__str__()} (reason={self.reason})"


class VideoUnavailableError(UpstreamRejectedError):
    """The provider reports the video as missing, private or forbidden."""


class TranscriptUnavailableError(UpstreamRejectedError):
    """The provider reports that no transcript exists for the video."""


class UpstreamUnavailableError(YouTubeToolsError):
    """Raised when the provider cannot be reached at the transport level."""

    code = "upstream_unavailable"


class PersistenceError(YouTubeToolsError):
    """Raised when the summary database rejects a read or a write."""

    code = "persistence_failure"


__all__ = [
    "InvalidInputError",
    "MissingCredentialError",
    "PersistenceError",
    "TranscriptUnavailableError",
    "UpstreamRejectedError",
    "UpstreamUnavailableError",
    "VideoUnavailableError",
    "YouTubeToolsError",
]
