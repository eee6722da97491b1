"""Domain models for YouTube Tools."""

from youtube_tools.models.summary import VideoSummary
from youtube_tools.models.transcript import TranscriptResult, TranscriptSegment

__all__ = ["TranscriptResult", "TranscriptSegment", "VideoSummary"]
