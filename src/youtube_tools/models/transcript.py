"""Pydantic models for assembled transcripts."""

from __future__ import annotations

import math
from typing import List, Optional

from pydantic import Field, field_validator

from youtube_tools.models.base import ToolsBaseModel


class TranscriptSegment(ToolsBaseModel):
    """One caption unit with its offset and duration in milliseconds."""

    text: str
    offset_ms: int = Field(ge=0)
    duration_ms: Optional[int] = Field(default=None, ge=0)

    @field_validator("offset_ms", "duration_ms", mode="before")
    @classmethod
    def _truncate_float_milliseconds(cls, value: object) -> object:
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError("millisecond values must be finite")
            return int(value)
        return value


class TranscriptResult(ToolsBaseModel):
    """Transcript reshaped from a provider payload, built fresh for every request.

    ``formatted_duration`` is derived from the offset of the last segment, not from
    ``offset + duration``.
    """

    video_id: str
    language: str
    segments: List[TranscriptSegment] = Field(default_factory=list)
    total_segments: int = Field(ge=0)
    formatted_duration: str
    rendered_text: str

    @property
    def has_transcript(self) -> bool:
        return bool(self.segments)


__all__ = ["TranscriptResult", "TranscriptSegment"]
