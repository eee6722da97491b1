"""Pydantic model representing a stored video summary."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from youtube_tools.models.base import ToolsBaseModel


class VideoSummary(ToolsBaseModel):
    """Domain model representing a row in the ``video_summaries`` table.

    ``created_at`` is written once on the first insert; ``updated_at`` moves on every
    subsequent upsert of the same ``video_id``.
    """

    video_id: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


__all__ = ["VideoSummary"]
