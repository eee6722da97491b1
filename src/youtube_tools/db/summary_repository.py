"""Repository for interacting with the `video_summaries` table."""

from __future__ import annotations

from typing import Optional

from youtube_tools.db import ConnectionFactory
from youtube_tools.db.repositories import BaseRepository, RecordNotFoundError
from youtube_tools.models.summary import VideoSummary

# A single statement so concurrent writers for one video_id serialise on the row lock
# and the last committed summary wins. created_at is only written by the INSERT branch.
UPSERT_SQL = """
    INSERT INTO video_summaries (video_id, summary)
    VALUES (%(video_id)s, %(summary)s)
    ON CONFLICT (video_id) DO UPDATE
        SET summary = EXCLUDED.summary,
            updated_at = clock_timestamp()
    RETURNING video_id, summary, created_at, updated_at
"""


class SummaryRepository(BaseRepository[VideoSummary]):
    """Data access object encapsulating summary persistence logic."""

    table_name = "video_summaries"
    model_type = VideoSummary

    def __init__(self, connection_factory: ConnectionFactory) -> None:
        super().__init__(connection_factory)

    def upsert(self, video_id: str, summary: str) -> VideoSummary:
        """Insert a summary or replace the existing one for ``video_id``."""

        row = self._fetch_one(UPSERT_SQL, {"video_id": video_id, "summary": summary})
        return self.model_type.model_validate(row)

    def find_by_video_id(self, video_id: str) -> Optional[VideoSummary]:
        """Return the stored summary for a canonical YouTube ID, if present."""

        try:
            return self.fetch_one("video_id = %(video_id)s", {"video_id": video_id})
        except RecordNotFoundError:
            return None

    def delete_by_video_id(self, video_id: str) -> bool:
        """Delete the summary for ``video_id``; return whether a row was removed."""

        affected = self._execute(
            f"DELETE FROM {self.table_name} WHERE video_id = %(video_id)s",
            {"video_id": video_id},
        )
        return affected > 0

    def list_recent(self) -> list[VideoSummary]:
        """Return every stored summary, most recently updated first."""

        return self.fetch_all(order_by="updated_at DESC")


__all__ = ["SummaryRepository", "UPSERT_SQL"]
