"""Summary store: lifecycle and validation around the summary repository."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import psycopg2
from psycopg2.extensions import connection as PsycopgConnection
from rich.console import Console

from youtube_tools.config.settings import Settings, get_settings
from youtube_tools.db.connection import DatabasePool
from youtube_tools.db.migrate import apply_migrations
from youtube_tools.db.summary_repository import SummaryRepository
from youtube_tools.errors import PersistenceError
from youtube_tools.models.summary import VideoSummary
from youtube_tools.utils.validation import require_text

PoolFactory = Callable[[Settings], DatabasePool]


class SummaryStore:
    """Persist one free-text summary per video identifier.

    The store is opened once at startup, which creates the backing table when it is
    missing, and closed on shutdown. ``close`` is a no-op when ``open`` never succeeded.
    """

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        pool_factory: Optional[PoolFactory] = None,
        auto_migrate: bool = True,
    ) -> None:
        self._settings = settings or get_settings()
        self._console = console or Console(stderr=True)
        self._pool_factory = pool_factory or DatabasePool.from_settings
        self._auto_migrate = auto_migrate
        self._pool: Optional[DatabasePool] = None
        self._repository: Optional[SummaryRepository] = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Lifecycle                                                          #
    # ------------------------------------------------------------------ #
    @property
    def is_open(self) -> bool:
        return self._repository is not None

    def open(self) -> None:
        """Create the connection pool and apply migrations; idempotent."""

        with self._lock:
            if self._repository is not None:
                return
            try:
                pool = self._pool_factory(self._settings)
            except psycopg2.Error as exc:
                raise PersistenceError(f"Failed to open summary database: {exc}") from exc
            self._pool = pool

            if self._auto_migrate:
                try:
                    with self._pool_connection() as connection:
                        apply_migrations(connection)
                except PersistenceError:
                    self._pool = None
                    pool.close()
                    raise

            self._repository = SummaryRepository(self._pool_connection)
            self._console.log("Summary store opened")

    def close(self) -> None:
        """Close pooled connections. Committed records are unaffected."""

        with self._lock:
            pool, self._pool = self._pool, None
            self._repository = None
            if pool is None:
                return
            try:
                pool.close()
            except psycopg2.Error as exc:
                self._console.log(f"[yellow]Error while closing summary database:[/yellow] {exc}")
                return
            self._console.log("Summary store closed")

    def __enter__(self) -> "SummaryStore":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #
    def store_summary(self, video_id: str, summary: str) -> VideoSummary:
        """Insert or replace the summary for ``video_id``.

        Repeated calls leave exactly one record whose text is the most recent summary;
        ``created_at`` keeps its first value and ``updated_at`` advances.

        Raises
        ------
        InvalidInputError
            If ``video_id`` or ``summary`` is empty.
        PersistenceError
            If the database rejects the write.
        """

        require_text(video_id, "videoId")
        require_text(summary, "summary")
        try:
            record = self._require_repository().upsert(video_id, summary)
        except PersistenceError as exc:
            self._console.log(f"[red]Failed to store summary for video {video_id}:[/red] {exc}")
            raise
        self._console.log(f"Stored summary for video: {video_id}")
        return record

    def fetch_summary(self, video_id: str) -> Optional[VideoSummary]:
        """Return the stored summary for ``video_id`` or ``None`` when absent."""

        require_text(video_id, "videoId")
        try:
            record = self._require_repository().find_by_video_id(video_id)
        except PersistenceError as exc:
            self._console.log(f"[red]Failed to fetch summary for video {video_id}:[/red] {exc}")
            raise
        if record is not None:
            self._console.log(f"Retrieved summary for video: {video_id}")
        return record

    def delete_summary(self, video_id: str) -> bool:
        """Remove the summary for ``video_id``; return whether one existed."""

        require_text(video_id, "videoId")
        try:
            deleted = self._require_repository().delete_by_video_id(video_id)
        except PersistenceError as exc:
            self._console.log(f"[red]Failed to delete summary for video {video_id}:[/red] {exc}")
            raise
        if deleted:
            self._console.log(f"Deleted summary for video: {video_id}")
        return deleted

    def list_summaries(self) -> list[VideoSummary]:
        """Return all stored summaries, most recently updated first."""

        try:
            return self._require_repository().list_recent()
        except PersistenceError as exc:
            self._console.log(f"[red]Failed to list video summaries:[/red] {exc}")
            raise

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #
    def _require_repository(self) -> SummaryRepository:
        repository = self._repository
        if repository is None:
            raise PersistenceError("Summary store is not open")
        return repository

    @contextmanager
    def _pool_connection(self) -> Iterator[PsycopgConnection]:
        pool = self._pool
        if pool is None:
            raise PersistenceError("Summary store is not open")
        try:
            with pool.connection() as connection:
                yield connection
        except psycopg2.Error as exc:
            raise PersistenceError(f"Summary database connection failed: {exc}") from exc


__all__ = ["PoolFactory", "SummaryStore"]
