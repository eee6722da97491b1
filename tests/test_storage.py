"""Tests for the summary store lifecycle and validation."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import psycopg2
import pytest
from rich.console import Console

from youtube_tools.config.settings import Settings
from youtube_tools.db.connection import DatabasePool
from youtube_tools.db.repositories import RepositoryError
from youtube_tools.errors import InvalidInputError, PersistenceError
from youtube_tools.models.summary import VideoSummary
from youtube_tools.services import storage as storage_module
from youtube_tools.services.storage import SummaryStore

VIDEO_ID = "dQw4w9WgXcQ"


@pytest.fixture
def repository(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    instance = MagicMock()
    monkeypatch.setattr(storage_module, "SummaryRepository", MagicMock(return_value=instance))
    return instance


@pytest.fixture
def migrations(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    apply = MagicMock(return_value=["001_create_video_summaries.sql"])
    monkeypatch.setattr(storage_module, "apply_migrations", apply)
    return apply


@pytest.fixture
def pool() -> MagicMock:
    return MagicMock(spec=DatabasePool)


@pytest.fixture
def store(settings: Settings, console: Console, pool: MagicMock, repository: MagicMock, migrations: MagicMock) -> SummaryStore:
    summary_store = SummaryStore(settings=settings, console=console, pool_factory=lambda _: pool)
    summary_store.open()
    return summary_store


def _record(summary: str = "a summary") -> VideoSummary:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return VideoSummary(video_id=VIDEO_ID, summary=summary, created_at=now, updated_at=now)


def test_close_without_open_is_safe(settings: Settings, console: Console) -> None:
    summary_store = SummaryStore(settings=settings, console=console)
    summary_store.close()
    summary_store.close()
    assert not summary_store.is_open


def test_open_applies_migrations_once(store: SummaryStore, pool: MagicMock, migrations: MagicMock) -> None:
    store.open()

    assert store.is_open
    migrations.assert_called_once()
    pool.connection.assert_called_once()


def test_close_releases_pool(store: SummaryStore, pool: MagicMock) -> None:
    store.close()
    store.close()

    pool.close.assert_called_once()
    assert not store.is_open


def test_open_failure_is_persistence_error(settings: Settings, console: Console) -> None:
    def broken_factory(_: Settings) -> DatabasePool:
        raise psycopg2.OperationalError("connection refused")

    summary_store = SummaryStore(settings=settings, console=console, pool_factory=broken_factory)

    with pytest.raises(PersistenceError, match="connection refused"):
        summary_store.open()
    summary_store.close()
    assert not summary_store.is_open


def test_migration_failure_closes_pool(
    settings: Settings, console: Console, pool: MagicMock, repository: MagicMock, migrations: MagicMock
) -> None:
    migrations.side_effect = RepositoryError("Migration failed: syntax error")
    summary_store = SummaryStore(settings=settings, console=console, pool_factory=lambda _: pool)

    with pytest.raises(PersistenceError):
        summary_store.open()

    pool.close.assert_called_once()
    assert not summary_store.is_open


def test_operations_require_open_store(settings: Settings, console: Console) -> None:
    summary_store = SummaryStore(settings=settings, console=console)
    with pytest.raises(PersistenceError, match="not open"):
        summary_store.fetch_summary(VIDEO_ID)


def test_store_summary_upserts(store: SummaryStore, repository: MagicMock, console: Console) -> None:
    repository.upsert.return_value = _record("fresh")

    record = store.store_summary(VIDEO_ID, "fresh")

    repository.upsert.assert_called_once_with(VIDEO_ID, "fresh")
    assert record.summary == "fresh"
    assert f"Stored summary for video: {VIDEO_ID}" in console.file.getvalue()


@pytest.mark.parametrize("video_id,summary", [("", "text"), (VIDEO_ID, ""), (VIDEO_ID, "   ")])
def test_store_summary_rejects_empty_fields(store: SummaryStore, repository: MagicMock, video_id: str, summary: str) -> None:
    with pytest.raises(InvalidInputError):
        store.store_summary(video_id, summary)
    repository.upsert.assert_not_called()


def test_fetch_summary_miss_returns_none(store: SummaryStore, repository: MagicMock) -> None:
    repository.find_by_video_id.return_value = None
    assert store.fetch_summary("neverstored") is None


def test_fetch_summary_hit(store: SummaryStore, repository: MagicMock) -> None:
    repository.find_by_video_id.return_value = _record()
    assert store.fetch_summary(VIDEO_ID).summary == "a summary"


def test_fetch_summary_rejects_empty_id(store: SummaryStore) -> None:
    with pytest.raises(InvalidInputError):
        store.fetch_summary("")


@pytest.mark.parametrize("existed", [True, False])
def test_delete_summary_reports_existence(store: SummaryStore, repository: MagicMock, existed: bool) -> None:
    repository.delete_by_video_id.return_value = existed
    assert store.delete_summary(VIDEO_ID) is existed


def test_list_summaries(store: SummaryStore, repository: MagicMock) -> None:
    repository.list_recent.return_value = [_record()]
    assert [record.video_id for record in store.list_summaries()] == [VIDEO_ID]


def test_persistence_failures_propagate(store: SummaryStore, repository: MagicMock, console: Console) -> None:
    repository.upsert.side_effect = RepositoryError("disk full")

    with pytest.raises(PersistenceError, match="disk full"):
        store.store_summary(VIDEO_ID, "text")

    assert "Failed to store summary" in console.file.getvalue()


def test_context_manager_opens_and_closes(
    settings: Settings, console: Console, pool: MagicMock, repository: MagicMock, migrations: MagicMock
) -> None:
    with SummaryStore(settings=settings, console=console, pool_factory=lambda _: pool) as summary_store:
        assert summary_store.is_open
    pool.close.assert_called_once()
