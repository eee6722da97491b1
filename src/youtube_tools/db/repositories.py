"""Generic repository abstractions for Postgres-backed persistence."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ClassVar, Generic, Mapping, Optional, Type, TypeVar

import psycopg2
from psycopg2.extensions import connection as PsycopgConnection
from psycopg2.extras import RealDictCursor

from youtube_tools.db import ConnectionFactory
from youtube_tools.errors import PersistenceError
from youtube_tools.models.base import ToolsBaseModel

ModelT = TypeVar("ModelT", bound=ToolsBaseModel)


class RepositoryError(PersistenceError):
    """Base exception raised for repository layer failures."""


class RecordNotFoundError(RepositoryError):
    """Raised when a requested record cannot be located."""


class BaseRepository(Generic[ModelT]):
    """Reusable building block for table-specific repositories.

    Every query runs inside one pooled transaction; driver errors are re-raised as
    :class:`RepositoryError` so callers never see raw ``psycopg2`` exceptions.
    """

    table_name: ClassVar[str]
    model_type: ClassVar[Type[ModelT]]

    def __init__(self, connection_factory: ConnectionFactory) -> None:
        self._connection_factory = connection_factory

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def fetch_one(self, where_clause: str, params: Mapping[str, object]) -> ModelT:
        """Return the first record matching the provided predicate."""

        query = f"SELECT * FROM {self.table_name} WHERE {where_clause} LIMIT 1"
        row = self._fetch_one(query, params)
        return self.model_type.model_validate(row)

    def fetch_all(
        self,
        where_clause: Optional[str] = None,
        params: Optional[Mapping[str, object]] = None,
        *,
        order_by: Optional[str] = None,
    ) -> list[ModelT]:
        """Return all records, optionally filtered by a predicate."""

        base_query = f"SELECT * FROM {self.table_name}"
        if where_clause:
            base_query = f"{base_query} WHERE {where_clause}"
        if order_by:
            base_query = f"{base_query} ORDER BY {order_by}"
        rows = self._fetch_many(base_query, params or {})
        return [self.model_type.model_validate(row) for row in rows]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _fetch_one(self, query: str, params: Mapping[str, object]) -> Mapping[str, object]:
        try:
            with self._connection() as connection:
                with connection.cursor(cursor_factory=RealDictCursor) as cursor:
                    cursor.execute(query, params)
                    row = cursor.fetchone()
        except psycopg2.Error as exc:
            raise RepositoryError(f"Query against {self.table_name} failed: {exc}") from exc
        if row is None:
            raise RecordNotFoundError(f"No records returned for query: {query!r}")
        return dict(row)

    def _fetch_many(self, query: str, params: Mapping[str, object]) -> list[Mapping[str, object]]:
        try:
            with self._connection() as connection:
                with connection.cursor(cursor_factory=RealDictCursor) as cursor:
                    cursor.execute(query, params)
                    rows = cursor.fetchall()
        except psycopg2.Error as exc:
            raise RepositoryError(f"Query against {self.table_name} failed: {exc}") from exc
        return [dict(row) for row in rows]

    def _execute(self, query: str, params: Mapping[str, object]) -> int:
        """Run a statement and return the number of affected rows."""

        try:
            with self._connection() as connection:
                with connection.cursor() as cursor:
                    cursor.execute(query, params)
                    return cursor.rowcount
        except psycopg2.Error as exc:
            raise RepositoryError(f"Statement against {self.table_name} failed: {exc}") from exc

    def _connection(self) -> AbstractContextManager[PsycopgConnection]:
        return self._connection_factory()


__all__ = [
    "BaseRepository",
    "RecordNotFoundError",
    "RepositoryError",
]
