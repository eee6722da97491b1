"""PostgreSQL connections for the summary store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from psycopg2 import connect
from psycopg2.extensions import connection as PsycopgConnection
from psycopg2.pool import PoolError, ThreadedConnectionPool

from youtube_tools.config.settings import Settings

APPLICATION_NAME = "youtube-tools-mcp"


class DatabasePool:
    """Thread-safe pool of connections, one transaction per checkout.

    Tool handlers run in worker threads, so this wraps ``ThreadedConnectionPool``.
    A checkout beyond ``max_connections`` raises :class:`psycopg2.pool.PoolError`.
    """

    def __init__(self, dsn: str, *, min_connections: int = 1, max_connections: int = 5) -> None:
        self._pool = ThreadedConnectionPool(
            min_connections, max_connections, dsn, application_name=APPLICATION_NAME
        )
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabasePool":
        return cls(
            str(settings.database_url),
            min_connections=settings.db_min_connections,
            max_connections=settings.db_max_connections,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @contextmanager
    def connection(self) -> Iterator[PsycopgConnection]:
        """Check out a connection; commit when the block exits cleanly, roll back otherwise."""

        if self._closed:
            raise PoolError("connection pool is closed")
        conn = self._pool.getconn()
        committed = False
        try:
            yield conn
            conn.commit()
            committed = True
        finally:
            if not committed:
                conn.rollback()
            self._pool.putconn(conn)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._pool.closeall()


def connection_from_dsn(dsn: str) -> PsycopgConnection:
    """Open a standalone connection outside the pool (migrations, diagnostics)."""

    return connect(dsn, application_name=APPLICATION_NAME)


__all__ = ["APPLICATION_NAME", "DatabasePool", "connection_from_dsn"]
