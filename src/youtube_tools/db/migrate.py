"""Utilities for executing SQL migrations stored under `db/migrations`."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import psycopg2
from psycopg2.extensions import connection as PsycopgConnection
from psycopg2.extensions import cursor as PsycopgCursor
from rich.console import Console
from rich.table import Table

from youtube_tools.config.settings import Settings, get_settings
from youtube_tools.db.connection import connection_from_dsn
from youtube_tools.db.repositories import RepositoryError

MIGRATIONS_ROOT = Path(__file__).resolve().parent / "migrations"


def _load_migration_files(directory: Path) -> List[Path]:
    return sorted(directory.glob("*.sql"))


def _execute_sql_file(db_cursor: PsycopgCursor, migration_file: Path) -> None:
    statement = migration_file.read_text(encoding="utf-8")
    db_cursor.execute(statement)


def apply_migrations(connection: PsycopgConnection, *, directory: Path = MIGRATIONS_ROOT) -> List[str]:
    """Execute every migration in ``directory`` on ``connection`` and commit.

    All statements are idempotent (``IF NOT EXISTS``), so this is safe on every start.
    Returns the names of the applied files.
    """

    migrations = _load_migration_files(directory)
    applied: List[str] = []
    try:
        with connection.cursor() as db_cursor:
            for migration in migrations:
                _execute_sql_file(db_cursor, migration)
                applied.append(migration.name)
        connection.commit()
    except psycopg2.Error as exc:
        connection.rollback()
        raise RepositoryError(f"Migration failed: {exc}") from exc
    return applied


def run_migrations(console: Optional[Console] = None, settings: Optional[Settings] = None) -> None:
    """Execute all SQL migrations in order against ``DATABASE_URL``."""

    console = console or Console()
    settings = settings or get_settings()

    if not _load_migration_files(MIGRATIONS_ROOT):
        console.print("[yellow]No migrations found.[/yellow]")
        return

    try:
        connection = connection_from_dsn(str(settings.database_url))
    except psycopg2.Error as exc:
        raise RepositoryError(f"Could not connect to the summary database: {exc}") from exc

    table = Table(title="Database Migrations")
    table.add_column("Migration", style="cyan")
    table.add_column("Status", style="green")

    try:
        for name in apply_migrations(connection):
            table.add_row(name, "applied")
    except RepositoryError as exc:
        console.print(f"[red]Migration failed:[/red] {exc}")
        raise
    finally:
        connection.close()

    console.print(table)


def main() -> None:
    """Entry point for running migrations via `python -m youtube_tools.db.migrate`."""

    run_migrations()


if __name__ == "__main__":  # pragma: no cover
    main()
