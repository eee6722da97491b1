"""CLI commands for running the MCP server and database migrations."""

from __future__ import annotations

import typer
from rich.console import Console

from youtube_tools.cli.commands.common import fail
from youtube_tools.db.migrate import run_migrations
from youtube_tools.errors import YouTubeToolsError


def register(app: typer.Typer, console: Console) -> None:
    """Register the ``serve`` and ``migrate`` commands."""

    @app.command("serve")
    def serve() -> None:
        """Run the MCP server over stdio until the client disconnects."""

        from youtube_tools.server import main as run_server

        run_server()

    @app.command("migrate")
    def migrate() -> None:
        """Create the summary table and indexes if they do not exist."""

        try:
            run_migrations(console=console)
        except YouTubeToolsError as exc:
            fail(console, exc)


__all__ = ["register"]
