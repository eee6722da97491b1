"""Command registration utilities for the YouTube Tools CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from youtube_tools.cli.commands import search, serve, summaries, transcript


def register_commands(app: typer.Typer, console: Console) -> None:
    """Attach command groups to the provided Typer application."""

    transcript.register(app, console)
    search.register(app, console)
    summaries.register(app, console)
    serve.register(app, console)


__all__ = ["register_commands"]
