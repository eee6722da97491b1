"""Typer application for the ``youtube-tools`` command."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from youtube_tools import __version__
from youtube_tools.cli.commands import register_commands

PROG_NAME = "youtube-tools"


class CLIApplication:
    """Builds the Typer app and registers every command against one console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self._app = typer.Typer(
            add_completion=False,
            rich_markup_mode="rich",
            no_args_is_help=True,
            help="YouTube transcripts, search and stored video summaries.",
        )
        self._register_version_option()
        register_commands(self._app, self.console)

    def _register_version_option(self) -> None:
        console = self.console

        def show_version(value: bool) -> None:
            if value:
                console.print(f"{PROG_NAME} {__version__}")
                raise typer.Exit()

        @self._app.callback()
        def root(
            version: bool = typer.Option(
                False, "--version", callback=show_version, is_eager=True, help="Show the version and exit."
            ),
        ) -> None:
            """YouTube transcripts, search and stored video summaries."""

    @property
    def app(self) -> typer.Typer:
        return self._app

    def run(self, *, args: Optional[list[str]] = None) -> None:
        self._app(prog_name=PROG_NAME, args=args)


def create_app(console: Optional[Console] = None) -> typer.Typer:
    return CLIApplication(console=console).app


def main() -> None:
    """Entry point for the installed script and ``python -m youtube_tools``."""

    CLIApplication().run()


__all__ = ["CLIApplication", "PROG_NAME", "create_app", "main"]
