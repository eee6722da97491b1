"""Command-line interface package for YouTube Tools."""

from youtube_tools.cli.main import CLIApplication, create_app, main

__all__ = ["CLIApplication", "create_app", "main"]
