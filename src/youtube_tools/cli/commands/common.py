"""Exit codes and error reporting shared by the CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console

from youtube_tools.errors import (
    InvalidInputError,
    MissingCredentialError,
    PersistenceError,
    TranscriptUnavailableError,
    UpstreamRejectedError,
    UpstreamUnavailableError,
    VideoUnavailableError,
)


class ExitCode:
    """Mapping of meaningful CLI exit codes."""

    SUCCESS = 0
    INVALID_INPUT = 1
    VIDEO_UNAVAILABLE = 2
    NETWORK_ERROR = 3
    PROCESSING_ERROR = 4
    STORAGE_ERROR = 5
    CONFIGURATION_ERROR = 6


_EXIT_CODES: tuple[tuple[type[Exception], int], ...] = (
    (InvalidInputError, ExitCode.INVALID_INPUT),
    (MissingCredentialError, ExitCode.CONFIGURATION_ERROR),
    (VideoUnavailableError, ExitCode.VIDEO_UNAVAILABLE),
    (TranscriptUnavailableError, ExitCode.VIDEO_UNAVAILABLE),
    (UpstreamRejectedError, ExitCode.PROCESSING_ERROR),
    (UpstreamUnavailableError, ExitCode.NETWORK_ERROR),
    (PersistenceError, ExitCode.STORAGE_ERROR),
)


def exit_code_for(exc: Exception) -> int:
    for error_type, code in _EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    return ExitCode.PROCESSING_ERROR


def fail(console: Console, exc: Exception) -> NoReturn:
    """Print ``exc`` and exit with the code matching its category."""

    console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=exit_code_for(exc)) from exc


def diagnostics_console() -> Console:
    """Console for service logs, kept off stdout so piped output stays clean."""

    return Console(stderr=True)


__all__ = ["ExitCode", "diagnostics_console", "exit_code_for", "fail"]
