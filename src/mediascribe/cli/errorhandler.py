"""CLI error handling utilities."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import NoReturn

import typer
from rich.markup import escape
from rich.panel import Panel

from mediascribe.config import API_KEY_ENV_VARS
from mediascribe.exceptions import (
    ApiKeyNotFoundError,
    ConfigError,
    ErrorKind,
    InstructionsNotFoundError,
    PipelineError,
)
from mediascribe.logging_setup import console
from mediascribe.media import supported_extensions
from mediascribe.pipeline.outcome import Failure

_HINTS: dict[ErrorKind, str] = {
    ErrorKind.MEDIA_NOT_FOUND: "Check that the media path is correct and the file is readable.",
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: "Supported extensions: " + ", ".join(supported_extensions()),
    ErrorKind.UPLOAD_FAILED: "Check your API key and network connection.",
    ErrorKind.REMOTE_PROCESSING_FAILED: "Gemini could not process the file. Make sure it is not corrupted.",
    ErrorKind.GENERATION_FAILED: "Check the model name, your quota and the prompt.",
    ErrorKind.TRANSPORT_ERROR: "Check your network connection and try again.",
    ErrorKind.POLLING_TIMED_OUT: "Retry later or raise [bold]--poll-timeout[/bold].",
    ErrorKind.ARTIFACT_WRITE_FAILED: "Check that the output directory is writable.",
}


def _api_key_help() -> str:
    return (
        f"Set [bold]{API_KEY_ENV_VARS[0]}[/bold] in your environment or in a [bold].env[/bold] file.\n"
        "You can get one at [cyan]https://aistudio.google.com/app/apikey[/cyan]"
    )


def report_failure(outcome: Failure, *, debug: bool = False) -> NoReturn:
    """Print a failed run and exit with status 1 (re-raise the cause in debug mode)."""
    console.print()
    console.print(
        Panel(
            f"[red]{escape(outcome.message)}[/red]\n\n[yellow]{_HINTS[outcome.kind]}[/yellow]",
            title=f"Transcription failed: {outcome.kind.value}",
            border_style="red",
        )
    )
    if debug:
        raise outcome.error
    console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
    raise typer.Exit(1)


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, let the exception propagate for a full traceback.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except ApiKeyNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]API key missing:[/bold red] {escape(str(e))}")
        console.print(_api_key_help())
        raise typer.Exit(1) from e
    except InstructionsNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Prompt file error:[/bold red] {escape(str(e))}")
        console.print("Use an absolute path or a path relative to the current directory.")
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except PipelineError as e:
        report_failure(Failure.from_error(e), debug=debug)
