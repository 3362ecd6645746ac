"""Main Typer application for mediascribe."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mediascribe.cli.errorhandler import handle_cli_errors, report_failure
from mediascribe.config import DEFAULT_OUTPUT, SUPPORTED_MODELS, MediascribeConfig
from mediascribe.exceptions import MediaNotFoundError
from mediascribe.instructions import read_instructions
from mediascribe.logging_setup import configure_logging, console
from mediascribe.media import MEDIA_TYPES
from mediascribe.pipeline import FileArtifactSink, Pipeline, PollingTick, Success, run_pipeline
from mediascribe.remote.gemini import GeminiMediaService
from mediascribe.remote.ports import RemoteHandle

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="mediascribe",
    help="Transcribe and analyse audio/video files with Google Gemini",
    add_completion=False,
    no_args_is_help=True,
)


class _PollingDots:
    """One dot per status check, closed with a line once Gemini is done."""

    def __init__(self) -> None:
        self._printed = False

    def tick(self, tick: PollingTick) -> None:
        if not self._printed:
            console.print("Waiting for Gemini to process the file", end="")
            self._printed = True
        console.print(".", end="")

    def settled(self, handle: RemoteHandle) -> None:
        if self._printed:
            console.print()
        console.print(f"File processed: {escape(handle.name)} ({handle.state.value})")


@app.command()
def transcribe(  # noqa: PLR0913
    *,
    media: Annotated[
        Path, typer.Option("--media", "-m", help="Audio or video file to transcribe")
    ],
    prompt: Annotated[
        Path, typer.Option("--prompt", "-p", help="File with the instructions for the model")
    ],
    output: Annotated[
        Path, typer.Option("--output", "-o", help="Where to save the transcription")
    ] = Path(DEFAULT_OUTPUT),
    gemini: Annotated[
        str | None, typer.Option("--gemini", "-g", help="Gemini model (see `mediascribe models`)")
    ] = None,
    poll_timeout: Annotated[
        float | None,
        typer.Option(help="Seconds to wait for Gemini to process the upload (default: no limit)"),
    ] = None,
    raw: Annotated[
        bool, typer.Option("--raw", help="Save the response as-is instead of extracting the JSON payload")
    ] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Verbose logs and full tracebacks")] = False,
) -> None:
    """Upload MEDIA to Gemini, apply the PROMPT instructions and save the result.

    Example: mediascribe transcribe -m meeting.mp4 -p prompt.md -o notes/meeting.md -g gemini-2.5-pro
    """
    with handle_cli_errors(debug=debug):
        config = MediascribeConfig.load(
            debug=debug or None,
            model=gemini,
            poll_timeout=poll_timeout,
            extraction="none" if raw else None,
        )

    configure_logging(debug=config.debug)

    with handle_cli_errors(debug=config.debug):
        if not media.is_file():
            raise MediaNotFoundError(media)
        instructions = read_instructions(prompt)

        output_dir = output.parent
        if not output_dir.exists():
            logger.info("Creating output directory: %s", output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)

        service = GeminiMediaService.from_api_key(
            config.require_api_key(),
            max_attempts=config.max_attempts,
        )
        sink = FileArtifactSink.beside(output, config.debug_filename)
        dots = _PollingDots()
        pipeline = Pipeline.from_config(service, config, sink=sink, on_tick=dots.tick, on_settled=dots.settled)

        console.print(f"📁 Media:  {escape(str(media))}")
        console.print(f"📋 Prompt: {escape(str(prompt))}")
        console.print(f"💾 Output: {escape(str(output))}")
        console.print(f"🤖 Model:  {config.model}")

        outcome = run_pipeline(pipeline, media, instructions, config.model)

    if not isinstance(outcome, Success):
        report_failure(outcome, debug=config.debug)

    console.print()
    console.print(
        Panel(
            f"[bold green]Transcription complete[/bold green]\n\n"
            f"Result: {escape(str(sink.output_path))}\n"
            f"Raw response: {escape(str(sink.debug_path))}",
            border_style="green",
        )
    )


@app.command()
def models() -> None:
    """List the supported Gemini models and media extensions."""
    table = Table(title="Gemini models")
    table.add_column("Model", style="cyan")
    for name in SUPPORTED_MODELS:
        table.add_row(name)
    console.print(table)

    media_table = Table(title="Media types")
    media_table.add_column("Extension", style="cyan")
    media_table.add_column("MIME type", style="green")
    media_table.add_column("Class", style="yellow")
    for ext, (mime_type, mime_class) in MEDIA_TYPES.items():
        media_table.add_row(ext, mime_type, mime_class.value)
    console.print(media_table)


def main() -> None:
    """Entry point used by the console script."""
    app()


if __name__ == "__main__":
    main()
