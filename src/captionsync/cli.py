# src/captionsync/cli.py
"""
captionsync Command Line Interface (CLI).

This module implements the user-facing terminal interface using `typer` and
`rich`. It wires the caption source, the transcript writer and the optional
translator into a :class:`DualCadenceScheduler` and runs it until the caption
window closes or the user presses Ctrl-C.

Usage
-----
    # Save Live Captions to a transcript, one record per minute
    $ captionsync --file meeting.txt

    # Also translate French captions to English every 10 seconds
    $ captionsync --file meeting.txt --translate fr --translate-host http://127.0.0.1:5000

    # Rehearse without Live Captions: follow a text file instead
    $ captionsync --file out.txt --source-file captions.txt --interval 2
"""

from __future__ import annotations

import asyncio
import signal
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from captionsync import __version__
from captionsync.capture.base import CaptureSource
from captionsync.capture.live_captions import LiveCaptionsSource
from captionsync.capture.text_file import TextFileSource
from captionsync.core.settings import get_logger, load_settings
from captionsync.pipelines.dual_cadence import (
    CaptionEngine,
    DualCadenceScheduler,
    ShutdownReason,
)
from captionsync.sinks.translation import TranslationSink
from captionsync.sinks.writer import CaptionWriter
from captionsync.translate.client import TranslateClient
from captionsync.translate.languages import Language

# Ensure env vars (like LOG_LEVEL) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="captionsync: save Live Captions to a file and optionally translate them.",
    rich_markup_mode="markdown",
    add_completion=False,
)
console = Console()
logger = get_logger("captionsync.cli")

MIN_INTERVAL_MINUTES = 1
MAX_INTERVAL_MINUTES = 10


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"captionsync {__version__}")
        raise typer.Exit()


def _open_source(source_file: Path | None) -> AbstractContextManager[CaptureSource]:
    """Return a context manager yielding the configured caption source."""
    if source_file is not None:
        return nullcontext(TextFileSource(source_file))
    return LiveCaptionsSource()


def _source_available(source_file: Path | None) -> bool:
    if source_file is not None:
        return TextFileSource(source_file).is_available()
    return LiveCaptionsSource().is_available()


async def _run_scheduler(scheduler: DualCadenceScheduler) -> ShutdownReason:
    """Run ``scheduler`` with Ctrl-C mapped to its cancel event."""
    loop = asyncio.get_running_loop()

    def _request_stop(signum: int, frame: object) -> None:
        loop.call_soon_threadsafe(scheduler.cancel)

    previous = signal.signal(signal.SIGINT, _request_stop)
    try:
        return await scheduler.run()
    finally:
        signal.signal(signal.SIGINT, previous)


def run_until_shutdown(scheduler: DualCadenceScheduler) -> ShutdownReason:
    """Block until the scheduler stops; the seam tests patch."""
    return asyncio.run(_run_scheduler(scheduler))


# --------------------------------------------------------------------------- #
# Command
# --------------------------------------------------------------------------- #


# Fixed (MyPy): Untyped decorator workaround
@app.command()  # type: ignore[misc]
def main(
    file: Annotated[
        Path,
        typer.Option(
            "--file",
            "-f",
            dir_okay=False,
            help="Name of the file to append captions to.",
        ),
    ],
    translate: Annotated[
        Language | None,
        typer.Option(
            "--translate",
            help="Enable translation from this source language to English.",
            case_sensitive=False,
        ),
    ] = None,
    translate_host: Annotated[
        str | None,
        typer.Option(
            "--translate-host",
            help="LibreTranslate server host (requires --translate).",
        ),
    ] = None,
    interval: Annotated[
        int,
        typer.Option(
            "--interval",
            "-i",
            min=MIN_INTERVAL_MINUTES,
            max=MAX_INTERVAL_MINUTES,
            help="Minutes between transcript saves.",
        ),
    ] = 1,
    source_file: Annotated[
        Path | None,
        typer.Option(
            "--source-file",
            dir_okay=False,
            help="Follow this text file instead of the Live Captions window.",
        ),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """
    Save new Live Captions lines to FILE until the caption window closes.

    Lines are written every INTERVAL minutes under a `[date][time]` header.
    With `--translate`, new lines are also translated to English every few
    seconds and printed to the terminal.
    """
    if translate_host is not None and translate is None:
        raise typer.BadParameter(
            "--translate-host requires --translate.", param_hint="--translate-host"
        )

    cfg = load_settings()
    logger.info("captionsync running.")

    if not _source_available(source_file):
        console.print("[bold red]Please start Live Captions first. Program exiting.[/bold red]")
        raise typer.Exit(code=1)

    translator: TranslationSink | None = None
    if translate is not None:
        client = TranslateClient.from_settings(cfg, host=translate_host)
        translator = TranslationSink(client, translate)

    try:
        with _open_source(source_file) as source:
            engine = CaptionEngine(source=source, writer=CaptionWriter(file), translator=translator)
            scheduler = DualCadenceScheduler(
                engine,
                fast_interval=cfg.check_interval_seconds,
                slow_interval=interval * 60.0,
            )

            target = f" → en from {translate.value}" if translate is not None else ""
            console.print(
                Panel.fit(
                    f"[bold cyan]captionsync[/bold cyan] is running now{target}\n"
                    f"Saving content into [u]{file}[/u] every {interval} min. "
                    "Ctrl-C to exit.",
                    border_style="cyan",
                )
            )

            reason = run_until_shutdown(scheduler)
    except RuntimeError as e:
        console.print(f"[bold red]❌ Initialization Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    if reason is ShutdownReason.SOURCE_GONE:
        console.print("Live Captions is not running. Program exiting.")
    else:
        console.print("Interrupted. Captions saved. Program exiting.")
    raise typer.Exit(code=0)


if __name__ == "__main__":
    app()
