"""Forward confirmed caption lines to the translator and show the result.

The translation client is blocking (``urllib``), so the sink hands it to a
worker thread with :func:`asyncio.to_thread` and awaits it. The scheduler
still handles one tick at a time: the next tick waits for this call.
"""

from __future__ import annotations

import asyncio

from rich.console import Console
from rich.markup import escape

from captionsync.translate.client import TranslateClient
from captionsync.translate.languages import TARGET_LANGUAGE, Language


class TranslationSink:
    """Translate deltas from one source language and print them to stderr."""

    def __init__(
        self,
        client: TranslateClient,
        source_language: Language,
        console: Console | None = None,
    ) -> None:
        self.client = client
        self.source_language = source_language
        self.console = console or Console(stderr=True)

    async def deliver(self, text: str) -> str:
        """Translate ``text`` and print it; return the translation.

        Raises
        ------
        TranslationError
            Propagated from the client; the caller decides what it means.
        """
        translated = await asyncio.to_thread(
            self.client.translate, text, self.source_language
        )
        self.console.print(f"[green]\\[{TARGET_LANGUAGE}][/green]{escape(translated)}")
        return translated


__all__ = ["TranslationSink"]
