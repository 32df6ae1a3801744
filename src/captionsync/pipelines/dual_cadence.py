"""
Dual-cadence caption pipeline: one caption source, two independent consumers.

Flow Overview
-------------
A single asyncio task waits on three events and handles exactly one per
iteration:

1. **Fast tick** (default every 10 s)
   - Check that the caption source still exists. If it is gone, drain and
     stop with :attr:`ShutdownReason.SOURCE_GONE`.
   - If translation is enabled, capture, diff against the *translation*
     buffer and forward any non-blank delta to the :class:`TranslationSink`.

2. **Slow tick** (default every minute)
   - Capture, diff against the *persistence* buffer and append any non-blank
     delta to the transcript with a timestamp header.

3. **Cancellation** (Ctrl-C)
   - Drain and stop with :attr:`ShutdownReason.CANCELLED`.

Draining means one last best-effort persistence pass. The translation buffer
is not drained: translating captions of a session that has ended is of no use.

Buffer rules
------------
- A failed capture leaves the cadence's buffer untouched.
- The persistence buffer only advances once the delta is on disk. A write
  failure keeps it where it was so the same lines are retried next tick.
- The translation buffer advances even if translation fails; stale captions
  are not retried.

Design Principles
-----------------
- **Explicit context**: everything mutable lives on :class:`CaptionEngine`;
  there is no module-level state.
- **Strict serialization**: handlers never overlap, so the buffers need no
  locks. A slow capture or translation delays later ticks; missed ticks are
  skipped rather than queued.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from captionsync.capture.base import CaptureError, CaptureSource
from captionsync.core.buffer import SyncBuffer
from captionsync.core.diff import is_blank
from captionsync.core.settings import get_logger
from captionsync.sinks.translation import TranslationSink
from captionsync.sinks.writer import CaptionWriter, format_timestamp
from captionsync.translate.client import TranslationError

logger = get_logger("captionsync.pipeline")


class CadenceState(str, Enum):
    """Where a cadence is within one tick."""

    IDLE = "idle"
    CAPTURING = "capturing"
    DIFFING = "diffing"
    DELIVERING = "delivering"


class ShutdownReason(str, Enum):
    """Why :meth:`DualCadenceScheduler.run` returned."""

    SOURCE_GONE = "source_gone"
    CANCELLED = "cancelled"


# --------------------------------------------------------------------------- #
# Engine: owned state + one synchronization step per consumer
# --------------------------------------------------------------------------- #


@dataclass
class CaptionEngine:
    """Capture source, both sync buffers and both sinks.

    Attributes
    ----------
    source : CaptureSource
        Where snapshots come from.
    writer : CaptionWriter
        Persistence sink for the slow cadence.
    translator : TranslationSink | None
        Translation sink for the fast cadence; ``None`` disables translation.
    timestamp_factory : Callable[[], str]
        Produces the record header for each persisted delta.
    """

    source: CaptureSource
    writer: CaptionWriter
    translator: TranslationSink | None = None
    timestamp_factory: Callable[[], str] = format_timestamp
    persist_buffer: SyncBuffer = field(default_factory=lambda: SyncBuffer("persistence"))
    translate_buffer: SyncBuffer = field(default_factory=lambda: SyncBuffer("translation"))
    persist_state: CadenceState = CadenceState.IDLE
    translate_state: CadenceState = CadenceState.IDLE

    @property
    def translation_enabled(self) -> bool:
        return self.translator is not None

    def save_current_captions(self) -> str | None:
        """Persist whatever is new since the last successful save.

        Returns
        -------
        str | None
            The delta that was written (``""`` when nothing new was found), or
            ``None`` if the source could not be read this time.

        Raises
        ------
        OSError
            If the write fails. The persistence buffer is left unadvanced.
        """
        self.persist_state = CadenceState.CAPTURING
        try:
            current = self.source.snapshot()
        except CaptureError as exc:
            logger.debug("Persistence capture skipped: %s", exc)
            self.persist_state = CadenceState.IDLE
            return None

        try:
            self.persist_state = CadenceState.DIFFING
            delta = self.persist_buffer.peek(current)
            if is_blank(delta):
                delta = ""
            else:
                self.persist_state = CadenceState.DELIVERING
                self.writer.append(self.timestamp_factory(), delta)
            self.persist_buffer.advance(current)
            return delta
        finally:
            self.persist_state = CadenceState.IDLE

    async def translate_new_content(self) -> str | None:
        """Translate whatever is new since the last translation tick.

        Returns the delta handed to the translator (``""`` when nothing new
        was found), or ``None`` if translation is disabled or the source could
        not be read. Translation failures are logged, not raised.
        """
        if self.translator is None:
            return None

        self.translate_state = CadenceState.CAPTURING
        try:
            current = self.source.snapshot()
        except CaptureError as exc:
            logger.debug("Translation capture skipped: %s", exc)
            self.translate_state = CadenceState.IDLE
            return None

        try:
            self.translate_state = CadenceState.DIFFING
            delta = self.translate_buffer.peek(current)
            if is_blank(delta):
                delta = ""
            else:
                self.translate_state = CadenceState.DELIVERING
                try:
                    await self.translator.deliver(delta)
                except TranslationError as exc:
                    logger.error("Translation error: %s", exc)
            self.translate_buffer.advance(current)
            return delta
        finally:
            self.translate_state = CadenceState.IDLE

    def graceful_shutdown(self) -> None:
        """Make one last best-effort save; never raises."""
        try:
            self.save_current_captions()
        except Exception as exc:
            logger.error("Final save failed, last captions may be lost: %s", exc)


# --------------------------------------------------------------------------- #
# Scheduler: single-task event loop over fast tick / slow tick / cancellation
# --------------------------------------------------------------------------- #


def _next_deadline(previous: float, period: float, now: float) -> float:
    """Return the first deadline after ``now`` on the ``previous + k*period`` grid."""
    missed = int((now - previous) // period)
    return previous + (missed + 1) * period


class DualCadenceScheduler:
    """Drive a :class:`CaptionEngine` on two independent timers.

    Both timers fire immediately when `run()` starts and then once per
    period. When both are due, the one with the earlier deadline is handled
    first, with ties going to the fast tick. An unexpected error in a handler
    is logged and the loop carries on.
    """

    def __init__(
        self,
        engine: CaptionEngine,
        *,
        fast_interval: float,
        slow_interval: float,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        if fast_interval <= 0 or slow_interval <= 0:
            raise ValueError("Scheduler intervals must be positive.")
        self.engine = engine
        self.fast_interval = fast_interval
        self.slow_interval = slow_interval
        self.cancel_event = cancel_event or asyncio.Event()
        self.fast_ticks = 0
        self.slow_ticks = 0

    def cancel(self) -> None:
        """Request a graceful stop; observed before the next tick."""
        self.cancel_event.set()

    async def run(self) -> ShutdownReason:
        """Loop until the source disappears or cancellation is requested."""
        loop = asyncio.get_running_loop()
        start = loop.time()
        next_fast = start
        next_slow = start

        while True:
            timeout = max(0.0, min(next_fast, next_slow) - loop.time())
            if await self._wait_for_cancel(timeout):
                return self._shutdown(ShutdownReason.CANCELLED)

            now = loop.time()
            if next_fast <= now and next_fast <= next_slow:
                next_fast = _next_deadline(next_fast, self.fast_interval, now)
                try:
                    alive = await self._on_fast_tick()
                except Exception:
                    logger.exception("Check tick failed; continuing.")
                    alive = True
                if not alive:
                    return self._shutdown(ShutdownReason.SOURCE_GONE)
            elif next_slow <= now:
                next_slow = _next_deadline(next_slow, self.slow_interval, now)
                try:
                    self._on_slow_tick()
                except Exception:
                    logger.exception("Save tick failed; continuing.")

    async def _wait_for_cancel(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; return True if cancelled."""
        if self.cancel_event.is_set():
            return True
        if timeout <= 0:
            return False
        try:
            await asyncio.wait_for(self.cancel_event.wait(), timeout)
        except TimeoutError:
            return False
        return True

    async def _on_fast_tick(self) -> bool:
        """Liveness check plus translation; return False if the source is gone."""
        self.fast_ticks += 1
        logger.info("Running check every %gs.", self.fast_interval)
        if not self.engine.source.is_available():
            logger.info("Caption source is not running. Shutting down.")
            return False
        if self.engine.translation_enabled:
            await self.engine.translate_new_content()
        return True

    def _on_slow_tick(self) -> None:
        self.slow_ticks += 1
        logger.info("Saving content to file every %gs.", self.slow_interval)
        try:
            self.engine.save_current_captions()
        except OSError as exc:
            logger.error("Failed to save file: %s", exc)

    def _shutdown(self, reason: ShutdownReason) -> ShutdownReason:
        logger.info("Graceful shutdown (%s).", reason.value)
        self.engine.graceful_shutdown()
        return reason


__all__ = [
    "CadenceState",
    "CaptionEngine",
    "DualCadenceScheduler",
    "ShutdownReason",
]
