"""Tests for one synchronization step per consumer on `CaptionEngine`."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest

from captionsync.pipelines.dual_cadence import CadenceState, CaptionEngine
from captionsync.sinks.translation import TranslationSink
from captionsync.sinks.writer import CaptionWriter
from captionsync.translate.client import TranslationError
from captionsync.translate.languages import Language


class FakeTranslator(TranslationSink):
    """Records deliveries instead of calling a server."""

    def __init__(self, fail: bool = False) -> None:
        self.delivered: list[str] = []
        self.fail = fail
        self.source_language = Language.FRENCH

    async def deliver(self, text: str) -> str:
        self.delivered.append(text)
        if self.fail:
            raise TranslationError("server down")
        return text.upper()


class FailingWriter(CaptionWriter):
    """Writer whose appends fail until `healed` is set."""

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self.healed = False

    def append(self, timestamp: str, lines: str) -> Path:
        if not self.healed:
            raise OSError("disk full")
        return super().append(timestamp, lines)


def _engine(source: Any, tmp_path: Path, **kwargs: Any) -> CaptionEngine:
    kwargs.setdefault("writer", CaptionWriter(tmp_path / "out.txt"))
    return CaptionEngine(source=source, timestamp_factory=lambda: "[TS]", **kwargs)


def test_save_writes_record_and_advances(tmp_path: Path, scripted_source: Any) -> None:
    """First save writes the whole snapshot; later saves only new lines."""
    source = scripted_source(["a\nb", "a\nb\nc", "a\nb\nc"])
    engine = _engine(source, tmp_path)

    assert engine.save_current_captions() == "a\nb"
    assert engine.save_current_captions() == "c\n"
    assert engine.save_current_captions() == ""

    text = (tmp_path / "out.txt").read_text(encoding="utf-8")
    assert text == "[TS]\na\nb\n[TS]\nc\n\n"
    assert engine.persist_buffer.snapshot == "a\nb\nc"
    assert engine.persist_state is CadenceState.IDLE


def test_capture_failure_leaves_buffer_untouched(tmp_path: Path, scripted_source: Any) -> None:
    """A failed capture is an empty tick."""
    source = scripted_source(["a", None, "a\nb"])
    engine = _engine(source, tmp_path)

    engine.save_current_captions()
    assert engine.save_current_captions() is None
    assert engine.persist_buffer.snapshot == "a"
    assert engine.save_current_captions() == "b\n"


def test_blank_delta_is_not_written_but_advances(tmp_path: Path, scripted_source: Any) -> None:
    """Whitespace-only deltas produce no record; the buffer still moves."""
    source = scripted_source(["a", "a\n   "])
    engine = _engine(source, tmp_path)

    engine.save_current_captions()
    assert engine.save_current_captions() == ""
    assert engine.persist_buffer.snapshot == "a\n   "
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "[TS]\na\n"


def test_write_failure_keeps_buffer_for_retry(tmp_path: Path, scripted_source: Any) -> None:
    """Lines that never reached disk are retried on the next tick."""
    source = scripted_source(["a", "a\nb", "a\nb"])
    writer = FailingWriter(tmp_path / "out.txt")
    writer.healed = True
    engine = _engine(source, tmp_path, writer=writer)
    engine.save_current_captions()

    writer.healed = False
    with pytest.raises(OSError):
        engine.save_current_captions()
    assert engine.persist_buffer.snapshot == "a"
    assert engine.persist_state is CadenceState.IDLE

    writer.healed = True
    assert engine.save_current_captions() == "b\n"
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "[TS]\na\n[TS]\nb\n\n"


def test_translation_disabled_is_a_no_op(tmp_path: Path, scripted_source: Any) -> None:
    """Without a translator the fast cadence never captures."""
    source = scripted_source(["a"])
    engine = _engine(source, tmp_path)

    assert asyncio.run(engine.translate_new_content()) is None
    assert source.snapshot_calls == 0


def test_translation_failure_still_advances(tmp_path: Path, scripted_source: Any) -> None:
    """Failed translations are logged and not retried."""
    source = scripted_source(["hello", "hello\nworld"])
    translator = FakeTranslator(fail=True)
    engine = _engine(source, tmp_path, translator=translator)

    assert asyncio.run(engine.translate_new_content()) == "hello"
    assert asyncio.run(engine.translate_new_content()) == "world\n"
    assert translator.delivered == ["hello", "world\n"]
    assert engine.translate_buffer.snapshot == "hello\nworld"


def test_blank_translation_delta_is_not_sent(tmp_path: Path, scripted_source: Any) -> None:
    """Nothing is sent to the translator for whitespace-only content."""
    source = scripted_source(["  \n"])
    translator = FakeTranslator()
    engine = _engine(source, tmp_path, translator=translator)

    assert asyncio.run(engine.translate_new_content()) == ""
    assert translator.delivered == []
    assert engine.translate_buffer.snapshot == "  \n"


def test_buffers_are_independent(tmp_path: Path, scripted_source: Any) -> None:
    """Persistence and translation dedupe against their own last-seen point."""
    stream = ["l1", "l1\nl2", "l1\nl2\nl3", "l2\nl3\nl4"]
    source = scripted_source(stream)
    translator = FakeTranslator()
    engine = _engine(source, tmp_path, translator=translator)

    # Snapshots are handed out in order, one per capture.
    asyncio.run(engine.translate_new_content())
    engine.save_current_captions()
    asyncio.run(engine.translate_new_content())
    asyncio.run(engine.translate_new_content())
    engine.save_current_captions()

    assert translator.delivered == ["l1", "l2\nl3\n", "l4\n"]
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "[TS]\nl1\nl2\n[TS]\nl3\nl4\n\n"


def test_graceful_shutdown_swallows_failures(tmp_path: Path, scripted_source: Any) -> None:
    """The final drain never raises, even if the write fails."""
    source = scripted_source(["a"])
    engine = _engine(source, tmp_path, writer=FailingWriter(tmp_path / "out.txt"))

    engine.graceful_shutdown()
    assert engine.persist_buffer.snapshot == ""
