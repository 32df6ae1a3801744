"""Unit tests for the per-consumer sync buffer."""

from __future__ import annotations

from captionsync.core.buffer import SyncBuffer


def test_fresh_buffer_treats_everything_as_new() -> None:
    """Before the first advance the whole snapshot is the delta."""
    buf = SyncBuffer("persistence")
    assert not buf.is_primed
    assert buf.peek("a\nb") == "a\nb"


def test_peek_does_not_mutate() -> None:
    """`peek` is side-effect free; only `advance` moves the buffer."""
    buf = SyncBuffer("translation")
    buf.peek("a")
    assert buf.snapshot == "" and buf.advances == 0

    buf.advance("a")
    assert buf.snapshot == "a" and buf.is_primed and buf.advances == 1
    assert buf.peek("a\nb") == "b\n"


def test_two_buffers_deduplicate_independently() -> None:
    """Buffers sampling the same stream at different rates never share state."""
    stream = ["l1", "l1\nl2", "l1\nl2\nl3", "l2\nl3\nl4"]
    fast = SyncBuffer("translation")
    slow = SyncBuffer("persistence")

    fast_deltas = []
    for snap in stream:
        fast_deltas.append(fast.peek(snap))
        fast.advance(snap)

    slow_deltas = []
    for snap in (stream[1], stream[3]):
        slow_deltas.append(slow.peek(snap))
        slow.advance(snap)

    assert fast_deltas == ["l1", "l2\n", "l3\n", "l4\n"]
    assert slow_deltas == ["l1\nl2", "l3\nl4\n"]
