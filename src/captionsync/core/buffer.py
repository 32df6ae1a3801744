"""Rolling "last processed snapshot" owned by one consumer.

Each consumer (the transcript writer and the live translator) keeps its own
`SyncBuffer`. They read the same caption window at different moments, so each
one must deduplicate against the point *it* last processed, never against the
other consumer's.

Lifecycle
---------
1. A fresh buffer holds ``""``: everything captured next counts as new.
2. `peek(current)` computes the delta without touching the buffer.
3. The owner delivers the delta, then calls `advance(current)`.

Keeping `peek` and `advance` separate lets the owner decide whether a failed
delivery should still move the buffer forward.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from captionsync.core.diff import extract_new_lines, split_lines
from captionsync.core.settings import get_logger

logger = get_logger("captionsync.buffer")


@dataclass(slots=True)
class SyncBuffer:
    """Most recently processed snapshot for one consumer.

    Attributes
    ----------
    name : str
        Label used in logs (``"persistence"`` or ``"translation"``).
    snapshot : str
        Full text of the last snapshot passed to `advance`.
    advances : int
        How many times the buffer has been moved forward.
    """

    name: str
    snapshot: str = ""
    advances: int = field(default=0)

    @property
    def is_primed(self) -> bool:
        """Return True once the buffer holds a non-empty snapshot."""
        return bool(self.snapshot)

    def peek(self, current: str) -> str:
        """Return the new content of ``current`` relative to this buffer."""
        return extract_new_lines(self.snapshot, current)

    def advance(self, current: str) -> None:
        """Record ``current`` as fully processed."""
        self.snapshot = current
        self.advances += 1
        logger.debug(
            "Buffer %s advanced to %d line(s).", self.name, len(split_lines(current))
        )


__all__ = ["SyncBuffer"]
