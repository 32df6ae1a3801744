"""Append-only transcript writer.

Every non-empty delta becomes one record in the output file::

    [2025-11-12][14:03:27]
    first new caption line
    second new caption line
    <blank line>

- The header uses local time, formatted with :data:`TIMESTAMP_FORMAT`.
- The file (and its parent directories) are created on first write.
- Records are never rewritten; the file only grows.
- Each append is flushed and ``fsync``-ed before returning, so the caller
  may treat a successful return as "durably on disk".
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from captionsync.core.settings import get_logger

logger = get_logger("captionsync.writer")

TIMESTAMP_FORMAT = "[%Y-%m-%d][%H:%M:%S]"


def format_timestamp(moment: datetime | None = None) -> str:
    """Return the record header for ``moment`` (defaults to now, local time)."""
    return (moment or datetime.now()).strftime(TIMESTAMP_FORMAT)


class CaptionWriter:
    """Append timestamped caption records to a single file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.records_written = 0

    def append(self, timestamp: str, lines: str) -> Path:
        """Write one record and force it to disk.

        Raises
        ------
        OSError
            If the file cannot be opened, written or synced. Nothing is
            considered persisted in that case.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8", newline="\n") as f:
            f.write(timestamp + "\n")
            f.write(lines)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())

        self.records_written += 1
        logger.debug("Appended record %d to %s.", self.records_written, self.path)
        return self.path


__all__ = ["CaptionWriter", "TIMESTAMP_FORMAT", "format_timestamp"]
